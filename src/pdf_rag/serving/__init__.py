"""
Serving — FastAPI application for ingestion and question answering.
"""

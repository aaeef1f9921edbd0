"""
Ingestion — PDF extraction, chunking, embedding, and indexing.

This module is responsible for the ETL-like pipeline that converts PDF
source documents into embedded chunks stored in a vector collection.
"""

"""
Retrieval — vector index backends, provisioning, and top-k search.

This module wraps the vector index behind a clean interface so that
ingestion and the query engine never need to know which DB is backing
them.

Public surface
--------------
- :class:`VectorStoreBase` — abstract backend (subclass for Qdrant, etc.).
- :class:`ChromaVectorStore` — default Chroma backend.
- :class:`InMemoryVectorStore` — exact in-process backend.
- :func:`ensure_collection` — idempotent check-then-create provisioning.
- :class:`SemanticRetriever` — top-k search over one collection.
- :class:`Document`, :class:`EmbeddedDocument`, :class:`ScoredDocument`,
  :class:`DistanceMetric` — data models.
"""

from pdf_rag.retrieval.base import VectorStoreBase
from pdf_rag.retrieval.memory_store import InMemoryVectorStore
from pdf_rag.retrieval.models import (
    CollectionInfo,
    DistanceMetric,
    Document,
    EmbeddedDocument,
    ScoredDocument,
)
from pdf_rag.retrieval.provisioner import ensure_collection
from pdf_rag.retrieval.retriever import SemanticRetriever

__all__ = [
    "ChromaVectorStore",
    "CollectionInfo",
    "DistanceMetric",
    "Document",
    "EmbeddedDocument",
    "InMemoryVectorStore",
    "ScoredDocument",
    "SemanticRetriever",
    "VectorStoreBase",
    "ensure_collection",
]


def __getattr__(name: str):  # noqa: ANN001
    """Lazy-import ChromaVectorStore to avoid pulling in chromadb at import time."""
    if name == "ChromaVectorStore":
        from pdf_rag.retrieval.chroma_store import ChromaVectorStore

        return ChromaVectorStore
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")

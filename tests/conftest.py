"""Shared pytest configuration and fixtures."""

from __future__ import annotations

import pytest

from pdf_rag.config import Settings
from pdf_rag.retrieval.memory_store import InMemoryVectorStore

from rag_fakes import DIMS, KeywordEmbeddings


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "integration: marks tests requiring external services")


@pytest.fixture()
def test_settings() -> Settings:
    return Settings(
        vector_store="memory",
        collection_name="test-collection",
        vector_dimensions=DIMS,
        chunk_size=40,
        retrieval_top_k=2,
        openai_api_key="test-key",
    )


@pytest.fixture()
def embeddings() -> KeywordEmbeddings:
    return KeywordEmbeddings()


@pytest.fixture()
def memory_store() -> InMemoryVectorStore:
    return InMemoryVectorStore()

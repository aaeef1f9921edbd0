"""Build the configured vector-store backend."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pdf_rag.retrieval.base import VectorStoreBase

if TYPE_CHECKING:
    from pdf_rag.config import Settings


def get_vector_store(config: Settings) -> VectorStoreBase:
    """Return the backend selected by ``config.vector_store``.

    ``"chroma"`` connects to the Chroma server from the settings;
    ``"memory"`` keeps everything in-process (lost on exit).
    """
    backend = config.vector_store.lower()
    if backend == "memory":
        from pdf_rag.retrieval.memory_store import InMemoryVectorStore

        return InMemoryVectorStore()
    if backend == "chroma":
        from pdf_rag.retrieval.chroma_store import ChromaVectorStore

        return ChromaVectorStore(
            host=config.chroma_host,
            port=config.chroma_port,
            api_key=config.chroma_api_key,
            ssl=config.chroma_ssl,
        )
    raise ValueError(f"Unsupported vector_store={config.vector_store!r}; expected 'chroma' or 'memory'")

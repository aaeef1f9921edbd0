"""Wire settings into concrete components — shared by the CLI and the app."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from pdf_rag.generation.engine import RAGQueryEngine
from pdf_rag.generation.llm import get_llm
from pdf_rag.ingestion.embedder import get_embedding_function
from pdf_rag.ingestion.pipeline import IngestionPipeline
from pdf_rag.retrieval.factory import get_vector_store
from pdf_rag.retrieval.retriever import SemanticRetriever

if TYPE_CHECKING:
    from langchain_core.embeddings import Embeddings
    from langchain_core.language_models import BaseChatModel

    from pdf_rag.config import Settings
    from pdf_rag.ingestion.loader import DocumentExtractor
    from pdf_rag.retrieval.base import VectorStoreBase


@dataclass
class RagRuntime:
    """Ingestion pipeline and query engine sharing one store and one embedder."""

    config: Settings
    store: VectorStoreBase
    embeddings: Embeddings
    pipeline: IngestionPipeline
    engine: RAGQueryEngine


def build_runtime(
    config: Settings,
    *,
    store: VectorStoreBase | None = None,
    embeddings: Embeddings | None = None,
    llm: BaseChatModel | None = None,
    extractor: DocumentExtractor | None = None,
) -> RagRuntime:
    """Build every component from *config*; any of them can be injected instead."""
    store = store if store is not None else get_vector_store(config)
    embeddings = embeddings if embeddings is not None else get_embedding_function(config)
    llm = llm if llm is not None else get_llm(config)

    pipeline = IngestionPipeline.from_settings(config, store, embeddings, extractor)
    retriever = SemanticRetriever(
        store,
        embeddings,
        config.collection_name,
        default_k=config.retrieval_top_k,
    )
    engine = RAGQueryEngine.from_settings(config, retriever, llm)
    return RagRuntime(config=config, store=store, embeddings=embeddings, pipeline=pipeline, engine=engine)

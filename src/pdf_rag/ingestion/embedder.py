"""Embedding-batch construction and the embedding client."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING

from pdf_rag.errors import EmbeddingError
from pdf_rag.retrieval.models import Document, EmbeddedDocument

if TYPE_CHECKING:
    from langchain_core.embeddings import Embeddings

    from pdf_rag.config import Settings

logger = logging.getLogger(__name__)


def get_embedding_function(config: Settings) -> Embeddings:
    """Return the configured embedding model.

    ``openai`` talks to any OpenAI-compatible ``/v1/embeddings`` endpoint
    (OpenAI cloud, Ollama, vLLM); ``huggingface`` runs a local
    sentence-transformer.
    """
    provider = config.embedding_provider.lower()
    if provider == "openai":
        from langchain_openai import OpenAIEmbeddings

        kwargs: dict = {
            "model": config.embedding_model,
            "api_key": config.openai_api_key or "EMPTY",
            "timeout": config.request_timeout,
            # Non-OpenAI servers do not accept pre-tokenised input.
            "check_embedding_ctx_length": False,
        }
        if config.openai_base_url:
            kwargs["base_url"] = config.openai_base_url
        return OpenAIEmbeddings(**kwargs)

    if provider == "huggingface":
        from langchain_huggingface import HuggingFaceEmbeddings

        return HuggingFaceEmbeddings(model_name=config.embedding_model)

    raise ValueError(f"Unsupported embedding_provider={config.embedding_provider!r}")


def build_documents(chunks: Sequence[str], id_prefix: str) -> list[Document]:
    """Wrap *chunks* as :class:`Document` objects with ids ``{id_prefix}_{i}``.

    Ids depend only on the prefix and the chunk position, so re-ingesting
    the same source produces the same ids.
    """
    if not id_prefix:
        raise ValueError("id_prefix must not be empty")
    return [Document(id=f"{id_prefix}_{i}", content=chunk) for i, chunk in enumerate(chunks)]


async def embed_documents(
    documents: Sequence[Document],
    embeddings: Embeddings,
    *,
    expected_dimensions: int | None = None,
    source: str = "batch",
) -> list[EmbeddedDocument]:
    """Embed *documents* in a single provider call.

    The batch is all-or-nothing: if the provider fails, returns the wrong
    number of vectors, or (when *expected_dimensions* is given) a vector
    of the wrong length, :class:`EmbeddingError` is raised and nothing is
    returned.
    """
    if not documents:
        return []

    texts = [doc.content for doc in documents]
    logger.info("Embedding %d chunk(s) from %s", len(texts), source)
    try:
        vectors = await embeddings.aembed_documents(texts)
    except Exception as exc:
        raise EmbeddingError(source, str(exc)) from exc

    if len(vectors) != len(documents):
        raise EmbeddingError(source, f"provider returned {len(vectors)} vectors for {len(documents)} chunks")

    embedded: list[EmbeddedDocument] = []
    for doc, vector in zip(documents, vectors):
        if expected_dimensions is not None and len(vector) != expected_dimensions:
            raise EmbeddingError(
                source,
                f"vector for {doc.id!r} has length {len(vector)}, expected {expected_dimensions}",
            )
        embedded.append(EmbeddedDocument(document=doc, vector=list(vector)))
    return embedded

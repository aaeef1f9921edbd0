"""Semantic retriever — embed a question, return the top-k chunks.

Usage::

    from pdf_rag.retrieval.retriever import SemanticRetriever

    retriever = SemanticRetriever(store, embeddings, "chessboard")
    results   = await retriever.search("What is the core feature?", k=4)
    for r in results:
        print(r.id, r.score, r.document.content[:80])
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from pdf_rag.errors import EmbeddingError
from pdf_rag.retrieval.base import VectorStoreBase
from pdf_rag.retrieval.models import ScoredDocument

if TYPE_CHECKING:
    from langchain_core.embeddings import Embeddings

logger = logging.getLogger(__name__)


class SemanticRetriever:
    """Top-k retrieval over one collection.

    Questions must be embedded with the same model (and therefore the
    same dimensionality) used at ingestion time, otherwise the scores
    are meaningless.  Passing the ingestion ``Embeddings`` instance here
    is what keeps the two in step.

    Parameters
    ----------
    store:
        A concrete vector-store backend.
    embeddings:
        LangChain embedding model shared with ingestion.
    collection_name:
        Collection to search.
    default_k:
        Default number of results returned by :meth:`search`.
    score_threshold:
        Minimum similarity score; results below this are discarded.
    """

    def __init__(
        self,
        store: VectorStoreBase,
        embeddings: Embeddings,
        collection_name: str,
        *,
        default_k: int = 4,
        score_threshold: float | None = None,
    ) -> None:
        self._store = store
        self._embeddings = embeddings
        self.collection_name = collection_name
        self.default_k = default_k
        self.score_threshold = score_threshold

    # -- public API -----------------------------------------------------------

    async def search(self, query: str, *, k: int | None = None) -> list[ScoredDocument]:
        """Embed *query* and return up to *k* hits, most similar first."""
        try:
            embedding = await self._embeddings.aembed_query(query)
        except Exception as exc:
            raise EmbeddingError(f"query {query!r}", str(exc)) from exc
        return await self.search_by_embedding(embedding, k=k)

    async def search_by_embedding(self, embedding: list[float], *, k: int | None = None) -> list[ScoredDocument]:
        """Same as :meth:`search` but accepts a pre-computed embedding."""
        k = self.default_k if k is None else k
        if k <= 0:
            raise ValueError(f"k must be positive, got {k}")

        hits = await self._store.query(self.collection_name, embedding, k, include_payload=True)
        if self.score_threshold is not None:
            hits = [h for h in hits if h.score >= self.score_threshold]
        # Backends promise this already; keep the contract even if one does not.
        hits = sorted(hits, key=lambda h: h.score, reverse=True)[:k]
        logger.debug("Retrieved %d hits from %r", len(hits), self.collection_name)
        return hits

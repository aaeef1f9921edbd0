"""Abstract base class for vector-index backends.

Adding a new backend (Qdrant, Pinecone, Weaviate …) only requires
subclassing :class:`VectorStoreBase` and implementing the abstract
coroutines.  Provisioning, ingestion and retrieval are backend-agnostic.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence

from pdf_rag.errors import DimensionMismatchError
from pdf_rag.retrieval.models import DistanceMetric, EmbeddedDocument, ScoredDocument


class VectorStoreBase(ABC):
    """Backend-agnostic, collection-oriented vector index.

    All methods are coroutines: each one is a suspension point at which
    the calling task waits for the index service.
    """

    # -- required overrides ---------------------------------------------------

    @abstractmethod
    async def collection_exists(self, name: str) -> bool:
        """Return ``True`` when a collection called *name* exists."""
        ...

    @abstractmethod
    async def create_collection(self, name: str, dimensionality: int, metric: DistanceMetric) -> None:
        """Create collection *name* with fixed vector size and distance metric."""
        ...

    @abstractmethod
    async def collection_dimensionality(self, name: str) -> int:
        """Return the vector size *name* was created with."""
        ...

    @abstractmethod
    async def _insert(self, name: str, documents: Sequence[EmbeddedDocument]) -> None:
        """Persist already-validated *documents*; same id overwrites."""
        ...

    @abstractmethod
    async def query(
        self,
        name: str,
        vector: list[float],
        top_k: int,
        *,
        include_payload: bool = True,
    ) -> list[ScoredDocument]:
        """Return at most *top_k* hits ordered by descending similarity.

        With ``include_payload=False`` backends skip fetching chunk text
        and return hits whose ``document`` is ``None``.
        """
        ...

    @abstractmethod
    async def health_check(self) -> bool:
        """Return ``True`` when the backend is reachable and ready."""
        ...

    # -- shared behaviour -----------------------------------------------------

    async def insert(self, name: str, documents: Sequence[EmbeddedDocument]) -> int:
        """Insert *documents* into collection *name*; return how many were written.

        Every vector is checked against the collection dimensionality
        before anything is written, so a bad batch never lands half-way.
        """
        if not documents:
            return 0
        expected = await self.collection_dimensionality(name)
        for doc in documents:
            if len(doc.vector) != expected:
                raise DimensionMismatchError(name, expected, len(doc.vector), doc.id)
        await self._insert(name, documents)
        return len(documents)


def similarity_from_distance(distance: float, metric: DistanceMetric) -> float:
    """Convert a backend distance to a score where higher = more similar.

    Cosine and inner-product distances are ``1 - similarity``; squared L2
    distances are mapped into ``(0, 1]``.
    """
    if metric is DistanceMetric.L2:
        return 1.0 / (1.0 + distance)
    return 1.0 - distance

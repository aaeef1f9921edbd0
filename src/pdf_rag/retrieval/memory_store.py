"""In-process vector index for tests, demos and small corpora."""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence
from dataclasses import dataclass, field

from pdf_rag.errors import VectorIndexError
from pdf_rag.retrieval.base import VectorStoreBase, similarity_from_distance
from pdf_rag.retrieval.models import (
    CollectionInfo,
    DistanceMetric,
    Document,
    EmbeddedDocument,
    ScoredDocument,
)

logger = logging.getLogger(__name__)


def distance(a: list[float], b: list[float], metric: DistanceMetric) -> float:
    """Distance between *a* and *b* using the same conventions as Chroma."""
    if len(a) != len(b):
        raise ValueError("Vectors must have the same dimension")
    if metric is DistanceMetric.L2:
        return sum((x - y) ** 2 for x, y in zip(a, b))
    dot = sum(x * y for x, y in zip(a, b))
    if metric is DistanceMetric.IP:
        return 1.0 - dot
    norm_a = math.sqrt(sum(x * x for x in a))
    norm_b = math.sqrt(sum(y * y for y in b))
    if norm_a == 0 or norm_b == 0:
        return 1.0
    return 1.0 - dot / (norm_a * norm_b)


@dataclass
class _Collection:
    info: CollectionInfo
    documents: dict[str, Document] = field(default_factory=dict)
    vectors: dict[str, list[float]] = field(default_factory=dict)


class InMemoryVectorStore(VectorStoreBase):
    """Exact (brute-force) search over vectors held in a dict.

    Insertion order is kept, so hits with equal scores come back in the
    order they were inserted.
    """

    def __init__(self) -> None:
        self._collections: dict[str, _Collection] = {}

    def _get(self, name: str, operation: str) -> _Collection:
        try:
            return self._collections[name]
        except KeyError:
            raise VectorIndexError(name, operation, "collection does not exist") from None

    async def collection_exists(self, name: str) -> bool:
        return name in self._collections

    async def create_collection(self, name: str, dimensionality: int, metric: DistanceMetric) -> None:
        if name in self._collections:
            raise VectorIndexError(name, "create", "collection already exists")
        info = CollectionInfo(name=name, dimensionality=dimensionality, metric=metric)
        self._collections[name] = _Collection(info=info)
        logger.debug("Created in-memory collection %s", info)

    async def collection_dimensionality(self, name: str) -> int:
        return self._get(name, "insert").info.dimensionality

    async def _insert(self, name: str, documents: Sequence[EmbeddedDocument]) -> None:
        collection = self._get(name, "insert")
        for doc in documents:
            collection.documents[doc.id] = doc.document
            collection.vectors[doc.id] = list(doc.vector)

    async def query(
        self,
        name: str,
        vector: list[float],
        top_k: int,
        *,
        include_payload: bool = True,
    ) -> list[ScoredDocument]:
        collection = self._get(name, "query")
        metric = collection.info.metric
        if len(vector) != collection.info.dimensionality:
            raise VectorIndexError(
                name,
                "query",
                f"query vector has length {len(vector)}, "
                f"collection expects {collection.info.dimensionality}",
            )

        scored = [
            (doc_id, similarity_from_distance(distance(vector, stored, metric), metric))
            for doc_id, stored in collection.vectors.items()
        ]
        scored.sort(key=lambda item: item[1], reverse=True)

        return [
            ScoredDocument(
                id=doc_id,
                score=score,
                document=collection.documents[doc_id] if include_payload else None,
            )
            for doc_id, score in scored[:top_k]
        ]

    async def health_check(self) -> bool:
        return True

    def count(self, name: str) -> int:
        """Number of vectors stored in *name* (test/debug helper)."""
        return len(self._get(name, "count").vectors)

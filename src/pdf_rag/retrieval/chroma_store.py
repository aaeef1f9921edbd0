"""Chroma implementation of the vector-store abstraction."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Sequence
from typing import Any, TypeVar

import chromadb

from pdf_rag.config import settings
from pdf_rag.errors import RagError, VectorIndexError
from pdf_rag.retrieval.base import VectorStoreBase, similarity_from_distance
from pdf_rag.retrieval.models import DistanceMetric, Document, EmbeddedDocument, ScoredDocument

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Chroma infers dimensionality from the first add; we pin it in metadata.
DIMENSION_KEY = "dimension"
SPACE_KEY = "hnsw:space"


class ChromaVectorStore(VectorStoreBase):
    """Chroma-backed vector store.

    The chromadb HTTP client is blocking, so every call is pushed to a
    worker thread with :func:`asyncio.to_thread`; callers still see one
    awaited call at a time.

    Parameters
    ----------
    host:
        Chroma server hostname.
    port:
        Chroma server port.
    api_key:
        Optional token sent as ``Authorization: Bearer``.
    ssl:
        Use HTTPS.
    client:
        Pre-built chromadb client (e.g. ``chromadb.EphemeralClient()``);
        overrides the connection parameters.
    upsert_batch_size:
        Max records per upsert call (Chroma cap ≈ 41 666).
    """

    def __init__(
        self,
        *,
        host: str = settings.chroma_host,
        port: int = settings.chroma_port,
        api_key: str = settings.chroma_api_key,
        ssl: bool = settings.chroma_ssl,
        client: Any | None = None,
        upsert_batch_size: int = 5000,
    ) -> None:
        if client is None:
            headers = {"Authorization": f"Bearer {api_key}"} if api_key else None
            client = chromadb.HttpClient(host=host, port=port, ssl=ssl, headers=headers)
        self._client = client
        self._collections: dict[str, Any] = {}
        self.upsert_batch_size = upsert_batch_size

    # -- internals ------------------------------------------------------------

    async def _call(self, name: str, operation: str, func: Callable[..., T], *args: Any) -> T:
        try:
            return await asyncio.to_thread(func, *args)
        except RagError:
            raise
        except Exception as exc:
            raise VectorIndexError(name, operation, str(exc)) from exc

    def _collection(self, name: str) -> Any:
        if name not in self._collections:
            self._collections[name] = self._client.get_collection(name)
        return self._collections[name]

    def _exists_sync(self, name: str) -> bool:
        # chromadb < 0.6 returns Collection objects, >= 0.6 returns names.
        names = {getattr(c, "name", c) for c in self._client.list_collections()}
        return name in names

    def _create_sync(self, name: str, dimensionality: int, metric: DistanceMetric) -> None:
        self._collections[name] = self._client.create_collection(
            name=name,
            metadata={SPACE_KEY: metric.value, DIMENSION_KEY: dimensionality},
        )

    def _metadata(self, name: str) -> dict[str, Any]:
        return self._collection(name).metadata or {}

    def _dimensionality_sync(self, name: str) -> int:
        dim = self._metadata(name).get(DIMENSION_KEY)
        if dim is None:
            raise VectorIndexError(
                name, "insert", f"collection has no {DIMENSION_KEY!r} metadata; was it provisioned by pdf-rag?"
            )
        return int(dim)

    def _upsert_sync(self, name: str, documents: Sequence[EmbeddedDocument]) -> None:
        collection = self._collection(name)
        for start in range(0, len(documents), self.upsert_batch_size):
            batch = documents[start : start + self.upsert_batch_size]
            collection.upsert(
                ids=[d.id for d in batch],
                embeddings=[d.vector for d in batch],
                documents=[d.document.content for d in batch],
            )
            logger.debug("upserted %d-%d into %s", start, start + len(batch), name)

    def _query_sync(self, name: str, vector: list[float], top_k: int, include_payload: bool) -> list[ScoredDocument]:
        collection = self._collection(name)
        count = collection.count()
        if count == 0:
            return []

        metric = DistanceMetric(self._metadata(name).get(SPACE_KEY, DistanceMetric.L2.value))
        include = ["documents", "distances"] if include_payload else ["distances"]
        results = collection.query(
            query_embeddings=[vector],
            n_results=min(top_k, count),
            include=include,
        )

        ids = (results.get("ids") or [[]])[0]
        distances = (results.get("distances") or [[]])[0]
        docs = (results.get("documents") or [[]])[0] if include_payload else [None] * len(ids)

        hits: list[ScoredDocument] = []
        for doc_id, content, dist in zip(ids, docs, distances):
            document = Document(id=doc_id, content=content) if include_payload and content else None
            hits.append(
                ScoredDocument(
                    id=doc_id,
                    score=similarity_from_distance(dist, metric),
                    document=document,
                )
            )
        hits.sort(key=lambda h: h.score, reverse=True)
        return hits

    # -- VectorStoreBase overrides --------------------------------------------

    async def collection_exists(self, name: str) -> bool:
        return await self._call(name, "exists", self._exists_sync, name)

    async def create_collection(self, name: str, dimensionality: int, metric: DistanceMetric) -> None:
        await self._call(name, "create", self._create_sync, name, dimensionality, metric)
        logger.info("Created Chroma collection %r (dim=%d, metric=%s)", name, dimensionality, metric.value)

    async def collection_dimensionality(self, name: str) -> int:
        return await self._call(name, "insert", self._dimensionality_sync, name)

    async def _insert(self, name: str, documents: Sequence[EmbeddedDocument]) -> None:
        await self._call(name, "insert", self._upsert_sync, name, documents)

    async def query(
        self,
        name: str,
        vector: list[float],
        top_k: int,
        *,
        include_payload: bool = True,
    ) -> list[ScoredDocument]:
        return await self._call(name, "query", self._query_sync, name, vector, top_k, include_payload)

    async def health_check(self) -> bool:
        try:
            await asyncio.to_thread(self._client.heartbeat)
            return True
        except Exception:
            logger.warning("Chroma health-check failed", exc_info=True)
            return False

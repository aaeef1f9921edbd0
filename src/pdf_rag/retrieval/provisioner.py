"""Idempotent collection provisioning."""

from __future__ import annotations

import logging

from pdf_rag.errors import VectorIndexError
from pdf_rag.retrieval.base import VectorStoreBase
from pdf_rag.retrieval.models import DistanceMetric

logger = logging.getLogger(__name__)


async def ensure_collection(
    store: VectorStoreBase,
    name: str,
    dimensionality: int,
    metric: DistanceMetric = DistanceMetric.COSINE,
) -> bool:
    """Create collection *name* unless it already exists.

    An existing collection must have been created with *dimensionality*;
    a mismatch raises :class:`VectorIndexError` before anything is embedded.

    Returns ``True`` when the collection was created by this call.

    Check-then-create is not atomic: two provisioners racing on the same
    name can both see it missing.  Ingestion runs as a single writer, so
    the window is accepted; concurrent callers would need a lock or a
    server-side create-if-absent.
    """
    if dimensionality <= 0:
        raise ValueError(f"dimensionality must be positive, got {dimensionality}")

    try:
        if await store.collection_exists(name):
            existing = await store.collection_dimensionality(name)
        else:
            existing = None
            await store.create_collection(name, dimensionality, metric)
    except Exception as exc:
        raise VectorIndexError(name, "provision", str(exc)) from exc

    if existing is not None:
        if existing != dimensionality:
            raise VectorIndexError(
                name,
                "provision",
                f"collection exists with dimensionality {existing}, expected {dimensionality}",
            )
        logger.debug("Collection %r already exists", name)
        return False

    logger.info("Provisioned collection %r (dim=%d, metric=%s)", name, dimensionality, metric.value)
    return True

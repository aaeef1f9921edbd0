"""Ingestion pipeline — extract → chunk → embed → index.

Every source is processed to completion before the next one starts and
every external call is awaited on its own, so ids are assigned in a
fixed order and the first failure stops the run with the offending
source attached to the error.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import TYPE_CHECKING

from pdf_rag.errors import EmptyDocumentError, VectorIndexError
from pdf_rag.ingestion.chunker import WordBoundaryTextSplitter
from pdf_rag.ingestion.embedder import build_documents, embed_documents
from pdf_rag.ingestion.loader import DocumentExtractor, PdfExtractor
from pdf_rag.retrieval.base import VectorStoreBase
from pdf_rag.retrieval.models import DistanceMetric, IngestionReport, SourceReport
from pdf_rag.retrieval.provisioner import ensure_collection

if TYPE_CHECKING:
    from langchain_core.embeddings import Embeddings

    from pdf_rag.config import Settings

logger = logging.getLogger(__name__)


def default_id_prefix(source: str | Path) -> str:
    """``documents/chessboard.pdf`` → ``chessboard``; globs keep their literal stem."""
    stem = Path(str(source)).stem
    return stem.replace("*", "").replace("?", "") or "document"


class IngestionPipeline:
    """Load PDF sources into one vector collection.

    Parameters
    ----------
    store:
        Target vector index.
    embeddings:
        Embedding model; must be the one the query engine uses.
    extractor:
        Source reader; defaults to :class:`PdfExtractor`.
    chunk_size:
        Soft cap on characters per chunk.
    collection_name / dimensionality / metric:
        Collection to provision and insert into.
    """

    def __init__(
        self,
        store: VectorStoreBase,
        embeddings: Embeddings,
        *,
        extractor: DocumentExtractor | None = None,
        chunk_size: int = 1000,
        collection_name: str = "chessboard",
        dimensionality: int = 1024,
        metric: DistanceMetric = DistanceMetric.COSINE,
    ) -> None:
        self.store = store
        self.embeddings = embeddings
        self.extractor = extractor or PdfExtractor()
        self.splitter = WordBoundaryTextSplitter(chunk_size=chunk_size)
        self.collection_name = collection_name
        self.dimensionality = dimensionality
        self.metric = metric

    @classmethod
    def from_settings(
        cls,
        config: Settings,
        store: VectorStoreBase,
        embeddings: Embeddings,
        extractor: DocumentExtractor | None = None,
    ) -> IngestionPipeline:
        return cls(
            store,
            embeddings,
            extractor=extractor,
            chunk_size=config.chunk_size,
            collection_name=config.collection_name,
            dimensionality=config.vector_dimensions,
            metric=config.distance_metric,
        )

    def chunk_source(self, source: str | Path) -> list[str]:
        """Extract and chunk every unit of *source*, in order.

        Raises :class:`EmptyDocumentError` when nothing is left to index.
        """
        chunks: list[str] = []
        for block in self.extractor.extract(source):
            chunks.extend(self.splitter.split_text(block.text))
        if not chunks:
            raise EmptyDocumentError(str(source))
        return chunks

    async def ingest(
        self,
        source_paths: Sequence[str | Path],
        *,
        collection_name: str | None = None,
        id_prefixes: Mapping[str, str] | None = None,
    ) -> IngestionReport:
        """Index every source in *source_paths*; return what was inserted.

        Parameters
        ----------
        source_paths:
            PDF paths or glob patterns, processed in order.
        collection_name:
            Overrides the pipeline's collection for this run.
        id_prefixes:
            Optional ``{source: prefix}`` map; sources not listed use
            their file stem.
        """
        collection = collection_name or self.collection_name
        id_prefixes = id_prefixes or {}

        created = await ensure_collection(self.store, collection, self.dimensionality, self.metric)
        report = IngestionReport(collection=collection, created_collection=created)

        for source in source_paths:
            source_key = str(source)
            prefix = id_prefixes.get(source_key) or default_id_prefix(source_key)

            chunks = await asyncio.to_thread(self.chunk_source, source)
            documents = build_documents(chunks, prefix)
            embedded = await embed_documents(
                documents,
                self.embeddings,
                expected_dimensions=self.dimensionality,
                source=source_key,
            )
            try:
                inserted = await self.store.insert(collection, embedded)
            except VectorIndexError as exc:
                exc.source = source_key
                exc.add_note(f"while ingesting {source_key}")
                raise

            logger.info("Indexed %d chunk(s) from %s into %r", inserted, source_key, collection)
            report.inserted += inserted
            report.sources.append(SourceReport(source=source_key, id_prefix=prefix, chunks=len(chunks)))

        logger.info("Ingestion complete: %d vector(s) in %r", report.inserted, collection)
        return report

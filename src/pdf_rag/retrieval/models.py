"""Domain models shared by ingestion, indexing and retrieval."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class DistanceMetric(str, Enum):
    """Distance function a collection is created with."""

    COSINE = "cosine"
    L2 = "l2"
    IP = "ip"


class Document(BaseModel):
    """One chunk of a source document, as stored in the index.

    Attributes
    ----------
    id:
        ``"{prefix}_{index}"`` — unique within a collection.  Re-using an
        id overwrites the stored vector.
    content:
        Trimmed, non-empty chunk text.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(min_length=1)
    content: str

    @field_validator("content")
    @classmethod
    def _non_empty_trimmed(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("document content must not be empty")
        return value


class EmbeddedDocument(BaseModel):
    """A :class:`Document` paired with its embedding vector."""

    model_config = ConfigDict(frozen=True)

    document: Document
    vector: list[float]

    @property
    def id(self) -> str:
        return self.document.id


class CollectionInfo(BaseModel):
    """Name, dimensionality and metric of a provisioned collection."""

    model_config = ConfigDict(frozen=True)

    name: str
    dimensionality: int = Field(gt=0)
    metric: DistanceMetric = DistanceMetric.COSINE


class Query(BaseModel):
    """A single user question and how many passages to retrieve for it."""

    text: str
    top_k: int = Field(default=4, gt=0)


class ScoredDocument(BaseModel):
    """A retrieved hit with its similarity score (higher = more similar).

    ``document`` is ``None`` when the query was made without payload.
    """

    id: str
    score: float
    document: Document | None = None

    def __str__(self) -> str:  # noqa: D105
        text = self.document.content[:120] if self.document else ""
        return f"[{self.id} {self.score:.3f}] {text}…"


class ExtractedText(BaseModel):
    """Raw text of one source unit (one PDF file, pages joined)."""

    source: str
    text: str


class SourceReport(BaseModel):
    """Per-source outcome of an ingestion run."""

    source: str
    id_prefix: str
    chunks: int


class IngestionReport(BaseModel):
    """Summary returned by :meth:`IngestionPipeline.ingest`."""

    collection: str
    inserted: int = 0
    created_collection: bool = False
    sources: list[SourceReport] = Field(default_factory=list)

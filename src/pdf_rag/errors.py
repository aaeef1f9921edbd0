"""Exception hierarchy for the ingestion and query pipelines.

Every error raised on purpose by :mod:`pdf_rag` derives from
:class:`RagError` and carries the resource it failed on (source path,
collection, question) so the top-level caller can report *which* stage
and *which* resource broke without parsing messages.
"""

from __future__ import annotations


class RagError(Exception):
    """Base class for all pipeline errors."""

    stage = "rag"


class ExtractionError(RagError):
    """A single source unit (one PDF file) could not be read."""

    stage = "extraction"

    def __init__(self, source: str, reason: str) -> None:
        super().__init__(f"Could not extract text from {source}: {reason}")
        self.source = source


class EmptyDocumentError(RagError):
    """A source yielded zero chunks — nothing would be indexed."""

    stage = "chunking"

    def __init__(self, source: str) -> None:
        super().__init__(f"No content found in source: {source}")
        self.source = source


class EmbeddingError(RagError):
    """The embedding provider failed for a batch."""

    stage = "embedding"

    def __init__(self, source: str, reason: str) -> None:
        super().__init__(f"Embedding failed for {source}: {reason}")
        self.source = source


class VectorIndexError(RagError):
    """Provisioning, insert, or query against the vector index failed."""

    stage = "index"

    def __init__(self, collection: str, operation: str, reason: str) -> None:
        super().__init__(f"Vector index {operation} failed on collection {collection!r}: {reason}")
        self.collection = collection
        self.operation = operation
        self.source: str | None = None


class DimensionMismatchError(VectorIndexError):
    """A vector's length differs from the collection's dimensionality."""

    def __init__(self, collection: str, expected: int, actual: int, document_id: str | None = None) -> None:
        where = f" (document {document_id!r})" if document_id else ""
        super().__init__(
            collection,
            "insert",
            f"expected vectors of length {expected}, got {actual}{where}",
        )
        self.expected = expected
        self.actual = actual


class CompletionError(RagError):
    """The completion model failed while answering one question."""

    stage = "completion"

    def __init__(self, question: str, reason: str) -> None:
        super().__init__(f"Completion failed for question {question!r}: {reason}")
        self.question = question

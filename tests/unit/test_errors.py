"""Unit tests for the error hierarchy and logging setup."""

from __future__ import annotations

import logging

import pytest

from pdf_rag.errors import (
    CompletionError,
    DimensionMismatchError,
    EmbeddingError,
    EmptyDocumentError,
    ExtractionError,
    RagError,
    VectorIndexError,
)
from pdf_rag.logging_utils import configure_logging


@pytest.mark.parametrize(
    ("error", "stage"),
    [
        (ExtractionError("a.pdf", "bad"), "extraction"),
        (EmptyDocumentError("a.pdf"), "chunking"),
        (EmbeddingError("a.pdf", "timeout"), "embedding"),
        (VectorIndexError("kb", "insert", "down"), "index"),
        (DimensionMismatchError("kb", 1024, 768), "index"),
        (CompletionError("why?", "offline"), "completion"),
    ],
)
def test_every_error_is_a_rag_error_with_stage(error: RagError, stage: str) -> None:
    assert isinstance(error, RagError)
    assert error.stage == stage


def test_index_error_names_collection_and_operation() -> None:
    err = VectorIndexError("kb", "provision", "refused")
    assert err.collection == "kb"
    assert err.operation == "provision"
    assert "provision" in str(err) and "'kb'" in str(err)


def test_dimension_mismatch_message() -> None:
    err = DimensionMismatchError("kb", 1024, 768, "doc_3")
    assert err.operation == "insert"
    assert "1024" in str(err) and "768" in str(err) and "doc_3" in str(err)


def test_does_not_shadow_builtin_index_error() -> None:
    assert not issubclass(VectorIndexError, IndexError)


def test_configure_logging_sets_package_level() -> None:
    configure_logging("debug")
    assert logging.getLogger("pdf_rag").level == logging.DEBUG
    assert logging.getLogger("httpx").level == logging.WARNING
    configure_logging(logging.INFO)
    assert logging.getLogger("pdf_rag").level == logging.INFO

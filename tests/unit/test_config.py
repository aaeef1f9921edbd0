"""Unit tests for settings loading."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from pdf_rag.config import Settings
from pdf_rag.retrieval.models import DistanceMetric


def test_defaults_match_reference_deployment(monkeypatch: pytest.MonkeyPatch) -> None:
    for var in ("OPENAI_API_KEY", "OPENAI_BASE_URL"):
        monkeypatch.delenv(var, raising=False)
    config = Settings(_env_file=None)
    assert config.chunk_size == 1000
    assert config.collection_name == "chessboard"
    assert config.vector_dimensions == 1024
    assert config.distance_metric is DistanceMetric.COSINE
    assert config.retrieval_top_k == 4
    assert config.temperature == pytest.approx(0.15)


def test_prefixed_env_vars(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PDF_RAG_CHUNK_SIZE", "250")
    monkeypatch.setenv("PDF_RAG_DISTANCE_METRIC", "l2")
    config = Settings(_env_file=None)
    assert config.chunk_size == 250
    assert config.distance_metric is DistanceMetric.L2


def test_conventional_openai_env_names(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
    monkeypatch.setenv("OPENAI_BASE_URL", "http://localhost:11434/v1")
    config = Settings(_env_file=None)
    assert config.openai_api_key == "sk-test"
    assert config.openai_base_url == "http://localhost:11434/v1"


@pytest.mark.parametrize(
    "overrides",
    [{"chunk_size": 0}, {"vector_dimensions": -1}, {"retrieval_top_k": 0}, {"temperature": 3.0}],
)
def test_invalid_values_rejected(overrides: dict) -> None:
    with pytest.raises(ValidationError):
        Settings(_env_file=None, **overrides)

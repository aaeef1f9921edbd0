"""Unit tests for embedding-batch construction."""

from __future__ import annotations

from unittest.mock import patch

import pytest
from langchain_core.embeddings import DeterministicFakeEmbedding
from pydantic import ValidationError

from pdf_rag.config import Settings
from pdf_rag.errors import EmbeddingError
from pdf_rag.ingestion.embedder import build_documents, embed_documents, get_embedding_function
from pdf_rag.retrieval.models import Document

from rag_fakes import FailingEmbeddings, KeywordEmbeddings


class TestBuildDocuments:
    def test_ids_follow_prefix_and_position(self) -> None:
        docs = build_documents(["a b", "c d", "e"], "chessboard")
        assert [d.id for d in docs] == ["chessboard_0", "chessboard_1", "chessboard_2"]
        assert [d.content for d in docs] == ["a b", "c d", "e"]

    def test_ids_are_deterministic(self) -> None:
        chunks = ["first chunk", "second chunk"]
        assert build_documents(chunks, "doc") == build_documents(chunks, "doc")

    def test_empty_prefix_rejected(self) -> None:
        with pytest.raises(ValueError, match="id_prefix"):
            build_documents(["x"], "")

    def test_documents_are_immutable(self) -> None:
        doc = build_documents(["x"], "p")[0]
        with pytest.raises(ValidationError):
            doc.content = "changed"  # type: ignore[misc]

    def test_blank_chunk_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Document(id="p_0", content="   ")


class TestEmbedDocuments:
    @pytest.mark.asyncio
    async def test_single_batch_call(self) -> None:
        embeddings = KeywordEmbeddings()
        docs = build_documents(["chess board", "python vector", "opening"], "doc")

        embedded = await embed_documents(docs, embeddings, expected_dimensions=8)

        assert len(embeddings.document_calls) == 1
        assert embeddings.document_calls[0] == ["chess board", "python vector", "opening"]
        assert [e.id for e in embedded] == ["doc_0", "doc_1", "doc_2"]
        assert all(len(e.vector) == 8 for e in embedded)

    @pytest.mark.asyncio
    async def test_empty_batch_skips_provider(self) -> None:
        embeddings = KeywordEmbeddings()
        assert await embed_documents([], embeddings) == []
        assert embeddings.document_calls == []

    @pytest.mark.asyncio
    async def test_provider_failure_raises_embedding_error(self) -> None:
        docs = build_documents(["a", "b"], "doc")
        with pytest.raises(EmbeddingError, match="doc.pdf") as exc_info:
            await embed_documents(docs, FailingEmbeddings(), source="doc.pdf")
        assert exc_info.value.source == "doc.pdf"
        assert isinstance(exc_info.value.__cause__, RuntimeError)

    @pytest.mark.asyncio
    async def test_wrong_dimension_fails_whole_batch(self) -> None:
        docs = build_documents(["a", "b"], "doc")
        with pytest.raises(EmbeddingError, match="expected 16"):
            await embed_documents(docs, DeterministicFakeEmbedding(size=8), expected_dimensions=16)

    @pytest.mark.asyncio
    async def test_vector_count_mismatch(self) -> None:
        class ShortEmbeddings(KeywordEmbeddings):
            def embed_documents(self, texts: list[str]) -> list[list[float]]:
                return super().embed_documents(texts)[:-1]

        docs = build_documents(["a", "b"], "doc")
        with pytest.raises(EmbeddingError, match="1 vectors for 2 chunks"):
            await embed_documents(docs, ShortEmbeddings())


class TestGetEmbeddingFunction:
    def test_openai_provider_uses_base_url(self) -> None:
        config = Settings(
            embedding_provider="openai",
            embedding_model="bge-large",
            openai_base_url="http://localhost:11434/v1",
            openai_api_key="",
        )
        with patch("langchain_openai.OpenAIEmbeddings") as mock_cls:
            get_embedding_function(config)
        kwargs = mock_cls.call_args.kwargs
        assert kwargs["model"] == "bge-large"
        assert kwargs["base_url"] == "http://localhost:11434/v1"
        assert kwargs["api_key"] == "EMPTY"
        assert kwargs["check_embedding_ctx_length"] is False

    def test_huggingface_provider(self) -> None:
        config = Settings(embedding_provider="huggingface", embedding_model="BAAI/bge-large-en")
        with patch("langchain_huggingface.HuggingFaceEmbeddings") as mock_cls:
            get_embedding_function(config)
        mock_cls.assert_called_once_with(model_name="BAAI/bge-large-en")

    def test_unknown_provider(self) -> None:
        with pytest.raises(ValueError, match="embedding_provider"):
            get_embedding_function(Settings(embedding_provider="cohere"))

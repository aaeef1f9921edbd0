"""Unit tests for the command-line entry point."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest
from langchain_core.messages import AIMessage

from pdf_rag import cli
from pdf_rag.config import Settings
from pdf_rag.runtime import RagRuntime, build_runtime

from rag_fakes import FailingEmbeddings, FakeExtractor, KeywordEmbeddings

CHESS_TEXT = "The chess learning assistant explains each opening and every piece on the board."


@pytest.fixture()
def runtime(test_settings: Settings) -> RagRuntime:
    llm = MagicMock()
    llm.ainvoke = AsyncMock(return_value=AIMessage(content="It explains openings."))
    return build_runtime(
        test_settings,
        embeddings=KeywordEmbeddings(),
        llm=llm,
        extractor=FakeExtractor({"documents/chessboard.pdf": CHESS_TEXT, "blank.pdf": ""}),
    )


def test_ingest_prints_report(runtime: RagRuntime, capsys: pytest.CaptureFixture[str]) -> None:
    status = cli.main(["ingest", "documents/chessboard.pdf"], runtime=runtime)
    out = capsys.readouterr().out
    assert status == 0
    assert "chessboard_*" in out
    assert "into 'test-collection'" in out


def test_ask_prints_answer(runtime: RagRuntime, capsys: pytest.CaptureFixture[str]) -> None:
    assert cli.main(["ingest", "documents/chessboard.pdf"], runtime=runtime) == 0
    capsys.readouterr()
    assert cli.main(["ask", "What does the assistant explain?"], runtime=runtime) == 0
    assert capsys.readouterr().out.strip() == "It explains openings."


def test_fatal_error_exits_non_zero(runtime: RagRuntime, caplog: pytest.LogCaptureFixture) -> None:
    status = cli.main(["ingest", "blank.pdf"], runtime=runtime)
    assert status == 1
    assert "chunking failed (blank.pdf)" in caplog.text
    assert "EmptyDocumentError" in caplog.text


def test_embedding_error_exits_non_zero(test_settings: Settings) -> None:
    runtime = build_runtime(
        test_settings,
        embeddings=FailingEmbeddings(),
        llm=MagicMock(),
        extractor=FakeExtractor({"doc.pdf": CHESS_TEXT}),
    )
    assert cli.main(["ingest", "doc.pdf"], runtime=runtime) == 1


def test_run_ingests_documents_dir(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, test_settings: Settings, capsys: pytest.CaptureFixture[str]
) -> None:
    docs = tmp_path / "documents"
    docs.mkdir()
    (docs / "chessboard.pdf").write_bytes(b"%PDF")
    monkeypatch.setenv("PDF_RAG_DOCUMENTS_DIR", str(docs))

    llm = MagicMock()
    llm.ainvoke = AsyncMock(return_value=AIMessage(content="Done."))
    runtime = build_runtime(
        test_settings,
        embeddings=KeywordEmbeddings(),
        llm=llm,
        extractor=FakeExtractor({str(docs / "chessboard.pdf"): CHESS_TEXT}),
    )

    assert cli.main(["run"], runtime=runtime) == 0
    out = capsys.readouterr().out
    assert "chessboard_*" in out
    assert out.strip().endswith("Done.")
    question = llm.ainvoke.await_args.args[0][1].content
    assert question.endswith(cli.DEFAULT_QUESTION)


def test_parser_requires_command() -> None:
    with pytest.raises(SystemExit):
        cli.build_parser().parse_args([])


def test_overrides_applied_to_settings() -> None:
    args = cli.build_parser().parse_args(["--collection", "other", "ingest", "x.pdf", "--chunk-size", "200"])
    config = cli._settings_from_args(args, Settings())
    assert config.collection_name == "other"
    assert config.chunk_size == 200


@pytest.mark.parametrize("argv", [["ask", "q", "--top-k", "0"], ["ingest", "x.pdf", "--chunk-size", "-5"]])
def test_non_positive_counts_rejected_by_parser(argv: list[str], capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as exc_info:
        cli.build_parser().parse_args(argv)
    assert exc_info.value.code == 2
    assert "must be positive" in capsys.readouterr().err


def test_positive_int_rejects_non_integers() -> None:
    import argparse

    assert cli.positive_int("3") == 3
    with pytest.raises(argparse.ArgumentTypeError):
        cli.positive_int("three")


def test_invalid_configuration_exits_non_zero(
    monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
) -> None:
    monkeypatch.setenv("PDF_RAG_EMBEDDING_PROVIDER", "nonexistent")
    monkeypatch.setenv("PDF_RAG_VECTOR_STORE", "memory")
    assert cli.main(["ask", "q"]) == 1
    assert "ask failed" in caplog.text


def test_value_error_during_dispatch_exits_non_zero(runtime: RagRuntime, caplog: pytest.LogCaptureFixture) -> None:
    runtime.engine.default_top_k = 0
    assert cli.main(["ask", "q"], runtime=runtime) == 1
    assert "ask failed" in caplog.text

"""Command-line entry point.

Examples
--------
    pdf-rag ingest documents/chessboard.pdf
    pdf-rag ask "What is the core competitive advantage?"
    pdf-rag run            # ingest documents/*.pdf, then ask the default question
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from collections.abc import Sequence
from pathlib import Path

from pdf_rag.config import Settings
from pdf_rag.errors import RagError
from pdf_rag.logging_utils import configure_logging
from pdf_rag.runtime import RagRuntime, build_runtime

logger = logging.getLogger("pdf_rag.cli")

DEFAULT_QUESTION = "What is the core competitive advantage of the Chinese Chess Learning Assistant?"


def positive_int(value: str) -> int:
    """argparse type for counts that must be at least 1."""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected an integer, got {value!r}") from None
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be positive, got {number}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="pdf-rag", description="PDF retrieval-augmented generation")
    parser.add_argument("--log-level", default=None, help="Override PDF_RAG_LOG_LEVEL")
    parser.add_argument("--collection", default=None, help="Override PDF_RAG_COLLECTION_NAME")
    sub = parser.add_subparsers(dest="command", required=True)

    ingest = sub.add_parser("ingest", help="Chunk, embed and index PDF files")
    ingest.add_argument("paths", nargs="+", help="PDF paths or glob patterns")
    ingest.add_argument("--chunk-size", type=positive_int, default=None, help="Override PDF_RAG_CHUNK_SIZE")

    ask = sub.add_parser("ask", help="Answer a question from the indexed documents")
    ask.add_argument("question")
    ask.add_argument("--top-k", type=positive_int, default=None, help="Override PDF_RAG_RETRIEVAL_TOP_K")

    run = sub.add_parser("run", help="Ingest <documents_dir>/*.pdf, then answer a question")
    run.add_argument("question", nargs="?", default=DEFAULT_QUESTION)
    run.add_argument("--top-k", type=positive_int, default=None)
    return parser


def _settings_from_args(args: argparse.Namespace, base: Settings) -> Settings:
    overrides: dict = {}
    if args.collection:
        overrides["collection_name"] = args.collection
    if getattr(args, "chunk_size", None) is not None:
        overrides["chunk_size"] = args.chunk_size
    if args.log_level:
        overrides["log_level"] = args.log_level
    return base.model_copy(update=overrides) if overrides else base


async def _ingest(runtime: RagRuntime, paths: Sequence[str]) -> None:
    report = await runtime.pipeline.ingest(paths)
    for src in report.sources:
        print(f"{src.source}: {src.chunks} chunk(s) as {src.id_prefix}_*")
    print(f"Inserted {report.inserted} vector(s) into {report.collection!r}")


async def _ask(runtime: RagRuntime, question: str, top_k: int | None) -> None:
    print(await runtime.engine.answer(question, top_k))


async def _dispatch(args: argparse.Namespace, runtime: RagRuntime, config: Settings) -> None:
    if args.command == "ingest":
        await _ingest(runtime, args.paths)
    elif args.command == "ask":
        await _ask(runtime, args.question, args.top_k)
    elif args.command == "run":
        # One source per file so each keeps its own id prefix.
        pdfs = sorted(Path(config.documents_dir).glob("*.pdf"))
        await _ingest(runtime, [str(p) for p in pdfs] or [str(Path(config.documents_dir) / "*.pdf")])
        await _ask(runtime, args.question, args.top_k)


def main(argv: Sequence[str] | None = None, *, runtime: RagRuntime | None = None) -> int:
    """Run the CLI; return the process exit status."""
    args = build_parser().parse_args(argv)
    config = _settings_from_args(args, Settings())
    configure_logging(config.log_level)

    try:
        runtime = runtime or build_runtime(config)
        asyncio.run(_dispatch(args, runtime, config))
    except RagError as exc:
        resource = getattr(exc, "source", None) or getattr(exc, "collection", None) or ""
        logger.error(
            "%s failed%s: %s: %s",
            exc.stage,
            f" ({resource})" if resource else "",
            type(exc).__name__,
            exc,
        )
        return 1
    except ValueError as exc:
        # Invalid settings or arguments that argparse cannot see.
        logger.error("%s failed: %s", args.command, exc)
        return 1
    return 0


def main_entry() -> None:
    """Console-script entry point."""
    sys.exit(main())


if __name__ == "__main__":
    main_entry()

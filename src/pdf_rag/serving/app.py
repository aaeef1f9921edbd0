"""FastAPI application exposing ingestion and question answering over HTTP."""

from __future__ import annotations

from pathlib import Path

from fastapi import FastAPI, HTTPException, Request
from pydantic import BaseModel, Field

from pdf_rag.config import settings
from pdf_rag.errors import CompletionError, EmptyDocumentError, RagError
from pdf_rag.logging_utils import configure_logging
from pdf_rag.runtime import RagRuntime, build_runtime

app = FastAPI(
    title="PDF RAG API",
    version="0.1.0",
    description="Ingest PDF documents and answer questions from them.",
)


# ── Request / Response schemas ────────────────────────────────────────
class QueryRequest(BaseModel):
    """Incoming question from the user."""

    question: str
    top_k: int | None = Field(default=None, gt=0)


class QueryResponse(BaseModel):
    """Answer plus the ids of the chunks it was given."""

    answer: str
    sources: list[str] = []


class IngestRequest(BaseModel):
    """PDF paths (or globs) under the server's documents directory.

    Relative paths are resolved against ``documents_dir``.
    """

    paths: list[str] = Field(min_length=1)
    collection: str | None = None


class IngestResponse(BaseModel):
    collection: str
    inserted: int
    created_collection: bool


# ── Helpers ───────────────────────────────────────────────────────────
def get_runtime(request: Request) -> RagRuntime:
    """Build the runtime on first use and keep it on ``app.state``."""
    runtime = getattr(request.app.state, "runtime", None)
    if runtime is None:
        configure_logging(settings.log_level)
        runtime = build_runtime(settings)
        request.app.state.runtime = runtime
    return runtime


def confine_paths(paths: list[str], documents_dir: str) -> list[str]:
    """Resolve *paths* under *documents_dir*; reject anything that escapes it."""
    root = Path(documents_dir).resolve()
    confined = []
    for raw in paths:
        candidate = Path(raw)
        if not candidate.is_absolute():
            candidate = root / candidate
        resolved = candidate.resolve()
        # Parent references inside a glob are not resolved until expansion.
        if ".." in candidate.parts or not resolved.is_relative_to(root):
            raise HTTPException(status_code=422, detail=f"Path {raw!r} is outside the documents directory")
        confined.append(str(resolved))
    return confined


def _http_error(exc: RagError) -> HTTPException:
    if isinstance(exc, CompletionError):
        return HTTPException(status_code=502, detail=str(exc))
    if isinstance(exc, EmptyDocumentError):
        return HTTPException(status_code=422, detail=str(exc))
    return HTTPException(status_code=500, detail=str(exc))


# ── Routes ────────────────────────────────────────────────────────────
@app.get("/health")
async def health() -> dict[str, str]:
    """Liveness probe."""
    return {"status": "ok"}


@app.post("/query", response_model=QueryResponse)
async def query(body: QueryRequest, request: Request) -> QueryResponse:
    """Retrieve context for the question and return the model's answer."""
    runtime = get_runtime(request)
    try:
        answer, hits = await runtime.engine.answer_with_sources(body.question, body.top_k)
    except RagError as exc:
        raise _http_error(exc) from exc
    return QueryResponse(answer=answer, sources=[h.id for h in hits])


@app.post("/ingest", response_model=IngestResponse)
async def ingest(body: IngestRequest, request: Request) -> IngestResponse:
    """Chunk, embed and index the given PDF files."""
    runtime = get_runtime(request)
    paths = confine_paths(body.paths, runtime.config.documents_dir)
    try:
        report = await runtime.pipeline.ingest(paths, collection_name=body.collection)
    except RagError as exc:
        raise _http_error(exc) from exc
    return IngestResponse(
        collection=report.collection,
        inserted=report.inserted,
        created_collection=report.created_collection,
    )

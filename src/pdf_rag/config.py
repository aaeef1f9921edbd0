"""Shared configuration loaded from environment / .env file."""

from __future__ import annotations

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings

from pdf_rag.retrieval.models import DistanceMetric

DEFAULT_PREAMBLE = (
    "You are a helpful assistant who answers questions by synthesising "
    "information from the multiple relevant documents provided. /no_think"
)


class Settings(BaseSettings):
    """Application-wide settings, populated from ``PDF_RAG_*`` env vars or .env file."""

    # Embedding
    embedding_provider: str = Field(
        default="openai",
        description="'openai' for any OpenAI-compatible /v1/embeddings endpoint, 'huggingface' for local models",
    )
    embedding_model: str = "quentinz/bge-large-zh-v1.5:latest"
    vector_dimensions: int = Field(default=1024, gt=0)

    # LLM
    llm_model_name: str = Field(default="qwen3:4b", description="Completion model identifier")
    temperature: float = Field(default=0.15, ge=0.0, le=2.0)
    system_preamble: str = DEFAULT_PREAMBLE
    openai_api_key: str = Field(
        default="",
        validation_alias=AliasChoices("PDF_RAG_OPENAI_API_KEY", "OPENAI_API_KEY", "openai_api_key"),
    )
    openai_base_url: str = Field(
        default="",
        description=(
            "Base URL for OpenAI-compatible APIs (Ollama, vLLM, ...). "
            "Leave empty to use OpenAI cloud."
        ),
        validation_alias=AliasChoices("PDF_RAG_OPENAI_BASE_URL", "OPENAI_BASE_URL", "openai_base_url"),
    )
    request_timeout: float = Field(default=60.0, gt=0)

    # Chunking / retrieval
    chunk_size: int = Field(default=1000, gt=0, description="Soft cap on characters per chunk")
    retrieval_top_k: int = Field(default=4, gt=0)

    # Vector store
    vector_store: str = Field(default="chroma", description="'chroma' or 'memory'")
    collection_name: str = "chessboard"
    distance_metric: DistanceMetric = DistanceMetric.COSINE
    chroma_host: str = "localhost"
    chroma_port: int = 8000
    chroma_api_key: str = ""
    chroma_ssl: bool = False

    # Misc
    documents_dir: str = "documents"
    log_level: str = "INFO"

    model_config = {
        "env_prefix": "PDF_RAG_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
        "populate_by_name": True,
    }


# Module-level singleton.
settings = Settings()

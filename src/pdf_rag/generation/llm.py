"""LLM initialisation — single place to swap providers.

Any OpenAI-compatible ``/v1/chat/completions`` endpoint works: OpenAI
cloud when ``OPENAI_BASE_URL`` is empty, otherwise a local server such
as Ollama or vLLM.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from langchain_openai import ChatOpenAI

if TYPE_CHECKING:
    from pdf_rag.config import Settings

logger = logging.getLogger(__name__)


def get_llm(config: Settings, temperature: float | None = None) -> ChatOpenAI:
    """Return the configured chat model.

    *temperature* defaults to ``config.temperature``.  When
    ``config.openai_base_url`` is set and no key is configured, a dummy
    key (``"EMPTY"``) is used because local servers do not check it.
    """
    kwargs: dict = {
        "model": config.llm_model_name,
        "temperature": config.temperature if temperature is None else temperature,
        "timeout": config.request_timeout,
    }

    if config.openai_base_url:
        logger.info("Using OpenAI-compatible endpoint: %s", config.openai_base_url)
        kwargs["base_url"] = config.openai_base_url
        # Local servers don't need a real key; LangChain requires a non-empty value.
        kwargs["api_key"] = config.openai_api_key or "EMPTY"
    else:
        kwargs["api_key"] = config.openai_api_key

    return ChatOpenAI(**kwargs)

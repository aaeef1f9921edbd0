"""
Generation — answer questions from retrieved chunks.

Public API
----------
- :class:`RAGQueryEngine` — retrieve top-k chunks and ask the LLM.
- :class:`AugmentedPrompt` — preamble + retrieved context + question.
- :func:`get_llm` — configured chat model.
"""

from pdf_rag.generation.engine import RAGQueryEngine
from pdf_rag.generation.llm import get_llm
from pdf_rag.generation.prompts import AugmentedPrompt, build_rag_prompt

__all__ = [
    "AugmentedPrompt",
    "RAGQueryEngine",
    "build_rag_prompt",
    "get_llm",
]

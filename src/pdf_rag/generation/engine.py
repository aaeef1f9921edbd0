"""Retrieval-augmented query engine."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from pdf_rag.errors import CompletionError
from pdf_rag.generation.prompts import AugmentedPrompt
from pdf_rag.retrieval.models import Query, ScoredDocument
from pdf_rag.retrieval.retriever import SemanticRetriever

if TYPE_CHECKING:
    from langchain_core.language_models import BaseChatModel

    from pdf_rag.config import Settings

logger = logging.getLogger(__name__)


def _message_text(content: str | list) -> str:
    """Text of a chat message whose content may be a list of content blocks."""
    if isinstance(content, str):
        return content
    parts = []
    for block in content:
        if isinstance(block, str):
            parts.append(block)
        elif isinstance(block, dict) and block.get("type") == "text":
            parts.append(block.get("text", ""))
    return "".join(parts)


class RAGQueryEngine:
    """Answer a question from the top-k chunks of one collection.

    The sampling temperature is fixed on *llm* when it is built (see
    :func:`pdf_rag.generation.llm.get_llm`); the engine only supplies the
    messages.

    Parameters
    ----------
    retriever:
        Searches the collection with the ingestion embedding model.
    llm:
        Chat model used for the completion call.
    system_preamble:
        Fixed system message sent with every question.
    default_top_k:
        Number of chunks injected when :meth:`answer` gets no ``top_k``.
    """

    def __init__(
        self,
        retriever: SemanticRetriever,
        llm: BaseChatModel,
        *,
        system_preamble: str,
        default_top_k: int = 4,
    ) -> None:
        self.retriever = retriever
        self.llm = llm
        self.system_preamble = system_preamble
        self.default_top_k = default_top_k

    @classmethod
    def from_settings(cls, config: Settings, retriever: SemanticRetriever, llm: BaseChatModel) -> RAGQueryEngine:
        return cls(
            retriever,
            llm,
            system_preamble=config.system_preamble,
            default_top_k=config.retrieval_top_k,
        )

    async def retrieve(self, question: str, top_k: int | None = None) -> list[ScoredDocument]:
        """Return up to *top_k* hits for *question*, most similar first."""
        query = Query(text=question, top_k=self.default_top_k if top_k is None else top_k)
        return await self.retriever.search(query.text, k=query.top_k)

    def build_prompt(self, question: str, hits: list[ScoredDocument]) -> AugmentedPrompt:
        return AugmentedPrompt(
            system_preamble=self.system_preamble,
            retrieved_context=[h.document for h in hits if h.document is not None],
            user_query=question,
        )

    async def complete(self, prompt: AugmentedPrompt) -> str:
        """Send *prompt* to the LLM and return its text verbatim."""
        try:
            response = await self.llm.ainvoke(prompt.to_messages())
        except Exception as exc:
            raise CompletionError(prompt.user_query, str(exc)) from exc

        return _message_text(response.content)

    async def answer(self, question: str, top_k: int | None = None) -> str:
        """Retrieve context for *question* and return the model's answer."""
        answer, _ = await self.answer_with_sources(question, top_k)
        return answer

    async def answer_with_sources(self, question: str, top_k: int | None = None) -> tuple[str, list[ScoredDocument]]:
        """Like :meth:`answer` but also return the hits used as context."""
        hits = await self.retrieve(question, top_k)
        logger.info("Answering with %d retrieved chunk(s)", len(hits))
        answer = await self.complete(self.build_prompt(question, hits))
        return answer, hits

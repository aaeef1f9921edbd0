"""Prompt assembly for retrieval-augmented completion."""

from __future__ import annotations

from langchain_core.messages import BaseMessage, HumanMessage, SystemMessage
from pydantic import BaseModel, Field

from pdf_rag.retrieval.models import Document


class AugmentedPrompt(BaseModel):
    """Preamble, retrieved context (most similar first) and the user question."""

    system_preamble: str
    retrieved_context: list[Document] = Field(default_factory=list)
    user_query: str

    def to_messages(self) -> list[BaseMessage]:
        return build_rag_prompt(self)


def _format_context(documents: list[Document]) -> str:
    parts = [f"<document id={doc.id!r}>\n{doc.content}\n</document>" for doc in documents]
    return "\n\n".join(parts)


def build_rag_prompt(prompt: AugmentedPrompt) -> list[BaseMessage]:
    """Assemble chat messages for a retrieval-augmented completion call.

    With no retrieved context the user message is the bare question.

    Returns
    -------
    list[BaseMessage]
        ``[SystemMessage, HumanMessage]`` ready for ``.ainvoke()``.
    """
    if prompt.retrieved_context:
        user_msg = (
            f"Context documents:\n{_format_context(prompt.retrieved_context)}\n\n"
            f"Question: {prompt.user_query}"
        )
    else:
        user_msg = prompt.user_query

    return [
        SystemMessage(content=prompt.system_preamble),
        HumanMessage(content=user_msg),
    ]

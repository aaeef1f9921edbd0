"""Word-boundary text chunking."""

from __future__ import annotations

from typing import Any

from langchain_text_splitters import TextSplitter


def chunk_text(raw_text: str, max_chunk_size: int) -> list[str]:
    """Split *raw_text* into whitespace-delimited chunks of at most *max_chunk_size* chars.

    Tokens are accumulated, each followed by a single space, and the
    buffer is flushed (trimmed) as soon as appending the next token would
    push it past *max_chunk_size*.  Words are never split: a token longer
    than the cap becomes a chunk of its own, so the size is a soft cap.

    Parameters
    ----------
    raw_text:
        Extracted document text; any whitespace is a separator.
    max_chunk_size:
        Soft cap on characters per chunk.

    Returns
    -------
    list[str]
        Non-empty, trimmed chunks in document order.  Empty input gives ``[]``.
    """
    if max_chunk_size < 1:
        raise ValueError(f"max_chunk_size must be >= 1, got {max_chunk_size}")

    chunks: list[str] = []
    current = ""
    for word in raw_text.split():
        if current and len(current) + len(word) + 1 > max_chunk_size:
            chunks.append(current.strip())
            current = ""
        current += word + " "

    if current:
        chunks.append(current.strip())
    return chunks


class WordBoundaryTextSplitter(TextSplitter):
    """LangChain ``TextSplitter`` running :func:`chunk_text`.

    Chunks never overlap; ``chunk_size`` is the soft character cap.
    """

    def __init__(self, chunk_size: int = 1000, **kwargs: Any) -> None:
        kwargs.setdefault("chunk_overlap", 0)
        super().__init__(chunk_size=chunk_size, **kwargs)

    @property
    def max_chunk_size(self) -> int:
        return self._chunk_size

    def split_text(self, text: str) -> list[str]:
        return chunk_text(text, self._chunk_size)

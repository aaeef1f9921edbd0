"""Document extraction — PDF files to raw text, one block per file."""

from __future__ import annotations

import glob
import logging
from abc import ABC, abstractmethod
from pathlib import Path

from langchain_community.document_loaders import PyPDFLoader

from pdf_rag.errors import ExtractionError
from pdf_rag.retrieval.models import ExtractedText

logger = logging.getLogger(__name__)


class DocumentExtractor(ABC):
    """Turns a path (or glob pattern) into raw text blocks.

    Extraction is best-effort: a unit that cannot be read is logged and
    skipped; the remaining units are still returned.
    """

    def extract(self, path: str | Path) -> list[ExtractedText]:
        """Return one :class:`ExtractedText` per readable, non-empty unit."""
        blocks: list[ExtractedText] = []
        for unit in self.expand(path):
            try:
                text = self.extract_unit(unit)
            except ExtractionError as exc:
                logger.warning("Skipping %s: %s", unit, exc)
                continue
            if not text.strip():
                logger.warning("Skipping %s: no extractable text", unit)
                continue
            blocks.append(ExtractedText(source=str(unit), text=text))
        logger.info("Extracted %d unit(s) from %s", len(blocks), path)
        return blocks

    def expand(self, path: str | Path) -> list[Path]:
        """Resolve *path* to the list of units it names.

        A literal path names itself; anything else is treated as a glob
        pattern (``**`` allowed).  Matches are returned sorted.
        """
        path = str(path)
        if Path(path).exists() or not glob.has_magic(path):
            return [Path(path)]
        return [Path(p) for p in sorted(glob.glob(path, recursive=True)) if Path(p).is_file()]

    @abstractmethod
    def extract_unit(self, path: Path) -> str:
        """Return the raw text of one unit or raise :class:`ExtractionError`."""
        ...


class PdfExtractor(DocumentExtractor):
    """PDF text extraction via LangChain's ``PyPDFLoader`` (pypdf).

    Pages are joined with newlines so a file becomes a single block.
    """

    def extract_unit(self, path: Path) -> str:
        try:
            pages = PyPDFLoader(str(path)).load()
        except Exception as exc:
            raise ExtractionError(str(path), str(exc)) from exc
        logger.debug("Loaded %d page(s) from %s", len(pages), path)
        return "\n".join(page.page_content for page in pages)

"""Word-processor (DOCX) text extraction stage."""

import asyncio
import io
import logging

import docx

from recruit_memory.errors import ExtractionError
from recruit_memory.extraction.protocol import StageOutput
from recruit_memory.extraction.text import clean_text
from recruit_memory.models import Document

logger = logging.getLogger(__name__)

ZIP_MAGIC = b"PK"
WORD_MIME_MARKERS = ("officedocument.wordprocessingml.document", "docx")


def looks_like_docx(document: Document) -> bool:
    """DOCX by declared type, or any ZIP-family container by magic number."""
    mime = (document.mime_type or "").lower()
    if any(marker in mime for marker in WORD_MIME_MARKERS):
        return True
    return document.content[:2] == ZIP_MAGIC


def _read_docx(content: bytes) -> str:
    doc = docx.Document(io.BytesIO(content))

    parts = [paragraph.text for paragraph in doc.paragraphs]
    for table in doc.tables:
        for row in table.rows:
            parts.extend(cell.text for cell in row.cells)

    return "\n".join(part for part in parts if part)


class DocxTextStage:
    """
    Raw text from DOCX containers via python-docx.

    Exclusive: a ZIP-family file is never handed to the PDF or OCR stages,
    so a parse failure here fails the extraction.
    """

    method = "docx-text"
    exclusive = True
    fallthrough_on_error = False

    def applies_to(self, document: Document) -> bool:
        return looks_like_docx(document)

    async def extract(self, document: Document) -> StageOutput:
        try:
            raw = await asyncio.to_thread(_read_docx, document.content)
        except Exception as e:
            logger.warning(f"DOCX parsing failed: {e}")
            raise ExtractionError("Failed to parse DOCX file") from e

        text = clean_text(raw)
        logger.info(f"DOCX parsed: {len(text)} chars")
        return StageOutput(text=text)

    def accepts(self, output: StageOutput) -> bool:
        return True

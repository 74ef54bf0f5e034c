"""Native PDF text extraction stage."""

import asyncio
import io
import logging
from typing import Tuple

import pdfplumber

from recruit_memory.extraction.protocol import StageOutput
from recruit_memory.extraction.text import clean_text
from recruit_memory.models import Document

logger = logging.getLogger(__name__)

# Below this many characters a PDF is treated as scanned/image-only
MIN_NATIVE_TEXT_LENGTH = 100


def _read_pdf(content: bytes) -> Tuple[str, int]:
    """Extract text from each PDF page and concatenate with newlines."""
    text = []
    with pdfplumber.open(io.BytesIO(content)) as pdf:
        for page in pdf.pages:
            text.append(page.extract_text() or "")
        page_count = len(pdf.pages)

    return "\n".join(text), page_count


class PdfTextStage:
    """
    Text layer extraction via pdfplumber.

    Output shorter than min_length (image-only PDFs) and parser errors both
    fall through to the next stage.
    """

    method = "pdf-text"
    exclusive = False
    fallthrough_on_error = True

    def __init__(self, min_length: int = MIN_NATIVE_TEXT_LENGTH):
        self.min_length = min_length

    def applies_to(self, document: Document) -> bool:
        return True

    async def extract(self, document: Document) -> StageOutput:
        raw, page_count = await asyncio.to_thread(_read_pdf, document.content)
        text = clean_text(raw)

        logger.info(f"PDF parsed natively: {len(text)} chars, {page_count} pages")
        return StageOutput(text=text, page_count=page_count or None)

    def accepts(self, output: StageOutput) -> bool:
        if len(output.text) < self.min_length:
            logger.info(
                f"PDF text layer too thin ({len(output.text)} chars), "
                "treating as image-based"
            )
            return False
        return True

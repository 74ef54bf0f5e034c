"""
Document-to-text extraction pipeline.

Runs an ordered chain of extraction stages against an uploaded CV and returns
the first acceptable result:

1. DocxTextStage: word-processor containers (exclusive)
2. PdfTextStage: native PDF text layer (falls through when too thin)
3. VisionOCRStage: hosted vision model OCR (last resort)

Size, emptiness and format are validated before any stage runs, and results
shorter than MIN_TEXT_LENGTH are rejected after.
"""

import asyncio
import logging
from typing import List, Optional, Sequence

from recruit_memory.config import DEFAULT_MAX_UPLOAD_BYTES, Settings
from recruit_memory.errors import (
    EmptyDocumentError,
    ExtractionError,
    FileTooLargeError,
    UnsupportedFormatError,
)
from recruit_memory.extraction.docx_stage import WORD_MIME_MARKERS, DocxTextStage
from recruit_memory.extraction.pdf_stage import PdfTextStage
from recruit_memory.extraction.protocol import ExtractionStage, StageOutput
from recruit_memory.extraction.text import clean_text, word_count
from recruit_memory.models import MIN_TEXT_LENGTH, Document, ExtractionResult

logger = logging.getLogger(__name__)

GENERIC_BINARY_TYPES = {
    "application/octet-stream",
    "binary/octet-stream",
    "application/zip",
    "application/x-zip-compressed",
}


def is_supported_mime_type(mime_type: Optional[str]) -> bool:
    """Word-processor, PDF, image, generic binary, or undeclared."""
    if not mime_type:
        return True
    mime = mime_type.split(";")[0].strip().lower()
    if not mime:
        return True
    if any(marker in mime for marker in WORD_MIME_MARKERS):
        return True
    return "pdf" in mime or mime.startswith("image/") or mime in GENERIC_BINARY_TYPES


class ExtractionPipeline:
    """
    Ordered fallback chain of extraction stages.

    Example:
        >>> pipeline = ExtractionPipeline.from_settings(Settings.from_env())
        >>> result = await pipeline.extract(Document(content=pdf_bytes, mime_type="application/pdf"))
        >>> result.method
        'pdf-text'
    """

    def __init__(
        self,
        stages: Sequence[ExtractionStage],
        max_bytes: int = DEFAULT_MAX_UPLOAD_BYTES,
        stage_timeout: float = 60.0,
        min_text_length: int = MIN_TEXT_LENGTH,
    ):
        """
        Args:
            stages: Stages in evaluation order
            max_bytes: Files larger than this are rejected before extraction
            stage_timeout: Upper bound in seconds for each stage attempt
            min_text_length: Shorter final text fails the extraction
        """
        if not stages:
            raise ValueError("ExtractionPipeline needs at least one stage")

        self.stages: List[ExtractionStage] = list(stages)
        self.max_bytes = max_bytes
        self.stage_timeout = stage_timeout
        self.min_text_length = max(min_text_length, MIN_TEXT_LENGTH)

        logger.info(
            f"ExtractionPipeline initialized with stages "
            f"{[stage.method for stage in self.stages]}, max_bytes={max_bytes}"
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "ExtractionPipeline":
        stages: List[ExtractionStage] = [DocxTextStage(), PdfTextStage()]

        if settings.openai_api_key:
            from recruit_memory.extraction.vision_stage import VisionOCRStage

            stages.append(
                VisionOCRStage(
                    model=settings.vision_model,
                    api_key=settings.openai_api_key,
                    base_url=settings.openai_base_url,
                    max_tokens=settings.vision_max_tokens,
                    timeout=settings.extraction_timeout,
                )
            )
        else:
            logger.warning("No OpenAI credential configured; scanned PDFs cannot be OCR'd")

        return cls(
            stages=stages,
            max_bytes=settings.max_upload_bytes,
            stage_timeout=settings.extraction_timeout,
        )

    def validate(self, document: Document) -> None:
        """
        Reject documents that must not reach any stage.

        Raises:
            EmptyDocumentError: No bytes were uploaded
            FileTooLargeError: Larger than max_bytes
            UnsupportedFormatError: Declared type is not one we can read
        """
        if document is None or not document.content:
            raise EmptyDocumentError("No file content received")

        if document.size_bytes > self.max_bytes:
            raise FileTooLargeError(document.size_bytes, self.max_bytes)

        if not is_supported_mime_type(document.mime_type):
            raise UnsupportedFormatError(document.mime_type)

    async def extract(self, document: Document) -> ExtractionResult:
        """
        Turn a document into cleaned text.

        Returns:
            ExtractionResult from the first stage whose output is accepted

        Raises:
            DocumentValidationError: See validate()
            ExtractionError: Every applicable stage failed or the text is too short
        """
        self.validate(document)

        carried_page_count: Optional[int] = None

        for stage in self.stages:
            if not stage.applies_to(document):
                continue

            logger.debug(f"Attempting {stage.method} extraction ({document.size_bytes} bytes)")

            try:
                output = await asyncio.wait_for(stage.extract(document), timeout=self.stage_timeout)
            except asyncio.TimeoutError as e:
                if self._can_fall_through(stage):
                    logger.warning(f"{stage.method} timed out, trying next stage")
                    continue
                raise ExtractionError(
                    f"{stage.method} extraction timed out after {self.stage_timeout}s"
                ) from e
            except ExtractionError:
                if self._can_fall_through(stage):
                    continue
                raise
            except Exception as e:
                if self._can_fall_through(stage):
                    logger.warning(f"{stage.method} failed ({e}), trying next stage")
                    continue
                raise ExtractionError(f"{stage.method} extraction failed: {e}") from e

            if output.page_count is None:
                output.page_count = carried_page_count
            else:
                carried_page_count = output.page_count

            if stage.accepts(output) or stage.exclusive:
                return self._finalize(stage, output, document)

        raise ExtractionError("Could not extract text from this document")

    def _can_fall_through(self, stage: ExtractionStage) -> bool:
        return stage.fallthrough_on_error and not stage.exclusive

    def _finalize(
        self, stage: ExtractionStage, output: StageOutput, document: Document
    ) -> ExtractionResult:
        text = clean_text(output.text)
        if len(text) < self.min_text_length:
            logger.warning(f"{stage.method} produced only {len(text)} chars, rejecting")
            raise ExtractionError("Extracted text is too short or empty")

        result = ExtractionResult(
            text=text,
            method=stage.method,
            confidence=output.confidence,
            page_count=output.page_count,
            token_count=word_count(text),
            content_type=document.mime_type,
        )

        logger.info(
            f"Extracted {len(text)} chars via {result.method} "
            f"(pages={result.page_count}, confidence={result.confidence})"
        )
        return result

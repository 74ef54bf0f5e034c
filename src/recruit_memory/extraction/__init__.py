"""
CV text extraction.

Converts uploaded file bytes into cleaned text through an ordered fallback
chain: DOCX text, native PDF text, then vision-model OCR.
"""

from recruit_memory.extraction.docx_stage import DocxTextStage, looks_like_docx
from recruit_memory.extraction.pdf_stage import MIN_NATIVE_TEXT_LENGTH, PdfTextStage
from recruit_memory.extraction.pipeline import ExtractionPipeline, is_supported_mime_type
from recruit_memory.extraction.protocol import ExtractionStage, StageOutput
from recruit_memory.extraction.text import clean_text, sanitize_for_storage, word_count
from recruit_memory.extraction.vision_stage import VISION_OCR_CONFIDENCE, VisionOCRStage

__all__ = [
    "DocxTextStage",
    "ExtractionPipeline",
    "ExtractionStage",
    "MIN_NATIVE_TEXT_LENGTH",
    "PdfTextStage",
    "StageOutput",
    "VISION_OCR_CONFIDENCE",
    "VisionOCRStage",
    "clean_text",
    "is_supported_mime_type",
    "looks_like_docx",
    "sanitize_for_storage",
    "word_count",
]

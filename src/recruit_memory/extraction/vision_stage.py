"""Vision-model OCR stage, the last resort for scanned documents."""

import base64
import logging
import os
from typing import Any, Optional

from openai import AsyncOpenAI

from recruit_memory.errors import ExtractionError
from recruit_memory.extraction.prompts import OCR_TRANSCRIPTION_PROMPT
from recruit_memory.extraction.protocol import StageOutput
from recruit_memory.extraction.text import clean_text
from recruit_memory.models import Document

logger = logging.getLogger(__name__)

# Fixed placeholder, not derived from the provider response
VISION_OCR_CONFIDENCE = 0.95


def _payload_mime_type(document: Document) -> str:
    mime = (document.mime_type or "").split(";")[0].strip().lower()
    if mime.startswith("image/") or mime == "application/pdf":
        return mime
    return "application/pdf"


class VisionOCRStage:
    """
    OCR through a hosted multimodal chat model.

    The raw file is embedded as a base64 data URL next to a verbatim
    transcription instruction. Decoding is deterministic (temperature 0) and
    the output length is bounded by max_tokens.
    """

    method = "vision-ocr"
    exclusive = False
    fallthrough_on_error = False

    def __init__(
        self,
        model: str = "gpt-4o",
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        max_tokens: int = 4000,
        timeout: float = 60.0,
        prompt: Optional[str] = None,
        client: Optional[Any] = None,
    ):
        """
        Args:
            model: Vision-capable chat model
            api_key: OpenAI API key (None = use OPENAI_API_KEY env var)
            base_url: Custom OpenAI-compatible endpoint
            max_tokens: Upper bound on transcription length
            timeout: Request timeout in seconds
            prompt: Transcription instruction (default: OCR_TRANSCRIPTION_PROMPT)
            client: Pre-built AsyncOpenAI-compatible client
        """
        self.model = model
        self.max_tokens = max_tokens
        self.prompt = prompt or OCR_TRANSCRIPTION_PROMPT
        self._client = client or AsyncOpenAI(
            api_key=api_key or os.getenv("OPENAI_API_KEY"),
            base_url=base_url,
            timeout=timeout,
            max_retries=0,
        )
        self.call_count = 0

        logger.info(f"VisionOCRStage initialized: model={model}, max_tokens={max_tokens}")

    def applies_to(self, document: Document) -> bool:
        return True

    async def extract(self, document: Document) -> StageOutput:
        encoded = base64.b64encode(document.content).decode("ascii")
        data_url = f"data:{_payload_mime_type(document)};base64,{encoded}"

        self.call_count += 1
        try:
            response = await self._client.chat.completions.create(
                model=self.model,
                messages=[
                    {
                        "role": "user",
                        "content": [
                            {"type": "text", "text": self.prompt},
                            {"type": "image_url", "image_url": {"url": data_url, "detail": "high"}},
                        ],
                    }
                ],
                max_tokens=self.max_tokens,
                temperature=0,
            )
        except Exception as e:
            logger.error(f"Vision OCR failed: {e}")
            raise ExtractionError(f"Vision API failed: {e}") from e

        content = ""
        if response.choices:
            content = response.choices[0].message.content or ""

        text = clean_text(content)
        logger.info(f"Vision OCR complete: {len(text)} chars")
        return StageOutput(text=text, confidence=VISION_OCR_CONFIDENCE)

    def accepts(self, output: StageOutput) -> bool:
        return True

"""
Extraction stage protocol.

The pipeline is an ordered list of stages. Each stage pairs a predicate
(applies_to) with an extractor (extract) and a sufficiency check (accepts).
Two flags control how the chain continues:

- exclusive: once the predicate matches, no later stage runs
- fallthrough_on_error: an exception hands over to the next stage instead
  of failing the whole extraction
"""

from dataclasses import dataclass
from typing import Optional, Protocol

from recruit_memory.models import Document, ExtractionMethod


@dataclass
class StageOutput:
    """
    Text produced by one stage.

    Attributes:
        text: Cleaned text
        page_count: Pages reported by the parser, if known
        confidence: Probability-like score, None for native extraction
    """

    text: str
    page_count: Optional[int] = None
    confidence: Optional[float] = None


class ExtractionStage(Protocol):
    method: ExtractionMethod
    exclusive: bool
    fallthrough_on_error: bool

    def applies_to(self, document: Document) -> bool:
        """Whether this stage should be attempted for the document."""
        ...

    async def extract(self, document: Document) -> StageOutput:
        """
        Extract text from the document.

        Raises:
            Exception: Any parser or provider failure
        """
        ...

    def accepts(self, output: StageOutput) -> bool:
        """Whether the output is good enough to stop the chain here."""
        ...

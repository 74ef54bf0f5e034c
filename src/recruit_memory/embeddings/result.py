"""
Result type for embedding calls.

Embedding is best-effort everywhere in recruit-memory. Internally every call
returns an EmbedOutcome carrying either a vector or the reason it failed;
call sites decide whether that means "proceed without a vector", an empty
batch, or lexical search.
"""

from dataclasses import dataclass
from typing import Literal, Optional

from recruit_memory.models import EmbeddingVector

EmbedFailureReason = Literal["empty_input", "not_configured", "timeout", "provider_error"]


@dataclass
class EmbedError:
    reason: EmbedFailureReason
    message: str = ""


@dataclass
class EmbedOutcome:
    """Either ``vector`` or ``error`` is set, never both."""

    vector: Optional[EmbeddingVector] = None
    error: Optional[EmbedError] = None

    @classmethod
    def success(cls, vector: EmbeddingVector) -> "EmbedOutcome":
        return cls(vector=vector)

    @classmethod
    def failure(cls, reason: EmbedFailureReason, message: str = "") -> "EmbedOutcome":
        return cls(error=EmbedError(reason=reason, message=message))

    @property
    def ok(self) -> bool:
        return self.vector is not None

    def unwrap_or_none(self) -> Optional[EmbeddingVector]:
        return self.vector

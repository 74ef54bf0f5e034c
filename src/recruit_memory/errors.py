"""
Exception hierarchy for recruit-memory.

Document validation and extraction failures are typed so callers can tell
"file too large" from "unsupported format" from "could not read this file".
Embedding failures never surface as exceptions; see EmbedOutcome.
"""

from typing import Optional


class RecruitMemoryError(Exception):
    """Base class for all recruit-memory errors."""


class DocumentValidationError(RecruitMemoryError):
    """The uploaded file is missing, oversized, or of a format we do not read."""

    error_kind = "invalid"


class EmptyDocumentError(DocumentValidationError):
    error_kind = "empty"


class FileTooLargeError(DocumentValidationError):
    error_kind = "too_large"

    def __init__(self, size_bytes: int, max_bytes: int):
        super().__init__(
            f"File is {size_bytes} bytes, exceeding the {max_bytes} byte limit"
        )
        self.size_bytes = size_bytes
        self.max_bytes = max_bytes


class UnsupportedFormatError(DocumentValidationError):
    error_kind = "unsupported"

    def __init__(self, mime_type: Optional[str]):
        super().__init__(f"Unsupported document type: {mime_type}")
        self.mime_type = mime_type


class ExtractionError(RecruitMemoryError):
    """Every applicable extraction stage failed, or the text was too short."""

    error_kind = "unreadable"


class ProviderError(RecruitMemoryError):
    """A hosted model provider call failed (network, timeout, rate limit)."""

    def __init__(self, message: str, provider: Optional[str] = None):
        super().__init__(message)
        self.provider = provider


class StoreError(RecruitMemoryError):
    """Persistence failed."""

    error_kind = "store"


class SessionNotFoundError(StoreError):
    def __init__(self, session_id: str):
        super().__init__(f"Conversation session {session_id} not found")
        self.session_id = session_id

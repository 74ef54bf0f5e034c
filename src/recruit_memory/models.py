import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Any, List, Literal, Optional

from pydantic import BaseModel, Field

# Extracted text shorter than this is never stored as a successful parse
MIN_TEXT_LENGTH = 50

ExtractionMethod = Literal["docx-text", "pdf-text", "vision-ocr"]
MessageRole = Literal["user", "assistant", "system"]
ParseStatus = Literal["queued", "processing", "done", "error"]
MemoryType = Literal["decision", "note", "preference", "insight"]


def _new_id() -> str:
    return str(uuid.uuid4())


@dataclass
class Document:
    """An uploaded file as received from the caller. Never persisted."""

    content: bytes
    mime_type: Optional[str] = None

    @property
    def size_bytes(self) -> int:
        return len(self.content)


class ExtractionResult(BaseModel):
    """Cleaned text produced by the extraction pipeline."""

    text: str = Field(
        ..., min_length=MIN_TEXT_LENGTH, description="Control-stripped, whitespace-collapsed text"
    )
    method: ExtractionMethod = Field(..., description="Stage that produced the text")
    confidence: Optional[float] = Field(
        default=None, ge=0.0, le=1.0, description="None for native text extraction"
    )
    page_count: Optional[int] = Field(default=None, ge=0)
    token_count: int = Field(default=0, ge=0, description="Whitespace-separated word count")
    content_type: Optional[str] = None


class EmbeddingVector(BaseModel):
    values: List[float]
    model_id: str
    token_usage: int = 0

    @property
    def dimension(self) -> int:
        return len(self.values)


class ConversationSession(BaseModel):
    """Model for a time-windowed assistant conversation"""

    id: str = Field(default_factory=_new_id)
    org_id: str
    user_id: str
    title: Optional[str] = None
    summary: Optional[str] = None
    message_count: int = Field(default=0, ge=0)
    candidate_count: int = Field(default=0, ge=0)
    actions_taken: List[Any] = Field(default_factory=list)
    started_at: datetime = Field(default_factory=datetime.now)
    last_active_at: datetime = Field(default_factory=datetime.now)


class ConversationMessage(BaseModel):
    """Model for one append-only message in a session"""

    id: str = Field(default_factory=_new_id)
    session_id: str
    org_id: Optional[str] = None
    user_id: Optional[str] = None
    role: MessageRole
    content: str
    tool_calls: Optional[Any] = None
    tool_results: Optional[Any] = None
    metadata: dict = Field(default_factory=dict)
    created_at: datetime = Field(default_factory=datetime.now)


class ContextMemory(BaseModel):
    """Model for a durable fact the assistant may recall across sessions"""

    id: str = Field(default_factory=_new_id)
    org_id: str
    user_id: str
    session_id: Optional[str] = None
    memory_type: str = Field(..., description="e.g. decision, note, preference, insight")
    content: str
    embedding: Optional[List[float]] = Field(
        default=None, description="None when embedding failed; searched lexically"
    )
    embedding_model: Optional[str] = Field(
        default=None, description="Model that produced the embedding"
    )
    related_entity_ids: List[str] = Field(default_factory=list)
    metadata: dict = Field(default_factory=dict)
    created_at: datetime = Field(default_factory=datetime.now)


class CVAnalysis(BaseModel):
    """Extracted CV text persisted per candidate (replaced on re-parse)"""

    candidate_id: str
    org_id: str
    text: str
    page_count: Optional[int] = None
    token_count: int = 0
    confidence: Optional[float] = None
    method: Optional[ExtractionMethod] = None
    created_at: datetime = Field(default_factory=datetime.now)


class CandidateEmbedding(BaseModel):
    """Embedding of a candidate's CV text (replaced on re-parse)"""

    candidate_id: str
    org_id: str
    embedding: List[float]
    model_id: str
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: Optional[datetime] = None

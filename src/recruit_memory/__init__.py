"""
recruit-memory: CV extraction, text embeddings and conversational memory for a recruiting assistant.

Core components:
- extraction: Document-to-text fallback chain (DOCX, native PDF, vision OCR)
- embeddings: Best-effort embedding service with a TTL/LRU query cache
- conversation_memory: Windowed sessions, messages and searchable context memories
- ingestion: CV parse flow and embedding backfill
- assistant: Per-turn session bracket and memory tools
- storage: Protocols plus in-memory and SQLAlchemy backends
"""

__version__ = "0.1.0"

from recruit_memory.config import Settings
from recruit_memory.conversation_memory import ConversationMemoryService
from recruit_memory.embeddings import EmbeddingService, EmbedOutcome
from recruit_memory.errors import (
    DocumentValidationError,
    EmptyDocumentError,
    ExtractionError,
    FileTooLargeError,
    ProviderError,
    RecruitMemoryError,
    SessionNotFoundError,
    StoreError,
    UnsupportedFormatError,
)
from recruit_memory.extraction import ExtractionPipeline
from recruit_memory.ingestion import CVIngestionService, backfill_embeddings
from recruit_memory.models import (
    CandidateEmbedding,
    ContextMemory,
    ConversationMessage,
    ConversationSession,
    CVAnalysis,
    Document,
    EmbeddingVector,
    ExtractionResult,
)

__all__ = [
    "__version__",
    "Settings",
    # Models
    "CandidateEmbedding",
    "ContextMemory",
    "ConversationMessage",
    "ConversationSession",
    "CVAnalysis",
    "Document",
    "EmbeddingVector",
    "ExtractionResult",
    # Services
    "ConversationMemoryService",
    "CVIngestionService",
    "EmbeddingService",
    "EmbedOutcome",
    "ExtractionPipeline",
    "backfill_embeddings",
    # Errors
    "DocumentValidationError",
    "EmptyDocumentError",
    "ExtractionError",
    "FileTooLargeError",
    "ProviderError",
    "RecruitMemoryError",
    "SessionNotFoundError",
    "StoreError",
    "UnsupportedFormatError",
]

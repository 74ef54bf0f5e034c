"""
Storage protocols and backends.

Each protocol has an in-memory backend for tests and single-process use and a
SQLAlchemy backend for PostgreSQL or SQLite.
"""

from recruit_memory.storage.analysis import (
    InMemoryCandidateAnalysisStore,
    SQLAlchemyCandidateAnalysisStore,
)
from recruit_memory.storage.conversation import (
    InMemoryConversationStore,
    SQLAlchemyConversationStore,
)
from recruit_memory.storage.protocols import CandidateAnalysisStore, ConversationStore

__all__ = [
    "CandidateAnalysisStore",
    "ConversationStore",
    "InMemoryCandidateAnalysisStore",
    "InMemoryConversationStore",
    "SQLAlchemyCandidateAnalysisStore",
    "SQLAlchemyConversationStore",
]

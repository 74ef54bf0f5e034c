"""
Storage protocol definitions for conversations and candidate analyses.

These protocols define the interface that storage implementations must provide.
They are implementation-agnostic and can be backed by various databases
(PostgreSQL, SQLite, in-memory, etc.). Timestamps are always supplied by the
caller so that services can run against an injected clock.
"""

from datetime import datetime
from typing import Any, List, Optional, Protocol, Tuple

from recruit_memory.models import (
    CandidateEmbedding,
    ContextMemory,
    ConversationMessage,
    ConversationSession,
    CVAnalysis,
    ParseStatus,
)


class ConversationStore(Protocol):
    """
    Protocol for assistant sessions, their messages, and context memories.

    Messages are append-only. Appending a message must bump the parent
    session's message_count and last_active_at in the same transaction.
    """

    def create_session(self, session: ConversationSession) -> str:
        """
        Persist a new session.

        Returns:
            The session ID
        """
        ...

    def get_session(self, session_id: str) -> Optional[ConversationSession]:
        """Retrieve a session by ID, or None if unknown."""
        ...

    def find_active_session(
        self, org_id: str, user_id: str, active_since: datetime
    ) -> Optional[ConversationSession]:
        """
        Most recently active session of a user with last_active_at > active_since.

        Args:
            org_id: Organization ID
            user_id: User (admin) ID
            active_since: Sessions idle since before this instant are ignored

        Returns:
            The session, or None when the user has no recent session
        """
        ...

    def touch_session(self, session_id: str, now: datetime) -> bool:
        """
        Advance last_active_at to now (never backwards).

        Returns:
            True if the session exists
        """
        ...

    def list_sessions(self, org_id: str, user_id: str, limit: int = 10) -> List[ConversationSession]:
        """Sessions of a user, most recently active first."""
        ...

    def append_message(self, message: ConversationMessage) -> str:
        """
        Append a message and bump the session counters atomically.

        Returns:
            The message ID

        Raises:
            SessionNotFoundError: If message.session_id is unknown
        """
        ...

    def get_recent_messages(self, session_id: str, limit: int = 20) -> List[ConversationMessage]:
        """
        The newest `limit` messages of a session.

        Returns:
            Messages ordered by creation (oldest first)
        """
        ...

    def update_session_summary(self, session_id: str, title: str, summary: str) -> None:
        """
        Overwrite title and summary.

        Raises:
            SessionNotFoundError: If the session is unknown
        """
        ...

    def append_action(self, session_id: str, action: Any) -> None:
        """
        Append an action to the session's ordered action log.

        Raises:
            SessionNotFoundError: If the session is unknown
        """
        ...

    def add_memory(self, memory: ContextMemory) -> str:
        """
        Store a context memory, with or without an embedding.

        Returns:
            The memory ID
        """
        ...

    def find_nearest_memories(
        self,
        org_id: str,
        user_id: str,
        embedding: List[float],
        model_id: Optional[str],
        limit: int = 5,
    ) -> List[Tuple[ContextMemory, float]]:
        """
        Vector search over a user's memories.

        Only memories carrying an embedding from the same model are considered.

        Returns:
            List of (memory, cosine_distance) tuples, nearest first
        """
        ...

    def search_memories_text(
        self, org_id: str, user_id: str, query: str, limit: int = 5
    ) -> List[ContextMemory]:
        """
        Lexical search over a user's memories.

        Returns:
            Memories whose content contains every query term, newest first
        """
        ...


class CandidateAnalysisStore(Protocol):
    """
    Protocol for per-candidate extraction output.

    One analysis row and one embedding row per candidate, both replaced on
    re-parse, plus the coarse parse status on the candidate record.
    """

    def set_status(self, candidate_id: str, org_id: str, status: ParseStatus) -> None:
        ...

    def get_status(self, candidate_id: str) -> Optional[ParseStatus]:
        ...

    def upsert_analysis(self, analysis: CVAnalysis) -> None:
        """Insert or replace the analysis for analysis.candidate_id."""
        ...

    def get_analysis(self, candidate_id: str) -> Optional[CVAnalysis]:
        ...

    def upsert_embedding(self, embedding: CandidateEmbedding) -> None:
        """Insert or replace the embedding for embedding.candidate_id."""
        ...

    def get_embedding(self, candidate_id: str) -> Optional[CandidateEmbedding]:
        ...

    def analyses_missing_embeddings(self, min_length: int = 50) -> List[CVAnalysis]:
        """
        Analyses with at least min_length chars of text and no embedding.

        Returns:
            Newest analyses first
        """
        ...

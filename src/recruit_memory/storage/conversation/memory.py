"""
In-memory conversation storage implementation.

Provides a simple in-memory store for sessions, messages and context
memories, suitable for testing and single-instance deployments. For
production, use the SQLAlchemy implementation.
"""

import logging
import threading
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

from recruit_memory.embeddings.similarity import cosine_distance
from recruit_memory.errors import SessionNotFoundError
from recruit_memory.models import ContextMemory, ConversationMessage, ConversationSession
from recruit_memory.utils.text_search import matches_all_terms

logger = logging.getLogger(__name__)


class InMemoryConversationStore:
    """
    In-memory implementation of the ConversationStore protocol.

    A single lock serializes writes so counter updates are atomic with the
    message insert. Data is lost on restart.
    """

    def __init__(self):
        self._sessions: Dict[str, ConversationSession] = {}
        # session_id -> messages in insertion order
        self._messages: Dict[str, List[ConversationMessage]] = {}
        self._memories: List[ContextMemory] = []
        self._lock = threading.RLock()

        logger.info("InMemoryConversationStore initialized")

    def create_session(self, session: ConversationSession) -> str:
        with self._lock:
            self._sessions[session.id] = session.model_copy(deep=True)
            self._messages.setdefault(session.id, [])

        logger.debug(f"Created session {session.id} for {session.org_id}/{session.user_id}")
        return session.id

    def get_session(self, session_id: str) -> Optional[ConversationSession]:
        with self._lock:
            session = self._sessions.get(session_id)
            return session.model_copy(deep=True) if session else None

    def find_active_session(
        self, org_id: str, user_id: str, active_since: datetime
    ) -> Optional[ConversationSession]:
        with self._lock:
            candidates = [
                session
                for session in self._sessions.values()
                if session.org_id == org_id
                and session.user_id == user_id
                and session.last_active_at > active_since
            ]
            if not candidates:
                return None
            latest = max(candidates, key=lambda s: s.last_active_at)
            return latest.model_copy(deep=True)

    def touch_session(self, session_id: str, now: datetime) -> bool:
        with self._lock:
            session = self._sessions.get(session_id)
            if session is None:
                return False
            session.last_active_at = max(session.last_active_at, now)
            return True

    def list_sessions(self, org_id: str, user_id: str, limit: int = 10) -> List[ConversationSession]:
        with self._lock:
            sessions = [
                s for s in self._sessions.values() if s.org_id == org_id and s.user_id == user_id
            ]
            sessions.sort(key=lambda s: s.last_active_at, reverse=True)
            return [s.model_copy(deep=True) for s in sessions[:limit]]

    def append_message(self, message: ConversationMessage) -> str:
        with self._lock:
            session = self._sessions.get(message.session_id)
            if session is None:
                raise SessionNotFoundError(message.session_id)

            self._messages[message.session_id].append(message.model_copy(deep=True))
            session.message_count += 1
            session.last_active_at = max(session.last_active_at, message.created_at)

        logger.debug(
            f"Appended {message.role} message to session {message.session_id} "
            f"(count={session.message_count})"
        )
        return message.id

    def get_recent_messages(self, session_id: str, limit: int = 20) -> List[ConversationMessage]:
        if limit <= 0:
            return []
        with self._lock:
            messages = list(self._messages.get(session_id, []))

        # Stable sort keeps insertion order for equal timestamps
        messages.sort(key=lambda m: m.created_at)
        return [m.model_copy(deep=True) for m in messages[-limit:]]

    def update_session_summary(self, session_id: str, title: str, summary: str) -> None:
        with self._lock:
            session = self._sessions.get(session_id)
            if session is None:
                raise SessionNotFoundError(session_id)
            session.title = title
            session.summary = summary

    def append_action(self, session_id: str, action: Any) -> None:
        with self._lock:
            session = self._sessions.get(session_id)
            if session is None:
                raise SessionNotFoundError(session_id)
            session.actions_taken.append(action)

    def add_memory(self, memory: ContextMemory) -> str:
        with self._lock:
            self._memories.append(memory.model_copy(deep=True))

        logger.debug(
            f"Stored {memory.memory_type} memory {memory.id} "
            f"(embedded={memory.embedding is not None})"
        )
        return memory.id

    def _owned_memories(self, org_id: str, user_id: str) -> List[ContextMemory]:
        with self._lock:
            return [m for m in self._memories if m.org_id == org_id and m.user_id == user_id]

    def find_nearest_memories(
        self,
        org_id: str,
        user_id: str,
        embedding: List[float],
        model_id: Optional[str],
        limit: int = 5,
    ) -> List[Tuple[ContextMemory, float]]:
        results = []
        for memory in self._owned_memories(org_id, user_id):
            if not memory.embedding:
                continue
            if model_id and memory.embedding_model and memory.embedding_model != model_id:
                continue
            if len(memory.embedding) != len(embedding):
                continue
            results.append((memory, cosine_distance(embedding, memory.embedding)))

        results.sort(key=lambda pair: pair[1])
        return [(memory.model_copy(deep=True), distance) for memory, distance in results[:limit]]

    def search_memories_text(
        self, org_id: str, user_id: str, query: str, limit: int = 5
    ) -> List[ContextMemory]:
        # Reverse insertion order first so equal timestamps still come newest first
        memories = list(reversed(self._owned_memories(org_id, user_id)))
        matches = [m for m in memories if matches_all_terms(m.content, query)]
        matches.sort(key=lambda m: m.created_at, reverse=True)
        return [m.model_copy(deep=True) for m in matches[:limit]]

    def clear(self):
        """Clear ALL sessions, messages and memories."""
        with self._lock:
            self._sessions.clear()
            self._messages.clear()
            self._memories.clear()
        logger.info("Cleared all conversation data")

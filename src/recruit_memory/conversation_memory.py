"""
Conversational memory for the recruiting assistant.

Sessions are windowed by activity: a user's messages join their most
recently active session until it has been idle for the recency window.
Context memories are durable facts searched semantically, with a lexical
fallback when no query vector can be produced.
"""

import logging
from datetime import datetime, timedelta
from typing import Any, Callable, Iterable, List, Optional

from recruit_memory.config import Settings
from recruit_memory.embeddings.service import EmbeddingService
from recruit_memory.models import (
    ContextMemory,
    ConversationMessage,
    ConversationSession,
    MessageRole,
)
from recruit_memory.storage.protocols import ConversationStore

logger = logging.getLogger(__name__)

SESSION_RECENCY_WINDOW = timedelta(hours=24)
DEFAULT_SESSION_TITLE = "New Conversation"

# Memory content and memory search queries go through the query cache with a short TTL
MEMORY_EMBEDDING_TTL_MINUTES = 1


class ConversationMemoryService:
    def __init__(
        self,
        store: ConversationStore,
        embedding_service: EmbeddingService,
        recency_window: timedelta = SESSION_RECENCY_WINDOW,
        clock: Callable[[], datetime] = datetime.now,
    ):
        """
        Args:
            store: Conversation storage backend
            embedding_service: Used for memory and query vectors
            recency_window: Idle time after which a new session is started
            clock: Source of "now" for all timestamps
        """
        self.store = store
        self.embedding_service = embedding_service
        self.recency_window = recency_window
        self.clock = clock

    @classmethod
    def from_settings(
        cls,
        store: ConversationStore,
        embedding_service: EmbeddingService,
        settings: Settings,
    ) -> "ConversationMemoryService":
        return cls(
            store=store,
            embedding_service=embedding_service,
            recency_window=timedelta(hours=settings.session_recency_hours),
        )

    async def get_or_create_session(self, org_id: str, user_id: str) -> str:
        """
        Return the user's active session, starting a new one if none is recent.

        Returns:
            Session ID
        """
        now = self.clock()
        session = self.store.find_active_session(org_id, user_id, now - self.recency_window)
        if session is not None:
            self.store.touch_session(session.id, now)
            logger.debug(f"Reusing session {session.id} for {org_id}/{user_id}")
            return session.id

        session = ConversationSession(
            org_id=org_id,
            user_id=user_id,
            title=DEFAULT_SESSION_TITLE,
            started_at=now,
            last_active_at=now,
        )
        session_id = self.store.create_session(session)
        logger.info(f"Started new session {session_id} for {org_id}/{user_id}")
        return session_id

    async def save_message(
        self,
        session_id: str,
        org_id: str,
        user_id: str,
        role: MessageRole,
        content: str,
        tool_calls: Optional[Any] = None,
        tool_results: Optional[Any] = None,
        metadata: Optional[dict] = None,
    ) -> str:
        """
        Append a message and bump the session's counters.

        Raises:
            SessionNotFoundError: If the session does not exist
        """
        message = ConversationMessage(
            session_id=session_id,
            org_id=org_id,
            user_id=user_id,
            role=role,
            content=content,
            tool_calls=tool_calls,
            tool_results=tool_results,
            metadata=metadata or {},
            created_at=self.clock(),
        )
        return self.store.append_message(message)

    async def get_recent_messages(
        self, session_id: str, limit: int = 20
    ) -> List[ConversationMessage]:
        """Newest `limit` messages of the session, oldest first."""
        return self.store.get_recent_messages(session_id, limit)

    async def get_user_sessions(
        self, org_id: str, user_id: str, limit: int = 10
    ) -> List[ConversationSession]:
        return self.store.list_sessions(org_id, user_id, limit)

    async def get_session(self, session_id: str) -> Optional[ConversationSession]:
        return self.store.get_session(session_id)

    async def save_context_memory(
        self,
        org_id: str,
        user_id: str,
        session_id: Optional[str],
        memory_type: str,
        content: str,
        related_entity_ids: Iterable[str] = (),
        metadata: Optional[dict] = None,
    ) -> str:
        """
        Store a durable fact, embedded when possible.

        A memory whose embedding fails is still stored and stays reachable
        through lexical search.

        Returns:
            Memory ID
        """
        vector = await self.embedding_service.embed_query_cached(
            content, ttl_minutes=MEMORY_EMBEDDING_TTL_MINUTES
        )
        if vector is None:
            logger.warning("Storing context memory without embedding")

        memory = ContextMemory(
            org_id=org_id,
            user_id=user_id,
            session_id=session_id,
            memory_type=memory_type,
            content=content,
            embedding=vector.values if vector else None,
            embedding_model=vector.model_id if vector else None,
            related_entity_ids=list(related_entity_ids),
            metadata=metadata or {},
            created_at=self.clock(),
        )
        return self.store.add_memory(memory)

    async def search_memories(
        self, org_id: str, user_id: str, query: str, limit: int = 5
    ) -> List[ContextMemory]:
        """
        Find the user's memories relevant to a query.

        Ranks by cosine distance when the query embeds. Falls back to
        all-terms lexical matching, newest first, when it does not or when
        no stored memory has a comparable embedding.
        """
        vector = await self.embedding_service.embed_query_cached(
            query, ttl_minutes=MEMORY_EMBEDDING_TTL_MINUTES
        )
        if vector is not None:
            nearest = self.store.find_nearest_memories(
                org_id, user_id, vector.values, vector.model_id, limit
            )
            if nearest:
                return [memory for memory, _ in nearest]
            logger.info("No embedded memories to rank, using lexical search")
        else:
            logger.warning("Query embedding unavailable, using lexical memory search")

        return self.store.search_memories_text(org_id, user_id, query, limit)

    async def update_session_summary(self, session_id: str, title: str, summary: str) -> None:
        self.store.update_session_summary(session_id, title, summary)

    async def record_action(self, session_id: str, action: Any) -> None:
        self.store.append_action(session_id, action)
        logger.debug(f"Recorded action on session {session_id}")

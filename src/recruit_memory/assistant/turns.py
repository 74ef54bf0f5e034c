"""
Per-turn session bracket for the recruiting assistant.

A turn resolves the user's session, loads prior history, records the new
user message and gathers relevant memories. The caller runs its LLM, then
closes the turn by saving the assistant reply.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from recruit_memory.conversation_memory import ConversationMemoryService
from recruit_memory.models import ContextMemory, ConversationMessage

logger = logging.getLogger(__name__)

EMPTY_REPLY_PLACEHOLDER = "No response generated"


@dataclass
class AssistantTurn:
    session_id: str
    org_id: str
    user_id: str
    user_message: str
    user_message_id: str
    history: List[ConversationMessage] = field(default_factory=list)
    memories: List[ContextMemory] = field(default_factory=list)

    def history_as_chat(self) -> List[Dict[str, str]]:
        """Prior history as role/content dicts for a chat completion request."""
        return [{"role": m.role, "content": m.content} for m in self.history]


class AssistantSessionManager:
    def __init__(self, memory_service: ConversationMemoryService):
        self.memory_service = memory_service

    async def begin_turn(
        self,
        org_id: str,
        user_id: str,
        message: str,
        history_limit: int = 10,
        memory_limit: int = 5,
    ) -> AssistantTurn:
        """
        Open a turn for an incoming user message.

        History is loaded before the new message is saved, so it holds only
        earlier messages.
        """
        session_id = await self.memory_service.get_or_create_session(org_id, user_id)
        history = await self.memory_service.get_recent_messages(session_id, history_limit)
        message_id = await self.memory_service.save_message(
            session_id, org_id, user_id, "user", message
        )

        memories: List[ContextMemory] = []
        if memory_limit > 0:
            memories = await self.memory_service.search_memories(
                org_id, user_id, message, memory_limit
            )

        logger.debug(
            f"Turn opened on session {session_id} "
            f"(history={len(history)}, memories={len(memories)})"
        )
        return AssistantTurn(
            session_id=session_id,
            org_id=org_id,
            user_id=user_id,
            user_message=message,
            user_message_id=message_id,
            history=history,
            memories=memories,
        )

    async def finish_turn(
        self,
        turn: AssistantTurn,
        content: Optional[str],
        tool_calls: Optional[Any] = None,
        tool_results: Optional[Any] = None,
        metadata: Optional[dict] = None,
    ) -> str:
        """
        Save the assistant reply for a turn.

        Returns:
            Message ID of the reply
        """
        return await self.memory_service.save_message(
            turn.session_id,
            turn.org_id,
            turn.user_id,
            "assistant",
            content or EMPTY_REPLY_PLACEHOLDER,
            tool_calls=tool_calls,
            tool_results=tool_results,
            metadata=metadata,
        )

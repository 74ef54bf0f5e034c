"""Conversation storage backends."""

from recruit_memory.storage.conversation.memory import InMemoryConversationStore
from recruit_memory.storage.conversation.sqlalchemy import SQLAlchemyConversationStore

__all__ = ["InMemoryConversationStore", "SQLAlchemyConversationStore"]

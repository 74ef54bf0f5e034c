"""Session bracket and memory tools for the recruiting assistant."""

from recruit_memory.assistant.tools import (
    MEMORY_TOOLS,
    MEMORY_TYPES,
    RECALL_MEMORY_TOOL,
    SAVE_MEMORY_TOOL,
    recall_memory,
    save_memory,
)
from recruit_memory.assistant.turns import AssistantSessionManager, AssistantTurn

__all__ = [
    "AssistantSessionManager",
    "AssistantTurn",
    "MEMORY_TOOLS",
    "MEMORY_TYPES",
    "RECALL_MEMORY_TOOL",
    "SAVE_MEMORY_TOOL",
    "recall_memory",
    "save_memory",
]

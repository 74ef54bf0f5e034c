"""
Memory tools exposed to the assistant LLM via function calling.

Each handler takes the parsed tool arguments and returns a JSON-serializable
result dict for the tool message.
"""

import logging
from typing import Any, Dict, Optional, get_args

from recruit_memory.conversation_memory import ConversationMemoryService
from recruit_memory.models import MemoryType

logger = logging.getLogger(__name__)

MEMORY_TYPES = list(get_args(MemoryType))

RECALL_MEMORY_TOOL = {
    "type": "function",
    "function": {
        "name": "recall_memory",
        "description": (
            "Search past conversations and decisions for relevant context. Use when the "
            "user asks about previous searches, candidates they liked, or past decisions."
        ),
        "parameters": {
            "type": "object",
            "properties": {
                "query": {
                    "type": "string",
                    "description": (
                        'What to search for in memory (e.g., "React developers I liked")'
                    ),
                },
                "limit": {
                    "type": "number",
                    "description": "Number of memories to retrieve",
                    "default": 5,
                },
            },
            "required": ["query"],
        },
    },
}

SAVE_MEMORY_TOOL = {
    "type": "function",
    "function": {
        "name": "save_memory",
        "description": (
            "Save an important insight, decision, or note about a candidate for future "
            "reference. Use when the user expresses preferences or makes decisions."
        ),
        "parameters": {
            "type": "object",
            "properties": {
                "content": {
                    "type": "string",
                    "description": "The insight or decision to remember",
                },
                "memory_type": {
                    "type": "string",
                    "enum": MEMORY_TYPES,
                    "description": "Type of memory",
                },
                "candidate_names": {
                    "type": "array",
                    "items": {"type": "string"},
                    "description": "Related candidate names or emails (optional)",
                },
            },
            "required": ["content", "memory_type"],
        },
    },
}

MEMORY_TOOLS = [RECALL_MEMORY_TOOL, SAVE_MEMORY_TOOL]


async def recall_memory(
    memory_service: ConversationMemoryService,
    org_id: str,
    user_id: str,
    args: Dict[str, Any],
) -> Dict[str, Any]:
    query = str(args.get("query") or "")
    limit = int(args.get("limit") or 5)

    memories = await memory_service.search_memories(org_id, user_id, query, limit)
    if not memories:
        return {
            "found": 0,
            "memories": [],
            "note": "No relevant past conversations found.",
        }

    return {
        "found": len(memories),
        "memories": [
            {
                "type": m.memory_type,
                "content": m.content,
                "candidates": m.related_entity_ids,
                "when": m.created_at.isoformat(),
            }
            for m in memories
        ],
    }


async def save_memory(
    memory_service: ConversationMemoryService,
    org_id: str,
    user_id: str,
    session_id: Optional[str],
    args: Dict[str, Any],
) -> Dict[str, Any]:
    content = str(args.get("content") or "").strip()
    memory_type = args.get("memory_type") or "note"
    if not content:
        return {"success": False, "error": "Memory content is required"}
    if memory_type not in MEMORY_TYPES:
        return {
            "success": False,
            "error": f"memory_type must be one of {', '.join(MEMORY_TYPES)}",
        }

    await memory_service.save_context_memory(
        org_id,
        user_id,
        session_id,
        memory_type,
        content,
        related_entity_ids=args.get("candidate_names") or [],
    )
    logger.info(f"Saved {memory_type} memory from tool call")

    return {
        "success": True,
        "saved": content,
        "type": memory_type,
        "note": "Memory saved for future reference",
    }

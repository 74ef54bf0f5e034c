"""Tests for the recall_memory and save_memory tool handlers."""

from typing import get_args

import pytest

from recruit_memory.assistant import (
    MEMORY_TOOLS,
    MEMORY_TYPES,
    RECALL_MEMORY_TOOL,
    SAVE_MEMORY_TOOL,
    recall_memory,
    save_memory,
)
from recruit_memory.conversation_memory import ConversationMemoryService
from recruit_memory.embeddings import EmbeddingService
from recruit_memory.models import MemoryType
from recruit_memory.storage.conversation import InMemoryConversationStore

ORG = "org1"
USER = "alice@example.com"


@pytest.fixture
def memory_service(wall_clock):
    # No provider: memories are found lexically
    return ConversationMemoryService(
        InMemoryConversationStore(), EmbeddingService(provider=None), clock=wall_clock
    )


def test_tool_schemas():
    assert [tool["function"]["name"] for tool in MEMORY_TOOLS] == ["recall_memory", "save_memory"]
    assert RECALL_MEMORY_TOOL["function"]["parameters"]["required"] == ["query"]
    save_params = SAVE_MEMORY_TOOL["function"]["parameters"]
    assert save_params["required"] == ["content", "memory_type"]
    assert save_params["properties"]["memory_type"]["enum"] == [
        "decision",
        "note",
        "preference",
        "insight",
    ]


@pytest.mark.asyncio
async def test_save_then_recall(memory_service, wall_clock):
    saved = await save_memory(
        memory_service,
        ORG,
        USER,
        "s1",
        {
            "content": "Shortlisted Sara for the platform team",
            "memory_type": "decision",
            "candidate_names": ["Sara Lee"],
        },
    )

    assert saved == {
        "success": True,
        "saved": "Shortlisted Sara for the platform team",
        "type": "decision",
        "note": "Memory saved for future reference",
    }

    recalled = await recall_memory(memory_service, ORG, USER, {"query": "Sara platform"})

    assert recalled["found"] == 1
    memory = recalled["memories"][0]
    assert memory["type"] == "decision"
    assert memory["candidates"] == ["Sara Lee"]
    assert memory["when"] == wall_clock.now.isoformat()


@pytest.mark.asyncio
async def test_recall_with_no_matches(memory_service):
    result = await recall_memory(memory_service, ORG, USER, {"query": "nothing here"})

    assert result == {
        "found": 0,
        "memories": [],
        "note": "No relevant past conversations found.",
    }


@pytest.mark.asyncio
async def test_recall_respects_limit(memory_service):
    for i in range(4):
        await save_memory(memory_service, ORG, USER, None, {"content": f"Rust note {i}", "memory_type": "note"})

    result = await recall_memory(memory_service, ORG, USER, {"query": "rust", "limit": 2})

    assert result["found"] == 2


@pytest.mark.asyncio
async def test_save_rejects_unknown_type(memory_service):
    result = await save_memory(memory_service, ORG, USER, None, {"content": "x", "memory_type": "gossip"})

    assert result["success"] is False


@pytest.mark.asyncio
async def test_save_rejects_empty_content(memory_service):
    result = await save_memory(memory_service, ORG, USER, None, {"content": "  ", "memory_type": "note"})

    assert result["success"] is False


def test_memory_types_follow_the_model():
    assert MEMORY_TYPES == list(get_args(MemoryType))

"""Tests for LLM session summaries."""

import json
from unittest.mock import AsyncMock, Mock

import pytest
import pytest_asyncio

from recruit_memory.conversation_memory import ConversationMemoryService
from recruit_memory.embeddings import EmbeddingService
from recruit_memory.intelligence import SessionSummarizer, SessionSummary
from recruit_memory.storage.conversation import InMemoryConversationStore


@pytest.fixture
def memory_service(wall_clock):
    return ConversationMemoryService(
        InMemoryConversationStore(), EmbeddingService(provider=None), clock=wall_clock
    )


@pytest_asyncio.fixture
async def session_id(memory_service):
    session_id = await memory_service.get_or_create_session("org1", "alice@example.com")
    await memory_service.save_message(session_id, "org1", "alice@example.com", "user", "Find Rust engineers")
    await memory_service.save_message(session_id, "org1", "alice@example.com", "assistant", "Found 3")
    return session_id


def llm_returning(content):
    return Mock(chat=AsyncMock(return_value=Mock(content=content)))


@pytest.mark.asyncio
async def test_summary_is_stored(memory_service, session_id):
    llm = llm_returning(json.dumps({"title": "Rust hiring", "summary": "Searched for Rust engineers."}))
    summarizer = SessionSummarizer(llm, memory_service)

    summary = await summarizer.summarize(session_id)

    assert summary == SessionSummary(title="Rust hiring", summary="Searched for Rust engineers.")
    session = await memory_service.get_session(session_id)
    assert session.title == "Rust hiring"
    assert session.summary == "Searched for Rust engineers."


@pytest.mark.asyncio
async def test_transcript_and_json_mode(memory_service, session_id):
    llm = llm_returning(json.dumps({"title": "t", "summary": "s"}))
    summarizer = SessionSummarizer(llm, memory_service)

    await summarizer.summarize(session_id)

    kwargs = llm.chat.call_args.kwargs
    assert kwargs["response_format"] == "json"
    assert kwargs["messages"][1].content == "user: Find Rust engineers\nassistant: Found 3"


@pytest.mark.asyncio
async def test_invalid_json_returns_none(memory_service, session_id):
    summarizer = SessionSummarizer(llm_returning("not json"), memory_service)

    assert await summarizer.summarize(session_id) is None
    assert summarizer.llm_failure_count == 1
    assert (await memory_service.get_session(session_id)).title == "New Conversation"


@pytest.mark.asyncio
async def test_llm_error_returns_none(memory_service, session_id):
    llm = Mock(chat=AsyncMock(side_effect=RuntimeError("down")))
    summarizer = SessionSummarizer(llm, memory_service)

    assert await summarizer.summarize(session_id) is None


@pytest.mark.asyncio
async def test_missing_fields_return_none(memory_service, session_id):
    summarizer = SessionSummarizer(llm_returning(json.dumps({"title": "Only title"})), memory_service)

    assert await summarizer.summarize(session_id) is None


@pytest.mark.asyncio
async def test_empty_session_skips_llm(memory_service):
    session_id = await memory_service.get_or_create_session("org1", "bob@example.com")
    llm = llm_returning("{}")
    summarizer = SessionSummarizer(llm, memory_service)

    assert await summarizer.summarize(session_id) is None
    llm.chat.assert_not_called()

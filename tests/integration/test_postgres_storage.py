"""
Integration tests for the SQLAlchemy stores against PostgreSQL.

Run with: pytest -m integration (needs a local PostgreSQL and psycopg2).
"""

from datetime import datetime, timedelta

import pytest
from sqlalchemy import create_engine

from recruit_memory.conversation_memory import ConversationMemoryService
from recruit_memory.embeddings import EmbeddingService
from recruit_memory.models import ContextMemory, CVAnalysis
from recruit_memory.storage import SQLAlchemyCandidateAnalysisStore, SQLAlchemyConversationStore
from recruit_memory.storage.orm import Base

pytestmark = pytest.mark.integration


@pytest.fixture
def engine(postgres_url):
    pytest.importorskip("psycopg2")
    engine = create_engine(postgres_url)
    Base.metadata.drop_all(engine)
    Base.metadata.create_all(engine)
    yield engine
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.mark.asyncio
async def test_conversation_round_trip(engine, provider, wall_clock):
    service = ConversationMemoryService(
        SQLAlchemyConversationStore(engine), EmbeddingService(provider=provider), clock=wall_clock
    )

    session_id = await service.get_or_create_session("org1", "alice@example.com")
    await service.save_message(session_id, "org1", "alice@example.com", "user", "Find Rust engineers")
    wall_clock.advance(minutes=1)
    assert await service.get_or_create_session("org1", "alice@example.com") == session_id
    await service.save_message(session_id, "org1", "alice@example.com", "user", "Remote only")
    await service.record_action(session_id, {"type": "search"})

    session = await service.get_session(session_id)
    assert session.message_count == 2
    assert session.actions_taken == [{"type": "search"}]
    assert [m.content for m in await service.get_recent_messages(session_id, 10)] == [
        "Find Rust engineers",
        "Remote only",
    ]

    await service.save_context_memory("org1", "alice@example.com", session_id, "preference", "x" * 8)
    results = await service.search_memories("org1", "alice@example.com", "y" * 8)
    assert [m.content for m in results] == ["x" * 8]


def test_missing_embeddings_query(engine):
    store = SQLAlchemyCandidateAnalysisStore(engine)
    now = datetime(2025, 3, 3, 9, 0, 0)
    for i in range(3):
        store.upsert_analysis(
            CVAnalysis(
                candidate_id=f"c{i}",
                org_id="org1",
                text="Engineer with broad backend experience in Python and Go services.",
                created_at=now + timedelta(minutes=i),
            )
        )

    assert [a.candidate_id for a in store.analyses_missing_embeddings()] == ["c2", "c1", "c0"]


def test_full_text_search_uses_english_stemming(engine):
    store = SQLAlchemyConversationStore(engine)
    store.add_memory(
        ContextMemory(
            org_id="org1",
            user_id="alice@example.com",
            memory_type="note",
            content="Worked at two companies in Kuwait",
            created_at=datetime(2025, 3, 3, 9, 0, 0),
        )
    )

    for query in ("companies", "company", "the company"):
        results = store.search_memories_text("org1", "alice@example.com", query)
        assert [m.content for m in results] == ["Worked at two companies in Kuwait"]

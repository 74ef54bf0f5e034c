"""
Unit tests for SQLAlchemy conversation storage.

Covers persistence, transactions and schema details that the in-memory
backend has no equivalent for.
"""

from datetime import datetime

import pytest
from sqlalchemy import create_engine, inspect, text

from recruit_memory.errors import SessionNotFoundError, StoreError
from recruit_memory.models import ContextMemory, ConversationMessage, ConversationSession
from recruit_memory.storage.conversation.sqlalchemy import SQLAlchemyConversationStore

T0 = datetime(2025, 3, 3, 9, 0, 0)


@pytest.fixture
def engine():
    return create_engine("sqlite:///:memory:")


@pytest.fixture
def conversation_store(engine):
    """Create a fresh SQLAlchemy conversation store with in-memory SQLite."""
    store = SQLAlchemyConversationStore(engine)
    store.create_tables()
    return store


@pytest.fixture
def session(conversation_store):
    session = ConversationSession(
        org_id="org1", user_id="alice@example.com", started_at=T0, last_active_at=T0
    )
    conversation_store.create_session(session)
    return session


def test_create_tables(engine, conversation_store):
    """Test that database schema is created."""
    tables = set(inspect(engine).get_table_names())
    assert {"conversation_sessions", "conversation_messages", "context_memories"} <= tables


def test_create_tables_is_idempotent(conversation_store):
    conversation_store.create_tables()


def test_message_text_is_stored_in_message_column(engine, conversation_store, session):
    conversation_store.append_message(
        ConversationMessage(session_id=session.id, role="user", content="hello", created_at=T0)
    )

    with engine.connect() as conn:
        stored = conn.execute(text("SELECT message FROM conversation_messages")).scalar_one()
    assert stored == "hello"


def test_failed_append_leaves_no_message(engine, conversation_store):
    with pytest.raises(SessionNotFoundError):
        conversation_store.append_message(
            ConversationMessage(session_id="missing", role="user", content="hello", created_at=T0)
        )

    with engine.connect() as conn:
        count = conn.execute(text("SELECT COUNT(*) FROM conversation_messages")).scalar_one()
    assert count == 0


def test_duplicate_session_id_raises_store_error(conversation_store, session):
    with pytest.raises(StoreError):
        conversation_store.create_session(session)


def test_data_persists_across_store_instances(tmp_path):
    engine = create_engine(f"sqlite:///{tmp_path / 'conversations.db'}")
    first = SQLAlchemyConversationStore(engine)
    first.create_tables()
    session = ConversationSession(org_id="org1", user_id="u1", started_at=T0, last_active_at=T0)
    first.create_session(session)
    first.add_memory(
        ContextMemory(
            org_id="org1",
            user_id="u1",
            memory_type="preference",
            content="Prefers remote candidates",
            embedding=[0.1, 0.2],
            embedding_model="fake-embed",
            created_at=T0,
        )
    )

    second = SQLAlchemyConversationStore(create_engine(f"sqlite:///{tmp_path / 'conversations.db'}"))

    assert second.get_session(session.id).user_id == "u1"
    memories = second.search_memories_text("org1", "u1", "remote candidates")
    assert memories[0].embedding == [0.1, 0.2]


def test_unembedded_memory_has_null_embedding_columns(engine, conversation_store):
    conversation_store.add_memory(
        ContextMemory(org_id="org1", user_id="u1", memory_type="note", content="plain", created_at=T0)
    )

    with engine.connect() as conn:
        row = conn.execute(text("SELECT embedding, embedding_model FROM context_memories")).one()
    assert row == (None, None)

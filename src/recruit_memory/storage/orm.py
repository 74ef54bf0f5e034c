"""
Shared SQLAlchemy declarative base and session handling.

JSON fields are stored as serialized text so the same schema works on
SQLite and PostgreSQL.
"""

import json
import logging
from contextlib import contextmanager
from typing import Any, Iterator

from sqlalchemy import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, declarative_base

from recruit_memory.errors import StoreError

logger = logging.getLogger(__name__)

Base = declarative_base()


def dump_json(value: Any) -> str:
    return json.dumps(value, default=str)


def load_json(value: Any, default: Any = None) -> Any:
    if value is None or value == "":
        return default
    return json.loads(value)


class SQLAlchemyStoreBase:
    """Engine ownership, table creation and the commit/rollback session scope."""

    def __init__(self, engine: Engine):
        """
        Args:
            engine: SQLAlchemy engine for database connection
        """
        self.engine = engine

    @contextmanager
    def _session(self) -> Iterator[Session]:
        """Context manager for database sessions with automatic commit/rollback."""
        session = Session(self.engine, expire_on_commit=False)
        try:
            yield session
            session.commit()
        except SQLAlchemyError as e:
            session.rollback()
            logger.error(f"Database error: {e}")
            raise StoreError(f"Database error: {e}") from e
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def create_tables(self):
        """Create database tables if they don't exist."""
        Base.metadata.create_all(self.engine)
        logger.info("Database tables created/verified")

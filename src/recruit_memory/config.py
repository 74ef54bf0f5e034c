"""
Runtime configuration.

Values come from the environment (and a local .env file when present).
Every component also accepts its settings as plain constructor arguments,
so Settings is only needed by the factories and scripts.
"""

import logging
import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

DEFAULT_MAX_UPLOAD_BYTES = 20 * 1024 * 1024


class Settings(BaseModel):
    openai_api_key: Optional[str] = Field(None, description="Credential for embeddings and OCR")
    openai_base_url: Optional[str] = Field(None, description="OpenAI-compatible endpoint")

    embedding_model: str = "text-embedding-3-small"
    embedding_max_chars: int = Field(8000, gt=0)
    embedding_timeout: float = Field(30.0, gt=0)
    query_cache_ttl_minutes: float = Field(10, gt=0)
    query_cache_max_entries: int = Field(1000, gt=0)

    vision_model: str = "gpt-4o"
    vision_max_tokens: int = Field(4000, gt=0)
    extraction_timeout: float = Field(60.0, gt=0)
    max_upload_bytes: int = Field(DEFAULT_MAX_UPLOAD_BYTES, gt=0)

    session_recency_hours: float = Field(24, gt=0)

    database_url: str = "sqlite:///recruit_memory.db"

    @classmethod
    def from_env(cls, dotenv: bool = True) -> "Settings":
        """Build settings from environment variables, falling back to defaults."""
        if dotenv:
            load_dotenv()

        env_map = {
            "openai_api_key": "OPENAI_API_KEY",
            "openai_base_url": "OPENAI_BASE_URL",
            "embedding_model": "EMBEDDING_MODEL",
            "embedding_max_chars": "EMBEDDING_MAX_CHARS",
            "embedding_timeout": "EMBEDDING_TIMEOUT",
            "query_cache_ttl_minutes": "QUERY_CACHE_TTL_MINUTES",
            "query_cache_max_entries": "QUERY_CACHE_MAX_ENTRIES",
            "vision_model": "VISION_MODEL",
            "vision_max_tokens": "VISION_MAX_TOKENS",
            "extraction_timeout": "EXTRACTION_TIMEOUT",
            "max_upload_bytes": "MAX_UPLOAD_BYTES",
            "session_recency_hours": "SESSION_RECENCY_HOURS",
            "database_url": "DATABASE_URL",
        }
        values = {}
        for field_name, env_name in env_map.items():
            value = os.getenv(env_name)
            if value not in (None, ""):
                values[field_name] = value

        settings = cls(**values)
        logger.debug(
            f"Settings loaded (embedding_model={settings.embedding_model}, "
            f"vision_model={settings.vision_model}, "
            f"credential={'set' if settings.openai_api_key else 'missing'})"
        )
        return settings

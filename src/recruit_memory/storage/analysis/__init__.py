"""Candidate analysis storage backends."""

from recruit_memory.storage.analysis.memory import InMemoryCandidateAnalysisStore
from recruit_memory.storage.analysis.sqlalchemy import SQLAlchemyCandidateAnalysisStore

__all__ = ["InMemoryCandidateAnalysisStore", "SQLAlchemyCandidateAnalysisStore"]

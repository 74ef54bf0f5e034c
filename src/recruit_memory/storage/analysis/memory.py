"""
In-memory candidate analysis storage implementation.
"""

import logging
import threading
from typing import Dict, List, Optional

from recruit_memory.models import CandidateEmbedding, CVAnalysis, ParseStatus

logger = logging.getLogger(__name__)


class InMemoryCandidateAnalysisStore:
    """
    In-memory implementation of the CandidateAnalysisStore protocol.

    Keeps one analysis and one embedding per candidate. Data is lost on
    restart.
    """

    def __init__(self):
        self._status: Dict[str, ParseStatus] = {}
        self._analyses: Dict[str, CVAnalysis] = {}
        self._embeddings: Dict[str, CandidateEmbedding] = {}
        self._lock = threading.Lock()

        logger.info("InMemoryCandidateAnalysisStore initialized")

    def set_status(self, candidate_id: str, org_id: str, status: ParseStatus) -> None:
        with self._lock:
            self._status[candidate_id] = status
        logger.debug(f"Candidate {candidate_id} ({org_id}) status -> {status}")

    def get_status(self, candidate_id: str) -> Optional[ParseStatus]:
        with self._lock:
            return self._status.get(candidate_id)

    def upsert_analysis(self, analysis: CVAnalysis) -> None:
        with self._lock:
            self._analyses[analysis.candidate_id] = analysis.model_copy(deep=True)

    def get_analysis(self, candidate_id: str) -> Optional[CVAnalysis]:
        with self._lock:
            analysis = self._analyses.get(candidate_id)
            return analysis.model_copy(deep=True) if analysis else None

    def upsert_embedding(self, embedding: CandidateEmbedding) -> None:
        with self._lock:
            existing = self._embeddings.get(embedding.candidate_id)
            stored = embedding.model_copy(deep=True)
            if existing is not None:
                stored.created_at = existing.created_at
                stored.updated_at = embedding.updated_at or embedding.created_at
            self._embeddings[embedding.candidate_id] = stored

    def get_embedding(self, candidate_id: str) -> Optional[CandidateEmbedding]:
        with self._lock:
            embedding = self._embeddings.get(candidate_id)
            return embedding.model_copy(deep=True) if embedding else None

    def analyses_missing_embeddings(self, min_length: int = 50) -> List[CVAnalysis]:
        with self._lock:
            missing = [
                a.model_copy(deep=True)
                for a in self._analyses.values()
                if a.candidate_id not in self._embeddings and len(a.text or "") >= min_length
            ]
        missing.sort(key=lambda a: a.created_at, reverse=True)
        return missing

    def clear(self):
        """Clear ALL statuses, analyses and embeddings."""
        with self._lock:
            self._status.clear()
            self._analyses.clear()
            self._embeddings.clear()
        logger.info("Cleared all candidate analysis data")

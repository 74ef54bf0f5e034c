"""
SQLAlchemy-based candidate analysis storage implementation.

Tables:
    candidate_status: coarse parse status per candidate
    cv_analysis: one row of extracted text per candidate
    candidate_embeddings: one embedding per candidate, stored as a JSON list
"""

import logging
from typing import List, Optional

from sqlalchemy import Column, DateTime, Engine, Float, Integer, String, Text, func

from recruit_memory.models import CandidateEmbedding, CVAnalysis, ParseStatus
from recruit_memory.storage.orm import Base, SQLAlchemyStoreBase, dump_json, load_json

logger = logging.getLogger(__name__)


class CandidateStatusDB(Base):
    __tablename__ = "candidate_status"

    candidate_id = Column(String, primary_key=True)
    org_id = Column(String, nullable=False, index=True)
    status = Column(String, nullable=False)


class CVAnalysisDB(Base):
    """SQLAlchemy model for extracted CV text."""

    __tablename__ = "cv_analysis"

    candidate_id = Column(String, primary_key=True)
    org_id = Column(String, nullable=False, index=True)
    extracted_text = Column(Text, nullable=False)
    page_count = Column(Integer, nullable=True)
    token_count = Column(Integer, nullable=False, default=0)
    confidence = Column(Float, nullable=True)
    method = Column(String, nullable=True)
    created_at = Column(DateTime, nullable=False)

    def to_analysis(self) -> CVAnalysis:
        return CVAnalysis(
            candidate_id=self.candidate_id,
            org_id=self.org_id,
            text=self.extracted_text,
            page_count=self.page_count,
            token_count=self.token_count,
            confidence=self.confidence,
            method=self.method,
            created_at=self.created_at,
        )


class CandidateEmbeddingDB(Base):
    """SQLAlchemy model for candidate CV embeddings."""

    __tablename__ = "candidate_embeddings"

    candidate_id = Column(String, primary_key=True)
    org_id = Column(String, nullable=False, index=True)
    embedding = Column(Text, nullable=False)
    model_id = Column(String, nullable=False)
    created_at = Column(DateTime, nullable=False)
    updated_at = Column(DateTime, nullable=True)

    def to_embedding(self) -> CandidateEmbedding:
        return CandidateEmbedding(
            candidate_id=self.candidate_id,
            org_id=self.org_id,
            embedding=load_json(self.embedding, []),
            model_id=self.model_id,
            created_at=self.created_at,
            updated_at=self.updated_at,
        )


class SQLAlchemyCandidateAnalysisStore(SQLAlchemyStoreBase):
    """
    SQLAlchemy-based candidate analysis storage.

    Example:
        from sqlalchemy import create_engine
        engine = create_engine("sqlite:///recruit_memory.db")
        store = SQLAlchemyCandidateAnalysisStore(engine)
        store.create_tables()
    """

    def __init__(self, engine: Engine):
        super().__init__(engine)
        logger.info(f"SQLAlchemyCandidateAnalysisStore initialized (engine={engine.url})")

    def set_status(self, candidate_id: str, org_id: str, status: ParseStatus) -> None:
        with self._session() as db:
            row = db.get(CandidateStatusDB, candidate_id)
            if row is None:
                db.add(CandidateStatusDB(candidate_id=candidate_id, org_id=org_id, status=status))
            else:
                row.status = status

        logger.debug(f"Candidate {candidate_id} status -> {status}")

    def get_status(self, candidate_id: str) -> Optional[ParseStatus]:
        with self._session() as db:
            row = db.get(CandidateStatusDB, candidate_id)
            return row.status if row else None

    def upsert_analysis(self, analysis: CVAnalysis) -> None:
        with self._session() as db:
            row = db.get(CVAnalysisDB, analysis.candidate_id)
            if row is None:
                row = CVAnalysisDB(candidate_id=analysis.candidate_id)
                db.add(row)
            row.org_id = analysis.org_id
            row.extracted_text = analysis.text
            row.page_count = analysis.page_count
            row.token_count = analysis.token_count
            row.confidence = analysis.confidence
            row.method = analysis.method
            row.created_at = analysis.created_at

        logger.info(f"Stored CV analysis for candidate {analysis.candidate_id}")

    def get_analysis(self, candidate_id: str) -> Optional[CVAnalysis]:
        with self._session() as db:
            row = db.get(CVAnalysisDB, candidate_id)
            return row.to_analysis() if row else None

    def upsert_embedding(self, embedding: CandidateEmbedding) -> None:
        with self._session() as db:
            row = db.get(CandidateEmbeddingDB, embedding.candidate_id)
            if row is None:
                db.add(
                    CandidateEmbeddingDB(
                        candidate_id=embedding.candidate_id,
                        org_id=embedding.org_id,
                        embedding=dump_json(embedding.embedding),
                        model_id=embedding.model_id,
                        created_at=embedding.created_at,
                        updated_at=embedding.updated_at,
                    )
                )
            else:
                row.org_id = embedding.org_id
                row.embedding = dump_json(embedding.embedding)
                row.model_id = embedding.model_id
                row.updated_at = embedding.updated_at or embedding.created_at

    def get_embedding(self, candidate_id: str) -> Optional[CandidateEmbedding]:
        with self._session() as db:
            row = db.get(CandidateEmbeddingDB, candidate_id)
            return row.to_embedding() if row else None

    def analyses_missing_embeddings(self, min_length: int = 50) -> List[CVAnalysis]:
        with self._session() as db:
            rows = (
                db.query(CVAnalysisDB)
                .outerjoin(
                    CandidateEmbeddingDB,
                    CandidateEmbeddingDB.candidate_id == CVAnalysisDB.candidate_id,
                )
                .filter(
                    CandidateEmbeddingDB.candidate_id.is_(None),
                    func.length(CVAnalysisDB.extracted_text) >= min_length,
                )
                .order_by(CVAnalysisDB.created_at.desc())
                .all()
            )
            return [row.to_analysis() for row in rows]

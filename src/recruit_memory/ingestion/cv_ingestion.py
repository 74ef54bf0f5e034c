"""
CV ingestion: extract text from an upload, persist it and embed it.

Drives the candidate's parse status through processing -> done | error.
Extraction and store failures are reported in the returned outcome so
callers can show a specific message; embedding failures are logged only.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional

from recruit_memory.embeddings.service import EmbeddingService
from recruit_memory.errors import DocumentValidationError, ExtractionError, StoreError
from recruit_memory.extraction.pipeline import ExtractionPipeline
from recruit_memory.extraction.text import sanitize_for_storage
from recruit_memory.models import (
    CandidateEmbedding,
    CVAnalysis,
    Document,
    ExtractionResult,
    ParseStatus,
)
from recruit_memory.storage.protocols import CandidateAnalysisStore

logger = logging.getLogger(__name__)


@dataclass
class IngestionOutcome:
    candidate_id: str
    status: ParseStatus
    result: Optional[ExtractionResult] = None
    embedded: bool = False
    error_kind: Optional[str] = None
    error_message: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status == "done"


class CVIngestionService:
    def __init__(
        self,
        pipeline: ExtractionPipeline,
        embedding_service: EmbeddingService,
        store: CandidateAnalysisStore,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.pipeline = pipeline
        self.embedding_service = embedding_service
        self.store = store
        self.clock = clock

    def _mark(self, candidate_id: str, org_id: str, status: ParseStatus) -> bool:
        try:
            self.store.set_status(candidate_id, org_id, status)
            return True
        except StoreError as e:
            logger.error(f"Failed to mark candidate {candidate_id} as {status}: {e}")
            return False

    async def ingest(self, candidate_id: str, org_id: str, document: Document) -> IngestionOutcome:
        """
        Parse one uploaded CV for a candidate.

        Args:
            candidate_id: Candidate the CV belongs to
            org_id: Owning organization
            document: Uploaded bytes and declared MIME type

        Returns:
            IngestionOutcome; error_kind is one of too_large, unsupported,
            empty, unreadable or store when status is "error"
        """
        self._mark(candidate_id, org_id, "processing")

        try:
            result = await self.pipeline.extract(document)
        except (DocumentValidationError, ExtractionError) as e:
            logger.warning(f"Extraction failed for candidate {candidate_id}: {e}")
            self._mark(candidate_id, org_id, "error")
            return IngestionOutcome(
                candidate_id=candidate_id,
                status="error",
                error_kind=e.error_kind,
                error_message=str(e),
            )

        text = sanitize_for_storage(result.text)
        analysis = CVAnalysis(
            candidate_id=candidate_id,
            org_id=org_id,
            text=text,
            page_count=result.page_count,
            token_count=result.token_count,
            confidence=result.confidence,
            method=result.method,
            created_at=self.clock(),
        )
        try:
            self.store.upsert_analysis(analysis)
        except StoreError as e:
            logger.error(f"Failed to store analysis for candidate {candidate_id}: {e}")
            self._mark(candidate_id, org_id, "error")
            return IngestionOutcome(
                candidate_id=candidate_id,
                status="error",
                result=result,
                error_kind=e.error_kind,
                error_message=str(e),
            )

        embedded = await self._embed(candidate_id, org_id, text)

        if not self._mark(candidate_id, org_id, "done"):
            return IngestionOutcome(
                candidate_id=candidate_id,
                status="error",
                result=result,
                embedded=embedded,
                error_kind=StoreError.error_kind,
                error_message="Failed to update parse status",
            )

        logger.info(
            f"Ingested CV for candidate {candidate_id} "
            f"(method={result.method}, words={result.token_count}, embedded={embedded})"
        )
        return IngestionOutcome(
            candidate_id=candidate_id, status="done", result=result, embedded=embedded
        )

    async def _embed(self, candidate_id: str, org_id: str, text: str) -> bool:
        vector = await self.embedding_service.embed(text)
        if vector is None:
            logger.warning(f"No embedding generated for candidate {candidate_id}")
            return False

        now = self.clock()
        try:
            self.store.upsert_embedding(
                CandidateEmbedding(
                    candidate_id=candidate_id,
                    org_id=org_id,
                    embedding=vector.values,
                    model_id=vector.model_id,
                    created_at=now,
                    updated_at=now,
                )
            )
        except StoreError as e:
            logger.error(f"Failed to store embedding for candidate {candidate_id}: {e}")
            return False
        return True

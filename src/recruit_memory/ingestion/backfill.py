"""
Embed stored CV analyses that have no embedding yet.
"""

import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable

from recruit_memory.embeddings.service import EmbeddingService
from recruit_memory.errors import StoreError
from recruit_memory.extraction.text import sanitize_for_storage
from recruit_memory.models import MIN_TEXT_LENGTH, CandidateEmbedding
from recruit_memory.storage.protocols import CandidateAnalysisStore

logger = logging.getLogger(__name__)


@dataclass
class BackfillReport:
    found: int = 0
    embedded: int = 0
    failed: int = 0
    batches: int = 0


async def backfill_embeddings(
    store: CandidateAnalysisStore,
    embedding_service: EmbeddingService,
    batch_size: int = 5,
    pause_seconds: float = 1.0,
    min_length: int = MIN_TEXT_LENGTH,
    clock: Callable[[], datetime] = datetime.now,
) -> BackfillReport:
    """
    Embed analyses missing an embedding, one provider call per batch.

    Batches are separated by pause_seconds to stay under provider rate
    limits. A failed batch counts all its candidates as failed and the run
    continues with the next batch.
    """
    if batch_size <= 0:
        raise ValueError("batch_size must be positive")

    report = BackfillReport()
    if not embedding_service.enabled:
        logger.error("No embedding provider configured, nothing backfilled")
        return report

    analyses = store.analyses_missing_embeddings(min_length)
    report.found = len(analyses)
    logger.info(f"Found {report.found} candidates without embeddings")
    if not analyses:
        return report

    total_batches = (len(analyses) + batch_size - 1) // batch_size
    model_id = embedding_service.provider.model_name

    for start in range(0, len(analyses), batch_size):
        if report.batches and pause_seconds > 0:
            await asyncio.sleep(pause_seconds)

        batch = analyses[start : start + batch_size]
        report.batches += 1
        logger.info(f"Processing batch {report.batches}/{total_batches}")

        texts = [sanitize_for_storage(a.text) for a in batch]
        vectors = await embedding_service.embed_batch(texts)

        for analysis, text in zip(batch, texts):
            vector = vectors.get(embedding_service.truncate(text)) if text else None
            if not vector:
                logger.error(f"Failed to generate embedding for {analysis.candidate_id}")
                report.failed += 1
                continue

            now = clock()
            try:
                store.upsert_embedding(
                    CandidateEmbedding(
                        candidate_id=analysis.candidate_id,
                        org_id=analysis.org_id,
                        embedding=vector,
                        model_id=model_id,
                        created_at=now,
                        updated_at=now,
                    )
                )
            except StoreError as e:
                logger.error(f"Failed to store embedding for {analysis.candidate_id}: {e}")
                report.failed += 1
                continue
            report.embedded += 1

    logger.info(
        f"Backfill complete: {report.embedded} embedded, {report.failed} failed "
        f"in {report.batches} batches"
    )
    return report

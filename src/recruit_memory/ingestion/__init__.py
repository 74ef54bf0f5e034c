"""CV ingestion and embedding backfill."""

from recruit_memory.ingestion.backfill import BackfillReport, backfill_embeddings
from recruit_memory.ingestion.cv_ingestion import CVIngestionService, IngestionOutcome

__all__ = [
    "BackfillReport",
    "CVIngestionService",
    "IngestionOutcome",
    "backfill_embeddings",
]

"""
Example: Parsing a CV and storing its text and embedding

Demonstrates:
1. Building the extraction pipeline and embedding service from the environment
2. Ingesting an uploaded file for a candidate
3. Reading back the stored analysis and parse status

Usage:
    OPENAI_API_KEY=... python examples/cv_ingestion.py path/to/cv.pdf
"""

import asyncio
import mimetypes
import sys

from recruit_memory import CVIngestionService, Document, EmbeddingService, ExtractionPipeline, Settings
from recruit_memory.storage import InMemoryCandidateAnalysisStore


async def main(path: str):
    settings = Settings.from_env()
    store = InMemoryCandidateAnalysisStore()
    service = CVIngestionService(
        pipeline=ExtractionPipeline.from_settings(settings),
        embedding_service=EmbeddingService.from_settings(settings),
        store=store,
    )

    with open(path, "rb") as f:
        document = Document(content=f.read(), mime_type=mimetypes.guess_type(path)[0])

    outcome = await service.ingest("candidate-1", "org-1", document)
    print(f"Status: {outcome.status}")
    if not outcome.ok:
        print(f"Error ({outcome.error_kind}): {outcome.error_message}")
        return

    print(f"Method: {outcome.result.method}")
    print(f"Pages: {outcome.result.page_count}")
    print(f"Words: {outcome.result.token_count}")
    print(f"Embedded: {outcome.embedded}")
    print(f"Preview: {store.get_analysis('candidate-1').text[:200]}...")


if __name__ == "__main__":
    if len(sys.argv) != 2:
        print("Usage: python examples/cv_ingestion.py <file>")
        sys.exit(1)
    asyncio.run(main(sys.argv[1]))

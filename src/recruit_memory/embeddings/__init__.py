"""
Text embedding for recruit-memory.

- EmbeddingProvider: protocol for hosted embedding models
- OpenAIEmbedding: OpenAI API adapter
- EmbeddingService: truncation, best-effort failure policy, query cache
- QueryEmbeddingCache: TTL + LRU cache with an injectable clock
"""

from recruit_memory.embeddings.cache import CacheStats, QueryEmbeddingCache, normalize_query
from recruit_memory.embeddings.openai_embedding import OpenAIEmbedding
from recruit_memory.embeddings.protocol import EmbeddingBatch, EmbeddingProvider
from recruit_memory.embeddings.result import EmbedError, EmbedOutcome
from recruit_memory.embeddings.service import EmbeddingService
from recruit_memory.embeddings.similarity import cosine_distance, cosine_similarity

__all__ = [
    "CacheStats",
    "EmbedError",
    "EmbedOutcome",
    "EmbeddingBatch",
    "EmbeddingProvider",
    "EmbeddingService",
    "OpenAIEmbedding",
    "QueryEmbeddingCache",
    "cosine_distance",
    "cosine_similarity",
    "normalize_query",
]

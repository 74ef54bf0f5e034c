import asyncio
import logging
from typing import Dict, List, Optional

from recruit_memory.config import Settings
from recruit_memory.embeddings.cache import CacheStats, QueryEmbeddingCache
from recruit_memory.embeddings.protocol import EmbeddingProvider
from recruit_memory.embeddings.result import EmbedOutcome
from recruit_memory.models import EmbeddingVector

logger = logging.getLogger(__name__)

DEFAULT_MAX_CHARS = 8000


class EmbeddingService:
    """
    Best-effort text embedding with a query cache.

    None of the public methods raise on provider trouble: single embeddings
    degrade to None and batches to an empty mapping. A service built without
    a provider (no credential configured) behaves as if every call failed.
    """

    def __init__(
        self,
        provider: Optional[EmbeddingProvider],
        cache: Optional[QueryEmbeddingCache] = None,
        max_chars: int = DEFAULT_MAX_CHARS,
        timeout: float = 30.0,
    ):
        """
        Args:
            provider: Hosted embedding model, or None when no credential is configured
            cache: Query cache (a private one is created when omitted)
            max_chars: Inputs are truncated to this many characters
            timeout: Upper bound in seconds for one provider call
        """
        self.provider = provider
        self.cache = cache or QueryEmbeddingCache()
        self.max_chars = max_chars
        self.timeout = timeout

        if provider is None:
            logger.warning("EmbeddingService has no provider; embeddings are disabled")
        else:
            logger.info(
                f"EmbeddingService initialized (model={provider.model_name}, "
                f"max_chars={max_chars}, timeout={timeout}s)"
            )

    @classmethod
    def from_settings(cls, settings: Settings) -> "EmbeddingService":
        provider = None
        if settings.openai_api_key:
            from recruit_memory.embeddings.openai_embedding import OpenAIEmbedding

            provider = OpenAIEmbedding(
                model=settings.embedding_model,
                api_key=settings.openai_api_key,
                base_url=settings.openai_base_url,
                timeout=settings.embedding_timeout,
            )

        cache = QueryEmbeddingCache(
            max_entries=settings.query_cache_max_entries,
            default_ttl_seconds=settings.query_cache_ttl_minutes * 60,
        )
        return cls(
            provider=provider,
            cache=cache,
            max_chars=settings.embedding_max_chars,
            timeout=settings.embedding_timeout,
        )

    @property
    def enabled(self) -> bool:
        return self.provider is not None

    def truncate(self, text: str) -> str:
        return text[: self.max_chars]

    async def try_embed(self, text: str) -> EmbedOutcome:
        """
        Embed one text, reporting failure as a value.

        Args:
            text: Input text (truncated to max_chars)

        Returns:
            EmbedOutcome with the vector, or the reason no vector was produced
        """
        if not text or not text.strip():
            return EmbedOutcome.failure("empty_input")
        if self.provider is None:
            return EmbedOutcome.failure("not_configured")

        try:
            batch = await asyncio.wait_for(
                self.provider.create_embeddings([self.truncate(text)]),
                timeout=self.timeout,
            )
        except asyncio.TimeoutError:
            logger.error(f"Embedding timed out after {self.timeout}s")
            return EmbedOutcome.failure("timeout", f"timed out after {self.timeout}s")
        except Exception as e:
            logger.error(f"Embedding generation failed: {e}")
            return EmbedOutcome.failure("provider_error", str(e))

        if not batch.vectors or not batch.vectors[0]:
            return EmbedOutcome.failure("provider_error", "provider returned no vector")

        return EmbedOutcome.success(
            EmbeddingVector(
                values=batch.vectors[0],
                model_id=batch.model_id,
                token_usage=batch.total_tokens,
            )
        )

    async def embed(self, text: str) -> Optional[EmbeddingVector]:
        """
        Embed one text without caching (CV text, stored memories).

        Returns:
            The vector, or None when input is empty, no provider is configured,
            or the provider call fails. Callers proceed without a vector.
        """
        return (await self.try_embed(text)).unwrap_or_none()

    async def embed_query_cached(
        self, text: str, ttl_minutes: float = 10
    ) -> Optional[EmbeddingVector]:
        """
        Embed a search query, reusing a cached vector for repeated queries.

        Args:
            text: Query text; trimmed and lower-cased to form the cache key
            ttl_minutes: How long a fresh vector stays valid

        Returns:
            The vector, or None on failure. Failures are not cached.
        """
        if not text or not text.strip():
            return None
        if self.provider is None:
            return None

        cached = self.cache.get(text)
        if cached is not None:
            logger.debug("Cache hit for query embedding")
            return cached

        logger.debug("Cache miss, generating query embedding")
        vector = await self.embed(text)
        if vector is not None:
            self.cache.set(text, vector, ttl_seconds=ttl_minutes * 60)

        return vector

    async def embed_batch(self, texts: List[str]) -> Dict[str, List[float]]:
        """
        Embed many texts with a single provider call.

        Empty texts are dropped and the rest truncated. The mapping is keyed by
        the truncated text. Any failure yields an empty mapping.
        """
        results: Dict[str, List[float]] = {}
        if self.provider is None:
            return results

        valid_texts = [self.truncate(t) for t in texts if t and t.strip()]
        if not valid_texts:
            return results

        try:
            batch = await asyncio.wait_for(
                self.provider.create_embeddings(valid_texts),
                timeout=self.timeout,
            )
        except asyncio.TimeoutError:
            logger.error(f"Batch embedding timed out after {self.timeout}s")
            return results
        except Exception as e:
            logger.error(f"Batch embedding failed: {e}")
            return results

        for text, vector in zip(valid_texts, batch.vectors):
            results[text] = vector

        logger.info(
            f"Embedded batch of {len(results)} texts "
            f"(model={batch.model_id}, tokens={batch.total_tokens})"
        )
        return results

    def cache_stats(self) -> CacheStats:
        return self.cache.stats()

    def sweep_cache(self) -> int:
        return self.cache.sweep()

"""
Embedding provider protocol for recruit-memory.

A provider turns a batch of strings into dense vectors with a single
hosted-model call. Caching, truncation and failure policy live in
EmbeddingService, not in providers.
"""

from dataclasses import dataclass
from typing import List, Protocol

from typing_extensions import runtime_checkable


@dataclass
class EmbeddingBatch:
    """
    Raw provider response.

    Attributes:
        vectors: One vector per input, in input order
        model_id: Model reported by the provider
        total_tokens: Token usage for the whole request
    """

    vectors: List[List[float]]
    model_id: str
    total_tokens: int = 0


@runtime_checkable
class EmbeddingProvider(Protocol):
    """
    Protocol for hosted embedding models.

    Example:
        >>> provider = OpenAIEmbedding(api_key="sk-...")
        >>> batch = await provider.create_embeddings(["Senior Python developer"])
        >>> len(batch.vectors[0]) == provider.dimension
        True
    """

    @property
    def dimension(self) -> int:
        """Vector dimension produced by this model."""
        ...

    @property
    def model_name(self) -> str:
        """Identifier of the embedding model."""
        ...

    async def create_embeddings(self, texts: List[str]) -> EmbeddingBatch:
        """
        Embed every text with one provider call.

        Args:
            texts: Non-empty strings, already truncated by the caller

        Returns:
            EmbeddingBatch with vectors in input order

        Raises:
            Exception: Provider-specific errors (network, auth, rate limit)
        """
        ...

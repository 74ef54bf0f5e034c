"""OpenAI embedding adapter for recruit-memory."""

import logging
import os
from typing import Any, List, Optional

from openai import AsyncOpenAI, OpenAIError

from recruit_memory.embeddings.protocol import EmbeddingBatch
from recruit_memory.errors import ProviderError

logger = logging.getLogger(__name__)

KNOWN_DIMENSIONS = {
    "text-embedding-3-small": 1536,
    "text-embedding-3-large": 3072,
    "text-embedding-ada-002": 1536,
}


class OpenAIEmbedding:
    """
    Embedding provider using OpenAI's embedding API.

    Supports OpenAI's embedding models via API:
    - text-embedding-3-small (1536 dims, the default for CV and memory vectors)
    - text-embedding-3-large (3072 dims)
    - text-embedding-ada-002 (1536 dims, legacy)

    Also compatible with OpenAI-compatible APIs (Azure, OpenRouter, etc.)

    Requests always ask for ``encoding_format="float"``. Retries are disabled
    by default; the orchestrating caller owns the retry policy.

    Example:
        >>> embedder = OpenAIEmbedding(api_key="sk-...")
        >>> batch = await embedder.create_embeddings(["Data engineer, 5 years Spark"])
        >>> batch.model_id
        'text-embedding-3-small'
    """

    def __init__(
        self,
        model: str = "text-embedding-3-small",
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        dimensions: Optional[int] = None,
        timeout: float = 30.0,
        max_retries: int = 0,
        client: Optional[Any] = None,
    ):
        """
        Initialize OpenAI embedder.

        Args:
            model: OpenAI model name (default: text-embedding-3-small)
            api_key: OpenAI API key (None = use OPENAI_API_KEY env var)
            base_url: Custom endpoint (None = official OpenAI, or Azure/OpenRouter)
            dimensions: Output dimension (only for text-embedding-3-*)
            timeout: Request timeout in seconds
            max_retries: Retry attempts inside the SDK (default: none)
            client: Pre-built AsyncOpenAI-compatible client (tests, shared pools)
        """
        self._model = model
        self._dimensions = dimensions

        self._client = client or AsyncOpenAI(
            api_key=api_key or os.getenv("OPENAI_API_KEY"),
            base_url=base_url,
            timeout=timeout,
            max_retries=max_retries,
        )

        if dimensions is not None:
            self._dimension = dimensions
        else:
            # 0 means "learn from the first response"
            self._dimension = KNOWN_DIMENSIONS.get(model, 0)
            if not self._dimension:
                logger.warning(f"Unknown model {model}, dimension will be taken from responses")

        logger.info(f"OpenAI embedder initialized: {model} ({self._dimension or '?'} dimensions)")

    @property
    def dimension(self) -> int:
        """Vector dimension produced by this model."""
        return self._dimension

    @property
    def model_name(self) -> str:
        """Identifier of the OpenAI model."""
        return self._model

    async def create_embeddings(self, texts: List[str]) -> EmbeddingBatch:
        """
        Embed a batch of texts in one request.

        Args:
            texts: Non-empty input strings

        Returns:
            EmbeddingBatch with vectors in input order

        Raises:
            ValueError: If texts is empty
            ProviderError: If the API request fails
        """
        if not texts:
            raise ValueError("Cannot embed an empty batch")

        kwargs = {
            "model": self._model,
            "input": texts if len(texts) > 1 else texts[0],
            "encoding_format": "float",
        }
        if self._dimensions is not None:
            kwargs["dimensions"] = self._dimensions

        try:
            response = await self._client.embeddings.create(**kwargs)
        except OpenAIError as e:
            raise ProviderError(f"OpenAI embedding request failed: {e}", provider="openai") from e

        # API preserves order, but sort by index in case a proxy does not
        data = sorted(response.data, key=lambda item: getattr(item, "index", 0))
        vectors = [list(item.embedding) for item in data]

        if not self._dimension and vectors:
            self._dimension = len(vectors[0])

        usage = getattr(response, "usage", None)
        total_tokens = getattr(usage, "total_tokens", 0) if usage is not None else 0

        return EmbeddingBatch(
            vectors=vectors,
            model_id=getattr(response, "model", None) or self._model,
            total_tokens=total_tokens or 0,
        )

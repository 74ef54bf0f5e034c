"""Tests for OpenAI embedding adapter."""

from unittest.mock import AsyncMock, Mock

import pytest

from recruit_memory.embeddings import EmbeddingProvider, OpenAIEmbedding


@pytest.fixture
def mock_openai_env(monkeypatch):
    """Set mock OpenAI API key for testing."""
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test-key-for-testing")


def make_client(vectors, model="text-embedding-3-small", total_tokens=12, shuffle=False):
    data = [Mock(embedding=vector, index=i) for i, vector in enumerate(vectors)]
    if shuffle:
        data = list(reversed(data))
    response = Mock(data=data, model=model, usage=Mock(total_tokens=total_tokens))
    return Mock(embeddings=Mock(create=AsyncMock(return_value=response)))


def test_openai_initialization(mock_openai_env):
    """Test OpenAI embedder initialization."""
    embedder = OpenAIEmbedding(model="text-embedding-3-small", dimensions=768)

    assert embedder.model_name == "text-embedding-3-small"
    assert embedder.dimension == 768


def test_openai_default_dimensions(mock_openai_env):
    """Test default dimensions for known models."""
    assert OpenAIEmbedding(model="text-embedding-3-small").dimension == 1536
    assert OpenAIEmbedding(model="text-embedding-3-large").dimension == 3072
    assert OpenAIEmbedding(model="text-embedding-ada-002").dimension == 1536


def test_openai_custom_base_url(mock_openai_env):
    """Test custom base URL for Azure/OpenRouter."""
    embedder = OpenAIEmbedding(
        model="text-embedding-3-small", base_url="https://api.openrouter.ai/v1"
    )
    assert embedder.model_name == "text-embedding-3-small"


def test_satisfies_provider_protocol(mock_openai_env):
    assert isinstance(OpenAIEmbedding(), EmbeddingProvider)


@pytest.mark.asyncio
async def test_single_text_request_shape():
    client = make_client([[0.1, 0.2, 0.3]])
    embedder = OpenAIEmbedding(client=client)

    batch = await embedder.create_embeddings(["Senior Python developer"])

    client.embeddings.create.assert_awaited_once_with(
        model="text-embedding-3-small",
        input="Senior Python developer",
        encoding_format="float",
    )
    assert batch.vectors == [[0.1, 0.2, 0.3]]
    assert batch.model_id == "text-embedding-3-small"
    assert batch.total_tokens == 12


@pytest.mark.asyncio
async def test_batch_request_keeps_input_order():
    client = make_client([[1.0, 0.0], [0.0, 1.0]], shuffle=True)
    embedder = OpenAIEmbedding(client=client, dimensions=2)

    batch = await embedder.create_embeddings(["first", "second"])

    kwargs = client.embeddings.create.call_args.kwargs
    assert kwargs["input"] == ["first", "second"]
    assert kwargs["dimensions"] == 2
    assert batch.vectors == [[1.0, 0.0], [0.0, 1.0]]


@pytest.mark.asyncio
async def test_unknown_model_learns_dimension():
    client = make_client([[0.5] * 4], model="custom-embedder")
    embedder = OpenAIEmbedding(model="custom-embedder", client=client)
    assert embedder.dimension == 0

    batch = await embedder.create_embeddings(["text"])

    assert embedder.dimension == 4
    assert batch.model_id == "custom-embedder"


@pytest.mark.asyncio
async def test_empty_batch_rejected():
    embedder = OpenAIEmbedding(client=make_client([]))

    with pytest.raises(ValueError):
        await embedder.create_embeddings([])


@pytest.mark.asyncio
async def test_unexpected_errors_propagate():
    client = Mock(embeddings=Mock(create=AsyncMock(side_effect=RuntimeError("429"))))
    embedder = OpenAIEmbedding(client=client)

    with pytest.raises(RuntimeError):
        await embedder.create_embeddings(["text"])


@pytest.mark.asyncio
async def test_openai_errors_become_provider_errors():
    from openai import OpenAIError

    from recruit_memory.errors import ProviderError

    client = Mock(embeddings=Mock(create=AsyncMock(side_effect=OpenAIError("invalid api key"))))
    embedder = OpenAIEmbedding(client=client)

    with pytest.raises(ProviderError) as exc_info:
        await embedder.create_embeddings(["text"])

    assert exc_info.value.provider == "openai"

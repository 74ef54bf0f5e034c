"""Tests for EmbeddingService failure policy, truncation and caching."""

import pytest

from recruit_memory.config import Settings
from recruit_memory.embeddings import EmbeddingService, OpenAIEmbedding, QueryEmbeddingCache


@pytest.fixture
def service(provider, clock):
    return EmbeddingService(
        provider=provider,
        cache=QueryEmbeddingCache(clock=clock),
        max_chars=20,
        timeout=1.0,
    )


@pytest.mark.asyncio
async def test_embed_returns_vector_with_model(service, provider):
    vector = await service.embed("python developer")

    assert vector.values == provider.vector_for("python developer")
    assert vector.model_id == "fake-embed"
    assert vector.dimension == 3


@pytest.mark.asyncio
async def test_embed_truncates_input(service, provider):
    await service.embed("x" * 100)

    assert provider.calls == [["x" * 20]]


@pytest.mark.asyncio
@pytest.mark.parametrize("text", ["", "   ", None])
async def test_empty_input_makes_no_call(service, provider, text):
    outcome = await service.try_embed(text)

    assert not outcome.ok
    assert outcome.error.reason == "empty_input"
    assert provider.calls == []


@pytest.mark.asyncio
async def test_no_provider_degrades_to_none():
    service = EmbeddingService(provider=None)

    assert not service.enabled
    assert (await service.try_embed("text")).error.reason == "not_configured"
    assert await service.embed("text") is None
    assert await service.embed_query_cached("text") is None
    assert await service.embed_batch(["text"]) == {}


@pytest.mark.asyncio
async def test_provider_error_degrades_to_none(make_provider):
    service = EmbeddingService(provider=make_provider(fail=True))

    outcome = await service.try_embed("text")

    assert outcome.error.reason == "provider_error"
    assert "provider unavailable" in outcome.error.message
    assert await service.embed("text") is None


@pytest.mark.asyncio
async def test_timeout_degrades_to_none(make_provider):
    service = EmbeddingService(provider=make_provider(delay=1.0), timeout=0.01)

    outcome = await service.try_embed("text")

    assert outcome.error.reason == "timeout"


@pytest.mark.asyncio
async def test_cached_query_calls_provider_once_within_ttl(service, provider, clock):
    first = await service.embed_query_cached("React developer")
    clock.advance(60)
    second = await service.embed_query_cached("  react DEVELOPER")

    assert first == second
    assert len(provider.calls) == 1


@pytest.mark.asyncio
async def test_cached_query_refetches_after_ttl(service, provider, clock):
    await service.embed_query_cached("React developer", ttl_minutes=10)
    clock.advance(10 * 60 + 1)
    await service.embed_query_cached("React developer", ttl_minutes=10)

    assert len(provider.calls) == 2


@pytest.mark.asyncio
async def test_failures_are_not_cached(clock, make_provider):
    provider = make_provider(fail=True)
    service = EmbeddingService(provider=provider, cache=QueryEmbeddingCache(clock=clock))

    assert await service.embed_query_cached("query") is None
    provider.fail = False
    assert await service.embed_query_cached("query") is not None
    assert len(provider.calls) == 2


@pytest.mark.asyncio
async def test_cached_empty_query_returns_none(service, provider):
    assert await service.embed_query_cached("  ") is None
    assert provider.calls == []


@pytest.mark.asyncio
async def test_batch_is_single_call_keyed_by_truncated_text(service, provider):
    long_text = "y" * 50
    result = await service.embed_batch(["alpha", "", "  ", long_text])

    assert provider.calls == [["alpha", "y" * 20]]
    assert set(result) == {"alpha", "y" * 20}
    assert result["alpha"] == provider.vector_for("alpha")


@pytest.mark.asyncio
async def test_batch_failure_returns_empty_mapping(make_provider):
    service = EmbeddingService(provider=make_provider(fail=True))

    assert await service.embed_batch(["a", "b"]) == {}


@pytest.mark.asyncio
async def test_batch_of_only_empty_texts_makes_no_call(service, provider):
    assert await service.embed_batch(["", "   "]) == {}
    assert provider.calls == []


@pytest.mark.asyncio
async def test_cache_stats_and_sweep(service, clock):
    await service.embed_query_cached("a", ttl_minutes=1)
    await service.embed_query_cached("a")
    clock.advance(120)

    stats = service.cache_stats()
    assert stats.hits == 1
    assert stats.expired_entries == 1
    assert service.sweep_cache() == 1


def test_from_settings_without_key_is_disabled():
    service = EmbeddingService.from_settings(Settings(openai_api_key=None))

    assert not service.enabled


def test_from_settings_with_key():
    service = EmbeddingService.from_settings(
        Settings(openai_api_key="sk-test", embedding_model="text-embedding-3-large", embedding_max_chars=500)
    )

    assert isinstance(service.provider, OpenAIEmbedding)
    assert service.provider.model_name == "text-embedding-3-large"
    assert service.max_chars == 500

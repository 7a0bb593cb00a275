import math

import pytest

from rulebook.embeddings.hashing import HashEmbeddingProvider


def test_embeddings_are_deterministic_and_normalized() -> None:
    provider = HashEmbeddingProvider(dimension=32)
    first = provider.embed_sync("Use strict typing in TypeScript")
    second = provider.embed_sync("Use strict typing in TypeScript")

    assert first == second
    assert len(first) == 32
    assert math.sqrt(sum(value * value for value in first)) == pytest.approx(1.0)


def test_empty_text_gives_zero_vector() -> None:
    assert HashEmbeddingProvider(dimension=8).embed_sync("  ") == [0.0] * 8


@pytest.mark.asyncio(loop_scope="function")
async def test_async_embed_matches_sync() -> None:
    provider = HashEmbeddingProvider(dimension=16)
    assert await provider.embed("security") == provider.embed_sync("security")
    assert provider.model == "hash-16"

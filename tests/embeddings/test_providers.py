from types import SimpleNamespace

import pytest
from openai import OpenAIError

from rulebook.embeddings import HashEmbeddingProvider, create_embedding_provider
from rulebook.embeddings.openai_provider import OpenAIEmbeddingProvider
from rulebook.errors import EmbeddingProviderError, UnsupportedEmbeddingProviderError
from rulebook.settings import Settings


class FakeEmbeddings:
    def __init__(self, error: Exception | None = None) -> None:
        self.error = error
        self.requests: list[dict] = []

    async def create(self, model: str, input: str):
        self.requests.append({"model": model, "input": input})
        if self.error is not None:
            raise self.error
        return SimpleNamespace(data=[SimpleNamespace(embedding=[0.1, 0.2, 0.3])])


@pytest.mark.asyncio(loop_scope="function")
async def test_openai_provider_returns_first_embedding() -> None:
    embeddings = FakeEmbeddings()
    provider = OpenAIEmbeddingProvider(
        model="text-embedding-3-small", client=SimpleNamespace(embeddings=embeddings)
    )

    assert await provider.embed("hello") == [0.1, 0.2, 0.3]
    assert embeddings.requests == [{"model": "text-embedding-3-small", "input": "hello"}]


@pytest.mark.asyncio(loop_scope="function")
async def test_openai_provider_wraps_client_errors() -> None:
    provider = OpenAIEmbeddingProvider(
        model="m",
        client=SimpleNamespace(embeddings=FakeEmbeddings(error=OpenAIError("quota"))),
    )
    with pytest.raises(EmbeddingProviderError, match="quota"):
        await provider.embed("hello")


@pytest.mark.asyncio(loop_scope="function")
async def test_google_provider_prefixes_model(monkeypatch) -> None:
    import google.generativeai as genai

    from rulebook.embeddings.google_provider import GoogleEmbeddingProvider

    calls: list[dict] = []

    async def fake_embed_content_async(model: str, content: str):
        calls.append({"model": model, "content": content})
        return {"embedding": [1.0, 0.0]}

    monkeypatch.setattr(genai, "embed_content_async", fake_embed_content_async)
    provider = GoogleEmbeddingProvider(model="text-embedding-004")

    assert await provider.embed("rules") == [1.0, 0.0]
    assert calls == [{"model": "models/text-embedding-004", "content": "rules"}]


def test_factory_builds_hash_provider() -> None:
    settings = Settings(_env_file=None, EMBEDDING_PROVIDER="HASH", RULES_INDEX_DIMENSION=12)
    provider = create_embedding_provider(settings)

    assert isinstance(provider, HashEmbeddingProvider)
    assert provider.dimension == 12


def test_factory_builds_openai_provider() -> None:
    settings = Settings(_env_file=None, EMBEDDING_PROVIDER="openai", OPENAI_API_KEY="sk-test")
    provider = create_embedding_provider(settings)

    assert isinstance(provider, OpenAIEmbeddingProvider)
    assert provider.model == "text-embedding-3-small"


def test_factory_rejects_unknown_provider() -> None:
    settings = Settings(_env_file=None, EMBEDDING_PROVIDER="cohere")
    with pytest.raises(UnsupportedEmbeddingProviderError, match="cohere"):
        create_embedding_provider(settings)

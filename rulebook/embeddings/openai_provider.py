from openai import AsyncOpenAI, OpenAIError

from rulebook.embeddings.base import IEmbeddingProvider
from rulebook.errors import EmbeddingProviderError


class OpenAIEmbeddingProvider(IEmbeddingProvider):
    def __init__(self, model: str, api_key: str = "", client: AsyncOpenAI | None = None) -> None:
        self._model = model
        if client is None:
            try:
                client = AsyncOpenAI(api_key=api_key or None)
            except OpenAIError as exc:
                raise EmbeddingProviderError(f"Cannot create OpenAI client: {exc}") from exc
        self._client = client

    @property
    def model(self) -> str:
        return self._model

    async def embed(self, text: str) -> list[float]:
        try:
            response = await self._client.embeddings.create(model=self._model, input=text)
        except OpenAIError as exc:
            raise EmbeddingProviderError(f"OpenAI embedding request failed: {exc}") from exc
        return list(response.data[0].embedding)

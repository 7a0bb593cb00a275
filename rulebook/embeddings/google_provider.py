import google.generativeai as genai
from google.api_core import exceptions as google_exceptions

from rulebook.embeddings.base import IEmbeddingProvider
from rulebook.errors import EmbeddingProviderError


class GoogleEmbeddingProvider(IEmbeddingProvider):
    def __init__(self, model: str, api_key: str = "") -> None:
        self._model = model if model.startswith("models/") else f"models/{model}"
        if api_key:
            genai.configure(api_key=api_key)

    @property
    def model(self) -> str:
        return self._model

    async def embed(self, text: str) -> list[float]:
        try:
            result = await genai.embed_content_async(model=self._model, content=text)
        except google_exceptions.GoogleAPIError as exc:
            raise EmbeddingProviderError(f"Google embedding request failed: {exc}") from exc
        return list(result["embedding"])

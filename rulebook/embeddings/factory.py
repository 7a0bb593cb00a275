from rulebook.embeddings.base import IEmbeddingProvider
from rulebook.errors import UnsupportedEmbeddingProviderError
from rulebook.settings import Settings


def create_embedding_provider(settings: Settings) -> IEmbeddingProvider:
    provider = settings.EMBEDDING_PROVIDER.lower()

    if provider == "openai":
        from rulebook.embeddings.openai_provider import OpenAIEmbeddingProvider

        return OpenAIEmbeddingProvider(
            model=settings.OPENAI_EMBEDDING_MODEL, api_key=settings.OPENAI_API_KEY
        )

    if provider == "google":
        from rulebook.embeddings.google_provider import GoogleEmbeddingProvider

        return GoogleEmbeddingProvider(
            model=settings.GOOGLE_EMBEDDING_MODEL, api_key=settings.GOOGLE_API_KEY
        )

    if provider == "hash":
        from rulebook.embeddings.hashing import HashEmbeddingProvider

        return HashEmbeddingProvider(dimension=settings.RULES_INDEX_DIMENSION)

    raise UnsupportedEmbeddingProviderError(settings.EMBEDDING_PROVIDER)

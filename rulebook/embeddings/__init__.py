from rulebook.embeddings.base import IEmbeddingProvider
from rulebook.embeddings.factory import create_embedding_provider
from rulebook.embeddings.hashing import HashEmbeddingProvider

__all__ = [
    "HashEmbeddingProvider",
    "IEmbeddingProvider",
    "create_embedding_provider",
]

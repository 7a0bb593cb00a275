from abc import ABC, abstractmethod


class IEmbeddingProvider(ABC):
    @property
    @abstractmethod
    def model(self) -> str:
        raise NotImplementedError

    @abstractmethod
    async def embed(self, text: str) -> list[float]:
        """Return the embedding vector for one text."""

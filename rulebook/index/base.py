from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Sequence

from rulebook.index.filters import Predicate
from rulebook.index.projection import AttributeRecord


@dataclass(frozen=True)
class QueryHit:
    attributes: AttributeRecord
    score: float | None = None


class IVectorIndex(ABC):
    @abstractmethod
    def create_index(self, name: str, dimension: int) -> None:
        """Create the named index; an existing index is not an error."""

    @abstractmethod
    def upsert(
        self,
        name: str,
        vectors: Sequence[Sequence[float]],
        attributes: Sequence[AttributeRecord],
    ) -> None:
        """Store vectors keyed by each record's `id`, replacing earlier entries."""

    @abstractmethod
    def query(
        self,
        name: str,
        vector: Sequence[float],
        top_k: int,
        predicate: Predicate | None = None,
    ) -> list[QueryHit]:
        raise NotImplementedError

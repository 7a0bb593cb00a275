"""Process-local vector index; nothing is persisted."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Sequence

from rulebook.errors import VectorIndexError
from rulebook.index.base import IVectorIndex, QueryHit
from rulebook.index.filters import Predicate, matches
from rulebook.index.projection import AttributeRecord


@dataclass
class _Collection:
    dimension: int
    entries: dict[str, tuple[list[float], AttributeRecord]] = field(default_factory=dict)


def cosine_similarity(left: Sequence[float], right: Sequence[float]) -> float:
    left_norm = math.sqrt(sum(value * value for value in left))
    right_norm = math.sqrt(sum(value * value for value in right))
    if left_norm == 0 or right_norm == 0:
        return 0.0
    dot = sum(a * b for a, b in zip(left, right))
    return dot / (left_norm * right_norm)


class MemoryVectorIndex(IVectorIndex):
    def __init__(self) -> None:
        self._collections: dict[str, _Collection] = {}

    def create_index(self, name: str, dimension: int) -> None:
        if name in self._collections:
            return
        self._collections[name] = _Collection(dimension=dimension)

    def upsert(
        self,
        name: str,
        vectors: Sequence[Sequence[float]],
        attributes: Sequence[AttributeRecord],
    ) -> None:
        collection = self._collection(name)
        if len(vectors) != len(attributes):
            raise VectorIndexError(
                f"Vector/attribute count mismatch ({len(vectors)} != {len(attributes)})"
            )
        for vector, record in zip(vectors, attributes):
            self._check_dimension(collection, vector)
            collection.entries[record["id"]] = (list(vector), dict(record))

    def query(
        self,
        name: str,
        vector: Sequence[float],
        top_k: int,
        predicate: Predicate | None = None,
    ) -> list[QueryHit]:
        collection = self._collection(name)
        self._check_dimension(collection, vector)
        hits = [
            QueryHit(attributes=dict(record), score=cosine_similarity(vector, stored))
            for stored, record in collection.entries.values()
            if matches(predicate, record)
        ]
        hits.sort(key=lambda hit: hit.score or 0.0, reverse=True)
        return hits[:top_k]

    def _collection(self, name: str) -> _Collection:
        collection = self._collections.get(name)
        if collection is None:
            raise VectorIndexError(f"Unknown vector index: {name}")
        return collection

    @staticmethod
    def _check_dimension(collection: _Collection, vector: Sequence[float]) -> None:
        if len(vector) != collection.dimension:
            raise VectorIndexError(
                f"Vector dimension {len(vector)} does not match index dimension {collection.dimension}"
            )

"""ChromaDB-backed vector index."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Sequence

import chromadb

from rulebook.errors import IndexInitializationError, VectorIndexError
from rulebook.index.base import IVectorIndex, QueryHit
from rulebook.index.filters import CONTAINS, Predicate, clauses, combine, matches
from rulebook.index.projection import AttributeRecord

logger = logging.getLogger(__name__)


def _uses_operator(clause: Predicate, operator: str) -> bool:
    return any(operator in condition for condition in clause.values())


class ChromaVectorIndex(IVectorIndex):
    """Persistent index on a local Chroma database.

    Collections use squared L2 distance. For unit-length embeddings (OpenAI and
    Google both return normalized vectors) cosine similarity is `1 - d / 2`.
    `$eq` clauses run inside Chroma; `$contains` clauses are evaluated here,
    since Chroma metadata filters have no token containment on strings.
    """

    def __init__(self, path: Path, client: Any | None = None) -> None:
        self.path = path
        self._client = client or chromadb.PersistentClient(path=str(path))
        self._collections: dict[str, Any] = {}

    def create_index(self, name: str, dimension: int) -> None:
        try:
            collection = self._client.get_or_create_collection(
                name=name,
                metadata={"hnsw:space": "l2", "dimension": dimension},
                embedding_function=None,
            )
        except Exception as exc:
            raise IndexInitializationError(name, str(exc)) from exc

        stored_dimension = (collection.metadata or {}).get("dimension")
        if stored_dimension is not None and stored_dimension != dimension:
            raise IndexInitializationError(
                name,
                f"existing collection has dimension {stored_dimension}, configured {dimension}",
            )
        self._collections[name] = collection
        logger.debug("Vector index '%s' ready at %s (dimension %d)", name, self.path, dimension)

    def upsert(
        self,
        name: str,
        vectors: Sequence[Sequence[float]],
        attributes: Sequence[AttributeRecord],
    ) -> None:
        if not attributes:
            return
        collection = self._collection(name)
        try:
            collection.upsert(
                ids=[record["id"] for record in attributes],
                embeddings=[list(vector) for vector in vectors],
                metadatas=[dict(record) for record in attributes],
            )
        except Exception as exc:
            raise VectorIndexError(f"Chroma upsert failed: {exc}") from exc

    def query(
        self,
        name: str,
        vector: Sequence[float],
        top_k: int,
        predicate: Predicate | None = None,
    ) -> list[QueryHit]:
        collection = self._collection(name)
        total = collection.count()
        if total == 0 or top_k <= 0:
            return []

        native = [clause for clause in clauses(predicate) if not _uses_operator(clause, CONTAINS)]
        local = [clause for clause in clauses(predicate) if _uses_operator(clause, CONTAINS)]
        # local clauses filter after ranking, so every candidate has to come back
        n_results = total if local else min(top_k, total)

        try:
            result = collection.query(
                query_embeddings=[list(vector)],
                n_results=n_results,
                where=combine(native),
                include=["metadatas", "distances"],
            )
        except Exception as exc:
            raise VectorIndexError(f"Chroma query failed: {exc}") from exc

        metadatas = (result.get("metadatas") or [[]])[0]
        distances = (result.get("distances") or [[]])[0]
        local_predicate = combine(local)

        hits: list[QueryHit] = []
        for index, metadata in enumerate(metadatas):
            if not metadata or not matches(local_predicate, metadata):
                continue
            distance = distances[index] if index < len(distances) else None
            score = None if distance is None else 1.0 - float(distance) / 2.0
            hits.append(QueryHit(attributes=dict(metadata), score=score))
            if len(hits) >= top_k:
                break
        return hits

    def _collection(self, name: str) -> Any:
        collection = self._collections.get(name)
        if collection is None:
            raise VectorIndexError(f"Vector index '{name}' is not initialized")
        return collection

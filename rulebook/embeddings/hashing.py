"""Deterministic offline embeddings built from hashed word features."""

import hashlib
import math
import re

from rulebook.embeddings.base import IEmbeddingProvider

_TOKEN_RE = re.compile(r"[a-z0-9_#+.-]+")


class HashEmbeddingProvider(IEmbeddingProvider):
    def __init__(self, dimension: int) -> None:
        self.dimension = dimension

    @property
    def model(self) -> str:
        return f"hash-{self.dimension}"

    async def embed(self, text: str) -> list[float]:
        return self.embed_sync(text)

    def embed_sync(self, text: str) -> list[float]:
        vector = [0.0] * self.dimension
        for token in _TOKEN_RE.findall(text.lower()):
            digest = hashlib.sha1(token.encode("utf-8")).digest()
            bucket = int.from_bytes(digest[:4], "big") % self.dimension
            sign = 1.0 if digest[4] % 2 == 0 else -1.0
            vector[bucket] += sign
        norm = math.sqrt(sum(value * value for value in vector))
        if norm == 0:
            return vector
        return [value / norm for value in vector]

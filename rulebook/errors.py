from pathlib import Path


class RulebookError(Exception):
    """Base user-facing application error."""


class RuleFileError(RulebookError):
    def __init__(self, path: Path | str, message: str) -> None:
        self.path = path
        self.message = message
        super().__init__(f"{message}: {path}")


class RuleReadError(RuleFileError):
    def __init__(self, path: Path | str, detail: str) -> None:
        self.detail = detail
        super().__init__(path=path, message=f"Cannot read rule file ({detail})")


class RuleParseError(RuleFileError):
    def __init__(self, path: Path | str, detail: str) -> None:
        self.detail = detail
        super().__init__(path=path, message=f"Malformed rule file ({detail})")


class EmbeddingProviderError(RulebookError):
    """Raised when the embedding provider call fails."""


class UnsupportedEmbeddingProviderError(EmbeddingProviderError):
    def __init__(self, provider: str) -> None:
        self.provider = provider
        super().__init__(f"Unsupported embedding provider: {provider}")


class EmbeddingDimensionError(EmbeddingProviderError):
    def __init__(self, expected: int, actual: int) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Embedding dimension mismatch (expected {expected}, got {actual})"
        )


class VectorIndexError(RulebookError):
    """Raised when the vector index rejects an operation."""


class IndexInitializationError(VectorIndexError):
    def __init__(self, name: str, detail: str) -> None:
        self.name = name
        self.detail = detail
        super().__init__(f"Cannot initialize vector index '{name}' ({detail})")


class UnsupportedIndexBackendError(VectorIndexError):
    def __init__(self, backend: str) -> None:
        self.backend = backend
        super().__init__(f"Unsupported index backend: {backend}")


class InvalidQueryError(RulebookError):
    """Raised for search requests that cannot be executed."""

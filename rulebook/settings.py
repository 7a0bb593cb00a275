from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

from rulebook.constants import (
    DEFAULT_EMBEDDING_CONCURRENCY,
    DEFAULT_INDEX_DIMENSION,
    INDEX_NAME,
)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    # --- Embedding provider ---
    EMBEDDING_PROVIDER: str = "openai"  # "openai" | "google" | "hash"
    EMBEDDING_CONCURRENCY: int = DEFAULT_EMBEDDING_CONCURRENCY

    # --- OpenAI ---
    OPENAI_API_KEY: str = ""
    OPENAI_EMBEDDING_MODEL: str = "text-embedding-3-small"

    # --- Google ---
    GOOGLE_API_KEY: str = ""
    GOOGLE_EMBEDDING_MODEL: str = "text-embedding-004"

    # --- Rules index ---
    RULES_DIR: Path = Path("rules-example")
    RULES_INDEX_BACKEND: str = "chroma"  # "chroma" | "memory"
    RULES_DB_PATH: Path = Path("rules.db")
    RULES_INDEX_NAME: str = INDEX_NAME
    RULES_INDEX_DIMENSION: int = DEFAULT_INDEX_DIMENSION


def load_settings() -> Settings:
    return Settings()

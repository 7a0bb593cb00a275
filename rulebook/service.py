"""Ingestion and retrieval pipeline over the embedding and index capabilities."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping

from rulebook.constants import DEFAULT_SEARCH_LIMIT, LIST_ALL_LIMIT
from rulebook.embeddings import IEmbeddingProvider, create_embedding_provider
from rulebook.errors import (
    EmbeddingDimensionError,
    IndexInitializationError,
    InvalidQueryError,
    RuleReadError,
    RulebookError,
)
from rulebook.index import (
    IVectorIndex,
    create_vector_index,
    project,
    reconstruct,
    translate_filters,
)
from rulebook.rules.models import Rule
from rulebook.rules.parsers import parse_rule_text
from rulebook.rules.sniffer import classify
from rulebook.scanner import RuleFile, RuleFileScanner
from rulebook.settings import Settings

logger = logging.getLogger(__name__)


@dataclass
class RulebookContext:
    """Embedding and index handles shared by every operation in a process."""

    settings: Settings
    embedder: IEmbeddingProvider
    index: IVectorIndex

    @classmethod
    def from_settings(cls, settings: Settings) -> "RulebookContext":
        context = cls(
            settings=settings,
            embedder=create_embedding_provider(settings),
            index=create_vector_index(settings),
        )
        context.initialize()
        return context

    @property
    def index_name(self) -> str:
        return self.settings.RULES_INDEX_NAME

    @property
    def dimension(self) -> int:
        return self.settings.RULES_INDEX_DIMENSION

    def initialize(self) -> None:
        try:
            self.index.create_index(self.index_name, self.dimension)
        except IndexInitializationError:
            raise
        except RulebookError as exc:
            raise IndexInitializationError(self.index_name, str(exc)) from exc
        logger.info(
            "Vector index '%s' created/verified with dimension %d",
            self.index_name,
            self.dimension,
        )


@dataclass(frozen=True)
class SearchResult:
    rule: Rule
    similarity: float


@dataclass
class ScanReport:
    root: Path
    discovered: int = 0
    indexed: list[Rule] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
    failures: list[str] = field(default_factory=list)


def embedding_input(rule: Rule) -> str:
    return f"{rule.metadata.name}\n{rule.metadata.description}\n{rule.content}"


def read_rule_text(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise RuleReadError(path, str(exc)) from exc


class RulesService:
    def __init__(
        self,
        context: RulebookContext,
        scanner: RuleFileScanner | None = None,
        concurrency: int | None = None,
    ) -> None:
        self._context = context
        self._scanner = scanner or RuleFileScanner()
        self._concurrency = max(1, concurrency or context.settings.EMBEDDING_CONCURRENCY)

    @property
    def context(self) -> RulebookContext:
        return self._context

    async def scan_and_index(self, root: Path) -> ScanReport:
        report = ScanReport(root=root)
        rule_files = self._scanner.discover(root)
        report.discovered = len(rule_files)
        if not rule_files:
            logger.warning("No rule files found in %s.", root)
            return report

        semaphore = asyncio.Semaphore(self._concurrency)

        async def _bounded(rule_file: RuleFile):
            async with semaphore:
                return await self._prepare(rule_file, report)

        prepared = await asyncio.gather(*(_bounded(item) for item in rule_files))
        embedded = [item for item in prepared if item is not None]
        if not embedded:
            return report

        logger.info("Inserting %d rules into the vector index...", len(embedded))
        self._context.index.upsert(
            self._context.index_name,
            [vector for _, vector in embedded],
            [project(rule) for rule, _ in embedded],
        )
        report.indexed = [rule for rule, _ in embedded]
        return report

    async def _prepare(
        self, rule_file: RuleFile, report: ScanReport
    ) -> tuple[Rule, list[float]] | None:
        file_path = str(rule_file.path)
        try:
            text = read_rule_text(rule_file.path)
            if not text.strip():
                logger.info("Skipping empty rule file: %s", file_path)
                report.skipped.append(file_path)
                return None
            rule = parse_rule_text(text, file_path, rule_file.classification)
            logger.debug("Generating embedding for rule: %s", rule.metadata.name)
            vector = await self._embed(embedding_input(rule))
        except RulebookError as exc:
            logger.error("Error processing rule file %s: %s", file_path, exc)
            report.failures.append(f"{file_path}: {exc}")
            return None
        except Exception as exc:
            # one broken file must not cancel the rest of the batch
            logger.exception("Unexpected error processing rule file %s", file_path)
            report.failures.append(f"{file_path}: {type(exc).__name__}: {exc}")
            return None
        return rule, vector

    async def _embed(self, text: str) -> list[float]:
        vector = await self._context.embedder.embed(text)
        if len(vector) != self._context.dimension:
            raise EmbeddingDimensionError(self._context.dimension, len(vector))
        return vector

    async def search(
        self,
        query: str,
        limit: int = DEFAULT_SEARCH_LIMIT,
        filters: Mapping[str, str] | None = None,
    ) -> list[SearchResult]:
        if not query or not query.strip():
            raise InvalidQueryError("Query parameter is required")
        if limit <= 0:
            raise InvalidQueryError(f"Limit must be positive, got {limit}")

        vector = await self._embed(query)
        hits = self._context.index.query(
            self._context.index_name,
            vector,
            limit,
            translate_filters(filters),
        )
        return [
            SearchResult(rule=reconstruct(hit.attributes), similarity=hit.score or 0.0)
            for hit in hits
        ]

    def list_all(self) -> list[Rule]:
        """Approximate enumeration: a zero-vector query capped at LIST_ALL_LIMIT."""
        hits = self._context.index.query(
            self._context.index_name,
            [0.0] * self._context.dimension,
            LIST_ALL_LIMIT,
        )
        return [reconstruct(hit.attributes) for hit in hits]

    def count(self) -> int:
        return len(self.list_all())

    @staticmethod
    def parse_file(path: Path) -> Rule | None:
        classification = classify(str(path))
        if classification is None:
            return None
        return parse_rule_text(read_rule_text(path), str(path), classification)

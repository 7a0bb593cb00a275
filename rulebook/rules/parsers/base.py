"""Common contract for dialect parsers."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from pathlib import PurePosixPath

from rulebook.errors import RuleParseError
from rulebook.rules.detection import DEFAULT_TABLES, DetectionTables
from rulebook.rules.markdown import extract_description, extract_title
from rulebook.rules.models import (
    OriginalFormat,
    Rule,
    RuleMetadata,
    RuleSource,
    SourceFormat,
)
from rulebook.utils import normalize_path_text

logger = logging.getLogger(__name__)


class IRuleParser(ABC):
    def __init__(
        self,
        source_format: SourceFormat = SourceFormat.UNKNOWN,
        tables: DetectionTables = DEFAULT_TABLES,
    ) -> None:
        self.source_format = source_format
        self.tables = tables

    def parse(self, raw_text: str, file_path: str) -> Rule:
        """Parse raw text into a rule; malformed structure degrades to plain text."""
        text = raw_text.replace("\r\n", "\n")
        try:
            return self._parse(text, file_path)
        except RuleParseError as exc:
            logger.warning("%s; indexing as plain text", exc)
            return self.fallback_rule(text, file_path)

    @abstractmethod
    def _parse(self, text: str, file_path: str) -> Rule:
        """Build the rule for one file. Raise RuleParseError on malformed input."""

    def fallback_rule(self, text: str, file_path: str) -> Rule:
        return Rule(
            id=file_path,
            file_path=file_path,
            metadata=RuleMetadata(
                name=extract_title(text) or file_stem(file_path),
                description=extract_description(text) or "",
            ),
            source=RuleSource(
                format=self.source_format, original_format=OriginalFormat.MARKDOWN
            ),
            content=text.strip(),
        )


def file_stem(file_path: str) -> str:
    path = PurePosixPath(normalize_path_text(file_path))
    return path.stem or path.name


def file_name(file_path: str) -> str:
    return PurePosixPath(normalize_path_text(file_path)).name

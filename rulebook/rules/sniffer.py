"""Decide which dialect parser handles a rule file."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import PurePosixPath

from rulebook.constants import (
    CLINE_RULES_NAME,
    CONTINUE_RULES_DIR,
    COPILOT_INSTRUCTIONS_DIR,
    COPILOT_INSTRUCTIONS_FILENAME,
    COPILOT_INSTRUCTIONS_SUFFIX,
    CURSOR_LEGACY_RULES_NAME,
    RULE_FILE_EXTENSIONS,
    WINDSURF_RULES_DIR,
    WINDSURF_RULES_NAME,
)
from rulebook.rules.models import SourceFormat
from rulebook.utils import normalize_path_text


class Dialect(str, Enum):
    FRONT_MATTER = "front_matter"
    LIST = "list"
    HEADING = "heading"
    GENERIC = "generic"


@dataclass(frozen=True)
class Classification:
    dialect: Dialect
    source_format: SourceFormat


_PATH_FORMATS: tuple[tuple[str, SourceFormat], ...] = (
    ("cursor", SourceFormat.CURSOR),
    ("cline", SourceFormat.CLINE),
    ("continue", SourceFormat.CONTINUE),
    ("windsurf", SourceFormat.WINDSURF),
    ("copilot", SourceFormat.COPILOT),
)


def derive_source_format(file_path: str) -> SourceFormat:
    normalized = normalize_path_text(file_path).lower()
    for needle, source_format in _PATH_FORMATS:
        if needle in normalized:
            return source_format
    return SourceFormat.UNKNOWN


def is_copilot_file(file_path: str) -> bool:
    return normalize_path_text(file_path).endswith(COPILOT_INSTRUCTIONS_FILENAME)


def is_cline_file(file_path: str) -> bool:
    normalized = normalize_path_text(file_path)
    name = PurePosixPath(normalized).name
    return (
        name == CLINE_RULES_NAME
        or f"{CLINE_RULES_NAME}/" in normalized
        or "clinerules" in name
    )


def classify(file_path: str) -> Classification | None:
    """Return the dialect for a path, or None when it is not a rule file."""
    normalized = normalize_path_text(file_path)
    path = PurePosixPath(normalized)
    name = path.name
    suffix = path.suffix.lower()

    if suffix == ".mdc":
        return Classification(Dialect.FRONT_MATTER, derive_source_format(normalized))

    if is_copilot_file(normalized):
        return Classification(Dialect.HEADING, SourceFormat.COPILOT)
    if COPILOT_INSTRUCTIONS_DIR in normalized and name.endswith(
        COPILOT_INSTRUCTIONS_SUFFIX
    ):
        return Classification(Dialect.FRONT_MATTER, SourceFormat.COPILOT)
    if suffix == ".md" and CONTINUE_RULES_DIR in normalized:
        return Classification(Dialect.FRONT_MATTER, SourceFormat.CONTINUE)
    if suffix == ".md" and WINDSURF_RULES_DIR in normalized:
        return Classification(Dialect.FRONT_MATTER, SourceFormat.WINDSURF)
    if is_cline_file(normalized):
        return Classification(Dialect.LIST, SourceFormat.CLINE)
    if name == WINDSURF_RULES_NAME:
        return Classification(Dialect.LIST, SourceFormat.WINDSURF)
    if name == CURSOR_LEGACY_RULES_NAME:
        return Classification(Dialect.HEADING, SourceFormat.CURSOR)

    if "rules" in name.lower() or suffix in RULE_FILE_EXTENSIONS:
        return Classification(Dialect.GENERIC, SourceFormat.UNKNOWN)
    return None

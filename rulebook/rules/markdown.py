"""Markdown heading, paragraph and glob extraction helpers."""

from __future__ import annotations

import re

from rulebook.constants import DESCRIPTION_MAX_LENGTH, ELLIPSIS
from rulebook.utils import unique

GLOB_RE = re.compile(r"\*\*/?\*\.\w+|\*\.\w+")
BARE_EXTENSION_RE = re.compile(
    r"(?:^|(?<=[\s(`'\"]))\.(\w{2,4})(?=[\s,;)`'\"]|$)", re.MULTILINE
)
SUBHEADING_RE = re.compile(r"^#{2,6}\s+")

_LIST_MARKERS = ("- ", "* ")
_CODE_FENCE = "```"


def truncate_description(text: str, limit: int = DESCRIPTION_MAX_LENGTH) -> str:
    if len(text) <= limit:
        return text
    return f"{text[: limit - len(ELLIPSIS)]}{ELLIPSIS}"


def extract_title(text: str) -> str | None:
    for line in text.splitlines():
        stripped = line.strip()
        if stripped.startswith("# "):
            return stripped[2:].strip() or None
    return None


def extract_description(text: str) -> str | None:
    """Return the first prose line, skipping headings, list items and fences."""
    for line in text.splitlines():
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue
        if stripped.startswith(_LIST_MARKERS) or stripped.startswith(_CODE_FENCE):
            continue
        return truncate_description(stripped)
    return None


def find_globs(text: str) -> list[str]:
    return unique(GLOB_RE.findall(text))


def find_bare_extension_globs(text: str) -> list[str]:
    return unique(f"**/*.{extension}" for extension in BARE_EXTENSION_RE.findall(text))

"""Parse rules with a leading `---` front-matter block (Cursor .mdc and friends)."""

from __future__ import annotations

import re
from dataclasses import replace
from pathlib import PurePosixPath

from rulebook.errors import RuleParseError
from rulebook.rules.models import (
    Category,
    OriginalFormat,
    Priority,
    Rule,
    RuleContext,
    RuleMetadata,
    RuleScope,
    RuleSource,
    SourceFormat,
)
from rulebook.rules.parsers.base import IRuleParser, file_stem
from rulebook.rules.sniffer import derive_source_format
from rulebook.utils import normalize_path_text, strip_quotes

_FRONTMATTER_RE = re.compile(r"^---\s*\n(.*?)\n---\s*(?:\n|$)", re.DOTALL)

FrontMatter = dict[str, str | list[str]]

_LIST_KEYS = ("globs", "applyTo", "tags")


def split_front_matter(text: str, file_path: str) -> tuple[FrontMatter, str]:
    match = _FRONTMATTER_RE.match(text)
    if not match:
        return {}, text
    return parse_front_matter(match.group(1), file_path), text[match.end() :]


def parse_front_matter(block: str, file_path: str) -> FrontMatter:
    """Parse the restricted `key: value` grammar; nested structures are not supported."""
    front_matter: FrontMatter = {}
    for line in block.split("\n"):
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue
        key, sep, value = stripped.partition(":")
        if not sep:
            continue
        key = key.strip()
        value = value.strip()
        if value.startswith("["):
            if not value.endswith("]"):
                raise RuleParseError(file_path, f"unterminated list for '{key}'")
            front_matter[key] = _split_list(value[1:-1])
        elif key in _LIST_KEYS and value:
            front_matter[key] = _split_list(value)
        else:
            front_matter[key] = strip_quotes(value)
    return front_matter


def _split_list(value: str) -> list[str]:
    items = [strip_quotes(item) for item in value.split(",")]
    return [item for item in items if item]


def _as_list(value: str | list[str] | None) -> list[str]:
    if value is None:
        return []
    if isinstance(value, list):
        return value
    return [value] if value else []


def _as_text(value: str | list[str] | None) -> str | None:
    if value is None:
        return None
    if isinstance(value, list):
        return ", ".join(value) or None
    return value or None


class FrontMatterRuleParser(IRuleParser):
    def _parse(self, text: str, file_path: str) -> Rule:
        front_matter, body = split_front_matter(text, file_path)

        globs = _as_list(front_matter.get("globs")) + _as_list(
            front_matter.get("applyTo")
        )
        tags = _as_list(front_matter.get("tags"))
        description = _as_text(front_matter.get("description")) or ""

        scope = RuleScope.build(
            languages=self.tables.languages_for_globs(globs),
            technologies=self.tables.technologies_for_tags(tags),
            file_patterns=globs,
        )
        context = RuleContext(
            category=_enum_or_default(
                Category, front_matter.get("category"), Category.STYLE
            ),
            priority=_enum_or_default(
                Priority, front_matter.get("priority"), Priority.MEDIUM
            ),
        )

        content = body.strip() or text.strip()
        return Rule(
            id=file_path,
            file_path=file_path,
            metadata=RuleMetadata(
                name=description or file_stem(file_path),
                description=description,
                enabled=(_as_text(front_matter.get("enabled")) or "").lower() != "false",
                author=_as_text(front_matter.get("author")),
                version=_as_text(front_matter.get("version")),
                created=_as_text(front_matter.get("date")),
                tags=tags,
            ),
            scope=scope,
            context=context,
            source=RuleSource(
                format=self._source_format_for(file_path),
                original_format=_original_format(file_path),
                frontmatter=dict(front_matter) or None,
            ),
            content=content,
        )

    def _source_format_for(self, file_path: str) -> SourceFormat:
        derived = derive_source_format(file_path)
        if derived == SourceFormat.UNKNOWN:
            return self.source_format
        return derived

    def fallback_rule(self, text: str, file_path: str) -> Rule:
        rule = super().fallback_rule(text, file_path)
        return replace(
            rule,
            source=replace(rule.source, format=self._source_format_for(file_path)),
        )


def _enum_or_default(enum_cls, value, default):
    text = _as_text(value)
    if text is None:
        return default
    try:
        return enum_cls(text.lower())
    except ValueError:
        return default


def _original_format(file_path: str) -> OriginalFormat:
    suffix = PurePosixPath(normalize_path_text(file_path)).suffix.lower()
    return OriginalFormat.MDC if suffix == ".mdc" else OriginalFormat.MARKDOWN

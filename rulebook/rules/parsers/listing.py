"""Parse list-style and freeform rule files (.clinerules, .windsurfrules)."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any

from jsonschema import Draft202012Validator

from rulebook.errors import RuleParseError
from rulebook.rules.markdown import extract_description, extract_title, find_globs
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
from rulebook.utils import strip_quotes

RULE_ARRAY_SCHEMA: dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "type": "array",
    "items": {
        "type": "object",
        "properties": {
            "name": {"type": "string"},
            "description": {"type": "string"},
            "content": {"type": "string"},
            "enabled": {"type": "boolean"},
            "appliesTo": {"type": "array", "items": {"type": "string"}},
        },
    },
}

_VALIDATOR = Draft202012Validator(RULE_ARRAY_SCHEMA)

DEFAULT_DESCRIPTIONS: dict[SourceFormat, str] = {
    SourceFormat.CLINE: "Cline project rules",
    SourceFormat.WINDSURF: "Windsurf project rules",
}


@dataclass
class ListEntry:
    name: str | None = None
    description: str | None = None
    content: str | None = None
    enabled: bool | None = None
    applies_to: list[str] | None = None

    def has_identity(self) -> bool:
        return bool(self.name or self.description)


@dataclass
class ListDocument:
    entries: list[ListEntry] = field(default_factory=list)
    original_format: OriginalFormat = OriginalFormat.MARKDOWN


def parse_json_entries(text: str, file_path: str) -> list[ListEntry]:
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise RuleParseError(file_path, f"invalid JSON: {exc.msg}") from exc
    except RecursionError as exc:
        raise RuleParseError(file_path, "JSON nested too deeply") from exc

    error = next(iter(_VALIDATOR.iter_errors(payload)), None)
    if error is not None:
        location = "/".join(str(part) for part in error.absolute_path) or "root"
        raise RuleParseError(file_path, f"invalid rule list at {location}: {error.message}")

    return [
        ListEntry(
            name=item.get("name"),
            description=item.get("description"),
            content=item.get("content"),
            enabled=item.get("enabled"),
            applies_to=item.get("appliesTo"),
        )
        for item in payload
    ]


def scan_list_entries(text: str) -> list[ListEntry]:
    """Scan `- name:` blocks line by line; unrecognized lines are ignored."""
    entries: list[ListEntry] = []
    current = ListEntry()

    for line in text.split("\n"):
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue

        if stripped.startswith("- name:"):
            if current.has_identity():
                entries.append(current)
            current = ListEntry(name=strip_quotes(stripped[len("- name:") :]))
        elif stripped.startswith("name:"):
            current.name = strip_quotes(stripped[len("name:") :])
        elif stripped.startswith("description:"):
            current.description = strip_quotes(stripped[len("description:") :])
        elif stripped.startswith("content:"):
            current.content = strip_quotes(stripped[len("content:") :])
        elif stripped.startswith("enabled:"):
            current.enabled = stripped[len("enabled:") :].strip() == "true"
        elif stripped.startswith("appliesTo:"):
            current.applies_to = []
        elif stripped.startswith("- ") and current.applies_to is not None:
            current.applies_to.append(strip_quotes(stripped[2:]))

    if current.has_identity():
        entries.append(current)
    return entries


def looks_like_json_array(text: str) -> bool:
    return text.startswith("[") and text.endswith("]")


def looks_like_name_list(text: str) -> bool:
    return text.startswith("- name:") or "\n- name:" in text


class ListRuleParser(IRuleParser):
    def read_document(self, text: str, file_path: str) -> ListDocument:
        trimmed = text.strip()
        if looks_like_json_array(trimmed):
            return ListDocument(
                entries=parse_json_entries(trimmed, file_path),
                original_format=OriginalFormat.JSON,
            )
        if looks_like_name_list(trimmed):
            return ListDocument(
                entries=scan_list_entries(trimmed), original_format=OriginalFormat.YAML
            )
        return ListDocument()

    def _parse(self, text: str, file_path: str) -> Rule:
        document = self.read_document(text, file_path)
        return self.build_rule(document, text, file_path)

    def fallback_rule(self, text: str, file_path: str) -> Rule:
        return self.build_rule(ListDocument(), text, file_path)

    def build_rule(self, document: ListDocument, text: str, file_path: str) -> Rule:
        entries = document.entries
        original_format = document.original_format
        if not entries:
            entries = [
                ListEntry(
                    name=extract_title(text),
                    description=extract_description(text),
                    content=text,
                    enabled=True,
                )
            ]
            original_format = OriginalFormat.MARKDOWN

        combined_text = " ".join(
            f"{entry.name or ''} {entry.description or ''} {entry.content or ''}"
            for entry in entries
        )
        languages = self.tables.detect_languages(combined_text)
        technologies = [
            technology
            for technology in self.tables.detect_technologies(combined_text)
            if technology not in languages
        ]

        file_patterns: list[str] = []
        for entry in entries:
            file_patterns.extend(entry.applies_to or [])
        file_patterns.extend(find_globs(text))

        primary = entries[0]
        combined_content = "\n\n".join(
            entry.content or entry.description or "" for entry in entries
        ).strip()

        return Rule(
            id=file_path,
            file_path=file_path,
            metadata=RuleMetadata(
                name=primary.name or extract_title(text) or file_stem(file_path),
                description=primary.description
                or extract_description(text)
                or DEFAULT_DESCRIPTIONS.get(self.source_format, "Project rules"),
                enabled=primary.enabled is not False,
            ),
            scope=RuleScope.build(
                languages=languages,
                technologies=technologies,
                file_patterns=file_patterns,
            ),
            context=RuleContext(category=Category.STYLE, priority=Priority.MEDIUM),
            source=RuleSource(format=self.source_format, original_format=original_format),
            content=combined_content or text.strip(),
        )

"""Canonical rule data models."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable

from rulebook.utils import unique


class SourceFormat(str, Enum):
    CURSOR = "cursor"
    CLINE = "cline"
    CONTINUE = "continue"
    WINDSURF = "windsurf"
    COPILOT = "copilot"
    UNKNOWN = "unknown"


class OriginalFormat(str, Enum):
    MARKDOWN = "markdown"
    YAML = "yaml"
    JSON = "json"
    MDC = "mdc"
    TEXT = "text"


class Priority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class Category(str, Enum):
    STYLE = "style"
    SYNTAX = "syntax"
    ARCHITECTURE = "architecture"
    SECURITY = "security"
    PERFORMANCE = "performance"
    TESTING = "testing"
    DOCUMENTATION = "documentation"


class Enforcement(str, Enum):
    ERROR = "error"
    WARNING = "warning"
    SUGGESTION = "suggestion"
    INFO = "info"


class ReferenceType(str, Enum):
    RULE = "rule"
    DOCUMENTATION = "documentation"
    EXTERNAL = "external"


def normalize_tokens(values: Iterable[str] | None) -> list[str]:
    """Lowercase, trim and deduplicate scope tokens, keeping first-seen order."""
    if not values:
        return []
    return unique(
        token for token in (str(value).strip().lower() for value in values) if token
    )


def normalize_patterns(values: Iterable[str] | None) -> list[str]:
    if not values:
        return []
    return unique(
        pattern for pattern in (str(value).strip() for value in values) if pattern
    )


@dataclass(frozen=True)
class RuleMetadata:
    name: str = ""
    description: str = ""
    enabled: bool = True
    author: str | None = None
    version: str | None = None
    created: str | None = None
    modified: str | None = None
    tags: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class RuleScope:
    languages: list[str] = field(default_factory=list)
    frameworks: list[str] = field(default_factory=list)
    technologies: list[str] = field(default_factory=list)
    tasks: list[str] = field(default_factory=list)
    file_patterns: list[str] = field(default_factory=list)
    directories: list[str] = field(default_factory=list)
    environments: list[str] = field(default_factory=list)

    @classmethod
    def build(
        cls,
        *,
        languages: Iterable[str] | None = None,
        frameworks: Iterable[str] | None = None,
        technologies: Iterable[str] | None = None,
        tasks: Iterable[str] | None = None,
        file_patterns: Iterable[str] | None = None,
        directories: Iterable[str] | None = None,
        environments: Iterable[str] | None = None,
    ) -> RuleScope | None:
        """Return a normalized scope, or None when every field is empty."""
        scope = cls(
            languages=normalize_tokens(languages),
            frameworks=normalize_tokens(frameworks),
            technologies=normalize_tokens(technologies),
            tasks=normalize_tokens(tasks),
            file_patterns=normalize_patterns(file_patterns),
            directories=normalize_patterns(directories),
            environments=normalize_tokens(environments),
        )
        return None if scope.is_empty() else scope

    def is_empty(self) -> bool:
        return not any(
            (
                self.languages,
                self.frameworks,
                self.technologies,
                self.tasks,
                self.file_patterns,
                self.directories,
                self.environments,
            )
        )


@dataclass(frozen=True)
class RuleContext:
    priority: Priority | None = None
    category: Category | None = None
    enforcement: Enforcement | None = None
    inherit_from: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class RuleSource:
    format: SourceFormat = SourceFormat.UNKNOWN
    original_format: OriginalFormat | None = None
    frontmatter: dict[str, Any] | None = None


@dataclass(frozen=True)
class RuleExample:
    code: str
    title: str | None = None
    description: str | None = None
    language: str | None = None
    good: bool | None = None


@dataclass(frozen=True)
class RuleReference:
    type: ReferenceType
    url: str | None = None
    title: str | None = None
    description: str | None = None


@dataclass(frozen=True)
class Rule:
    id: str
    file_path: str
    metadata: RuleMetadata
    source: RuleSource
    content: str
    scope: RuleScope | None = None
    context: RuleContext | None = None
    examples: list[RuleExample] = field(default_factory=list)
    references: list[RuleReference] = field(default_factory=list)

    def as_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "id": self.id,
            "filePath": self.file_path,
            "metadata": _drop_empty(
                {
                    "name": self.metadata.name,
                    "description": self.metadata.description,
                    "enabled": self.metadata.enabled,
                    "author": self.metadata.author,
                    "version": self.metadata.version,
                    "created": self.metadata.created,
                    "modified": self.metadata.modified,
                    "tags": self.metadata.tags,
                }
            ),
        }
        if self.scope is not None:
            payload["scope"] = _drop_empty(
                {
                    "languages": self.scope.languages,
                    "frameworks": self.scope.frameworks,
                    "technologies": self.scope.technologies,
                    "tasks": self.scope.tasks,
                    "filePatterns": self.scope.file_patterns,
                    "directories": self.scope.directories,
                    "environments": self.scope.environments,
                }
            )
        if self.context is not None:
            payload["context"] = _drop_empty(
                {
                    "priority": _enum_value(self.context.priority),
                    "category": _enum_value(self.context.category),
                    "enforcement": _enum_value(self.context.enforcement),
                    "inheritFrom": self.context.inherit_from,
                }
            )
        payload["source"] = _drop_empty(
            {
                "format": self.source.format.value,
                "originalFormat": _enum_value(self.source.original_format),
                "frontmatter": self.source.frontmatter,
            }
        )
        payload["content"] = self.content
        if self.examples:
            payload["examples"] = [
                _drop_empty(
                    {
                        "title": example.title,
                        "description": example.description,
                        "code": example.code,
                        "language": example.language,
                        "good": example.good,
                    }
                )
                for example in self.examples
            ]
        if self.references:
            payload["references"] = [
                _drop_empty(
                    {
                        "type": reference.type.value,
                        "url": reference.url,
                        "title": reference.title,
                        "description": reference.description,
                    }
                )
                for reference in self.references
            ]
        return payload


def _enum_value(value: Enum | None) -> str | None:
    return value.value if value is not None else None


def _drop_empty(payload: dict[str, Any]) -> dict[str, Any]:
    return {
        key: value
        for key, value in payload.items()
        if value is not None and value != "" and value != [] and value != {}
    }

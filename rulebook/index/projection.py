"""Flatten rules into index attributes and rebuild rules from them."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Mapping, TypeVar

from rulebook.constants import SCOPE_DELIMITER
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

logger = logging.getLogger(__name__)

AttributeRecord = dict[str, str]

E = TypeVar("E", bound=Enum)


def _join(rule_id: str, field_name: str, tokens: list[str]) -> str | None:
    if not tokens:
        return None
    for token in tokens:
        if SCOPE_DELIMITER in token:
            logger.warning(
                "Scope token %r in %s of %s contains %r and will split on reconstruction",
                token,
                field_name,
                rule_id,
                SCOPE_DELIMITER,
            )
    return SCOPE_DELIMITER.join(tokens)


def _split(value: str | None) -> list[str]:
    if not value:
        return []
    return [token for token in value.split(SCOPE_DELIMITER) if token]


def _coerce(enum_cls: type[E], value: object, default: E | None) -> E | None:
    if not isinstance(value, str):
        return default
    try:
        return enum_cls(value)
    except ValueError:
        return default


def project(rule: Rule) -> AttributeRecord:
    scope = rule.scope or RuleScope()
    context = rule.context or RuleContext()
    candidates: dict[str, str | None] = {
        "id": rule.id,
        "filePath": rule.file_path,
        "name": rule.metadata.name,
        "description": rule.metadata.description,
        "content": rule.content,
        "sourceFormat": rule.source.format.value,
        "category": context.category.value if context.category else None,
        "priority": context.priority.value if context.priority else None,
        "language": _join(rule.id, "languages", scope.languages),
        "task": _join(rule.id, "tasks", scope.tasks),
        "technology": _join(rule.id, "technologies", scope.technologies),
        "framework": _join(rule.id, "frameworks", scope.frameworks),
    }
    return {key: value for key, value in candidates.items() if value}


def reconstruct(attributes: Mapping[str, object]) -> Rule:
    """Rebuild a rule; unknown enum values degrade to their defaults."""
    languages = _split(_text(attributes.get("language")))
    tasks = _split(_text(attributes.get("task")))
    technologies = _split(_text(attributes.get("technology")))
    frameworks = _split(_text(attributes.get("framework")))

    scope = None
    if languages or tasks or technologies or frameworks:
        scope = RuleScope(
            languages=languages,
            tasks=tasks,
            technologies=technologies,
            frameworks=frameworks,
        )

    category = _coerce(Category, attributes.get("category"), None)
    priority = _coerce(Priority, attributes.get("priority"), None)
    context = None
    if category is not None or priority is not None:
        context = RuleContext(category=category, priority=priority)

    rule_id = _text(attributes.get("id")) or ""
    return Rule(
        id=rule_id,
        file_path=_text(attributes.get("filePath")) or rule_id,
        metadata=RuleMetadata(
            name=_text(attributes.get("name")) or "",
            description=_text(attributes.get("description")) or "",
            enabled=True,
        ),
        scope=scope,
        context=context,
        source=RuleSource(
            format=_coerce(SourceFormat, attributes.get("sourceFormat"), SourceFormat.UNKNOWN),
            original_format=OriginalFormat.TEXT,
        ),
        content=_text(attributes.get("content")) or "",
    )


def _text(value: object) -> str | None:
    if value is None:
        return None
    return str(value)

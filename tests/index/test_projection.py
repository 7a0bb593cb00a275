import logging

from rulebook.index.projection import project, reconstruct
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


def _rule(**overrides) -> Rule:
    values = dict(
        id="repo/.cursor/rules/typing.mdc",
        file_path="repo/.cursor/rules/typing.mdc",
        metadata=RuleMetadata(name="Typing", description="Use strict typing"),
        source=RuleSource(format=SourceFormat.CURSOR, original_format=OriginalFormat.MDC),
        content="Prefer explicit types.",
        scope=RuleScope.build(
            languages=["typescript", "javascript"],
            technologies=["react"],
            file_patterns=["**/*.ts"],
            tasks=["review"],
            frameworks=["nextjs"],
        ),
        context=RuleContext(category=Category.SECURITY, priority=Priority.HIGH),
    )
    values.update(overrides)
    return Rule(**values)


def test_project_flattens_scope_and_drops_empty_fields() -> None:
    record = project(_rule())

    assert record == {
        "id": "repo/.cursor/rules/typing.mdc",
        "filePath": "repo/.cursor/rules/typing.mdc",
        "name": "Typing",
        "description": "Use strict typing",
        "content": "Prefer explicit types.",
        "sourceFormat": "cursor",
        "category": "security",
        "priority": "high",
        "language": "typescript,javascript",
        "task": "review",
        "technology": "react",
        "framework": "nextjs",
    }


def test_round_trip_keeps_indexed_fields() -> None:
    rebuilt = reconstruct(project(_rule()))

    assert rebuilt.id == "repo/.cursor/rules/typing.mdc"
    assert rebuilt.metadata.name == "Typing"
    assert rebuilt.metadata.enabled is True
    assert rebuilt.scope.languages == ["typescript", "javascript"]
    assert rebuilt.scope.technologies == ["react"]
    assert rebuilt.scope.tasks == ["review"]
    assert rebuilt.scope.frameworks == ["nextjs"]
    assert rebuilt.scope.file_patterns == []
    assert rebuilt.context.category == Category.SECURITY
    assert rebuilt.context.priority == Priority.HIGH
    assert rebuilt.source.format == SourceFormat.CURSOR
    assert rebuilt.source.original_format == OriginalFormat.TEXT


def test_reconstruct_defaults_unknown_values() -> None:
    rebuilt = reconstruct(
        {"id": "x", "sourceFormat": "emacs", "category": "vibes", "priority": 3}
    )

    assert rebuilt.source.format == SourceFormat.UNKNOWN
    assert rebuilt.context is None
    assert rebuilt.scope is None
    assert rebuilt.file_path == "x"
    assert rebuilt.metadata.name == ""
    assert rebuilt.content == ""


def test_project_warns_on_delimiter_inside_token(caplog) -> None:
    rule = _rule(scope=RuleScope(frameworks=["a,b"]))
    with caplog.at_level(logging.WARNING, logger="rulebook"):
        record = project(rule)

    assert record["framework"] == "a,b"
    assert "will split on reconstruction" in caplog.text

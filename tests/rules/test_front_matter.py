"""Tests for front-matter rule parsing (.mdc, .instructions.md, .continue, .windsurf)."""

import logging

from rulebook.rules.models import Category, OriginalFormat, Priority, SourceFormat
from rulebook.rules.parsers.front_matter import FrontMatterRuleParser, parse_front_matter


def test_parse_mdc_with_globs_and_description() -> None:
    parser = FrontMatterRuleParser(source_format=SourceFormat.CURSOR)
    rule = parser.parse(
        "---\n"
        'description: "Use strict typing"\n'
        "globs: [**/*.ts, **/*.tsx]\n"
        "---\n"
        "Prefer explicit types.\n",
        "repo/.cursor/rules/typing.mdc",
    )

    assert rule.id == "repo/.cursor/rules/typing.mdc"
    assert rule.metadata.name == "Use strict typing"
    assert rule.metadata.description == "Use strict typing"
    assert rule.scope is not None
    assert rule.scope.file_patterns == ["**/*.ts", "**/*.tsx"]
    assert rule.scope.languages == ["typescript"]
    assert rule.context is not None
    assert rule.context.category == Category.STYLE
    assert rule.context.priority == Priority.MEDIUM
    assert rule.source.format == SourceFormat.CURSOR
    assert rule.source.original_format == OriginalFormat.MDC
    assert rule.content == "Prefer explicit types."


def test_parse_scalar_apply_to_and_metadata_keys() -> None:
    parser = FrontMatterRuleParser(source_format=SourceFormat.COPILOT)
    rule = parser.parse(
        "---\n"
        "applyTo: **/*.py, **/*.cs\n"
        "tags: react, Django, monorepo\n"
        "category: security\n"
        "priority: HIGH\n"
        "author: Jane\n"
        "version: 1.2.0\n"
        "date: 2024-05-01\n"
        "enabled: false\n"
        "---\n"
        "Validate input.\n",
        "repo/.github/instructions/api.instructions.md",
    )

    assert rule.scope is not None
    assert rule.scope.languages == ["python", "csharp"]
    assert rule.scope.technologies == ["react", "django"]
    assert rule.metadata.tags == ["react", "Django", "monorepo"]
    assert rule.context.category == Category.SECURITY
    assert rule.context.priority == Priority.HIGH
    assert rule.metadata.author == "Jane"
    assert rule.metadata.version == "1.2.0"
    assert rule.metadata.created == "2024-05-01"
    assert rule.metadata.enabled is False
    # no tool name in the path, so the classification decides
    assert rule.source.format == SourceFormat.COPILOT
    assert rule.source.original_format == OriginalFormat.MARKDOWN


def test_enabled_flag_is_case_insensitive() -> None:
    parser = FrontMatterRuleParser(source_format=SourceFormat.CURSOR)
    for value in ("False", "FALSE", "false"):
        rule = parser.parse(
            f"---\ndescription: Style\nenabled: {value}\n---\nBody.\n",
            "repo/.cursor/rules/style.mdc",
        )
        assert rule.metadata.enabled is False, value

    rule = parser.parse("---\nenabled: True\n---\nBody.\n", "repo/.cursor/rules/style.mdc")
    assert rule.metadata.enabled is True


def test_name_falls_back_to_file_stem() -> None:
    parser = FrontMatterRuleParser()
    rule = parser.parse("---\nglobs: *.rb\n---\nUse blocks.\n", "repo/docs/ruby-style.mdc")

    assert rule.metadata.name == "ruby-style"
    assert rule.metadata.description == ""
    assert rule.scope.languages == ["ruby"]


def test_unknown_category_and_priority_use_defaults() -> None:
    rule = FrontMatterRuleParser().parse(
        "---\ncategory: vibes\npriority: urgent\n---\nBody\n", "repo/docs/x.mdc"
    )
    assert rule.context.category == Category.STYLE
    assert rule.context.priority == Priority.MEDIUM


def test_missing_front_matter_keeps_whole_text() -> None:
    rule = FrontMatterRuleParser().parse("Just a body.\n", "repo/docs/plain.mdc")

    assert rule.content == "Just a body."
    assert rule.scope is None
    assert rule.source.frontmatter is None


def test_unknown_extension_yields_no_language() -> None:
    rule = FrontMatterRuleParser().parse(
        "---\nglobs: [**/*.zzz]\n---\nBody\n", "repo/docs/odd.mdc"
    )
    assert rule.scope is not None
    assert rule.scope.languages == []
    assert rule.scope.file_patterns == ["**/*.zzz"]


def test_crlf_line_endings_are_normalized() -> None:
    rule = FrontMatterRuleParser().parse(
        "---\r\ndescription: Windows file\r\n---\r\nBody line\r\n", "repo/docs/win.mdc"
    )
    assert rule.metadata.description == "Windows file"
    assert rule.content == "Body line"


def test_malformed_list_falls_back_to_plain_text(caplog) -> None:
    text = "---\nglobs: [**/*.ts\n---\n# Broken Rule\n\nStill useful text.\n"
    with caplog.at_level(logging.WARNING, logger="rulebook"):
        rule = FrontMatterRuleParser(source_format=SourceFormat.CURSOR).parse(
            text, "repo/.cursor/rules/broken.mdc"
        )

    assert "Malformed rule file" in caplog.text
    assert rule.metadata.name == "Broken Rule"
    assert rule.source.format == SourceFormat.CURSOR
    assert rule.scope is None
    assert "Still useful text." in rule.content


def test_parse_front_matter_grammar() -> None:
    parsed = parse_front_matter(
        "# comment\n"
        "description: 'quoted'\n"
        "globs: *.js\n"
        "alwaysApply: true\n"
        "no separator here\n",
        "x.mdc",
    )
    assert parsed == {
        "description": "quoted",
        "globs": ["*.js"],
        "alwaysApply": "true",
    }

import pytest

from rulebook.rules.detection import DEFAULT_TABLES


@pytest.mark.parametrize(
    ("glob", "expected"),
    [
        ("**/*.py", ["python"]),
        ("**/*.cs", ["csharp"]),
        ("*.tsx", ["typescript"]),
        ("src/**/*.{js,rb}", ["javascript", "ruby"]),
        ("**/*.unknownext", []),
        ("docs/", []),
    ],
)
def test_languages_for_globs(glob: str, expected: list[str]) -> None:
    assert DEFAULT_TABLES.languages_for_globs([glob]) == expected


def test_technologies_for_tags_uses_allow_list() -> None:
    assert DEFAULT_TABLES.technologies_for_tags([" React ", "next", "monorepo"]) == [
        "react",
        "next",
    ]


def test_detect_technologies_matches_whole_words() -> None:
    found = DEFAULT_TABLES.detect_technologies(
        "Use Next.js with Prisma. Going forward, expression trees are fine."
    )
    assert "next.js" in found
    assert "prisma" in found
    assert "express" not in found


def test_detect_languages_from_prose_and_extensions() -> None:
    found = DEFAULT_TABLES.detect_languages("Write Kotlin and keep .rs modules small. C++ too.")
    assert found == ["rust", "kotlin", "cpp"]
    assert DEFAULT_TABLES.detect_languages("javascript only") == ["javascript"]

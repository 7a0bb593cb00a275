from rulebook.rules.markdown import (
    extract_description,
    extract_title,
    find_bare_extension_globs,
    find_globs,
    truncate_description,
)


def test_truncate_description_keeps_short_text() -> None:
    assert truncate_description("short") == "short"
    assert truncate_description("y" * 100) == "y" * 100


def test_truncate_description_cuts_to_one_hundred() -> None:
    result = truncate_description("z" * 150)
    assert len(result) == 100
    assert result == "z" * 97 + "..."


def test_extract_title_and_description() -> None:
    text = "intro line\n# Title Here\n\n## Sub\n- item\n```\ncode\n```\nFirst prose.\n"
    assert extract_title(text) == "Title Here"
    assert extract_description("# T\n\n- item\n```\nFirst prose.\n") == "First prose."


def test_extract_description_none_for_headings_only() -> None:
    assert extract_description("# A\n## B\n") is None
    assert extract_title("no heading") is None


def test_find_globs_deduplicates() -> None:
    assert find_globs("**/*.py, *.md and **/*.py again") == ["**/*.py", "*.md"]


def test_bare_extension_boundaries() -> None:
    text = "Edit .py files, (.rs) and `.go` but not www.example.com or file.txt"
    assert find_bare_extension_globs(text) == ["**/*.py", "**/*.rs", "**/*.go"]

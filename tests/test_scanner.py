import logging
from pathlib import Path

from rulebook.rules.models import SourceFormat
from rulebook.rules.sniffer import Dialect
from rulebook.scanner import RuleFileScanner


def test_discover_walks_tree_in_sorted_order(sample_tree: Path, write_text) -> None:
    write_text(sample_tree / "src" / "main.py", "print('hi')\n")
    write_text(sample_tree / ".windsurfrules", "- name: One\n")

    found = RuleFileScanner().discover(sample_tree)

    assert [item.path.relative_to(sample_tree).as_posix() for item in found] == [
        ".windsurfrules",
        ".cursor/rules/typing.mdc",
        ".github/copilot-instructions.md",
    ]
    assert found[0].classification.dialect == Dialect.LIST
    assert found[2].classification.source_format == SourceFormat.COPILOT


def test_discover_prunes_ignored_directories(rules_root: Path, write_text) -> None:
    write_text(rules_root / "node_modules" / "pkg" / "README.md", "# vendored\n")
    write_text(rules_root / ".git" / "info" / "rules.txt", "ignored\n")
    write_text(rules_root / "docs" / "guide.md", "# Guide\n")

    found = RuleFileScanner().discover(rules_root)

    assert [item.path.name for item in found] == ["guide.md"]


def test_missing_root_is_an_empty_scan(tmp_path: Path, caplog) -> None:
    with caplog.at_level(logging.WARNING, logger="rulebook"):
        found = RuleFileScanner().discover(tmp_path / "nowhere")

    assert found == []
    assert "Rules directory not found" in caplog.text

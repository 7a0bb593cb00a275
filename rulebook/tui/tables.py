from collections import Counter

from rich.markup import escape
from rich.panel import Panel
from rich.table import Column, Table

from rulebook.constants import SCOPE_DELIMITER
from rulebook.rules.models import Rule
from rulebook.service import ScanReport, SearchResult
from rulebook.tui.enums import PRIORITY_STYLE, UIStyle
from rulebook.utils import compact_home_path


def _styled_priority(rule: Rule) -> str:
    if rule.context is None or rule.context.priority is None:
        return ""
    style = PRIORITY_STYLE.get(rule.context.priority, UIStyle.WHITE.value)
    value = rule.context.priority.value
    return f"[{style}]{value}[/{style}]"


def _category(rule: Rule) -> str:
    if rule.context is None or rule.context.category is None:
        return ""
    return rule.context.category.value


def _joined(values: list[str]) -> str:
    return f"{SCOPE_DELIMITER} ".join(values)


class RuleTable:
    @staticmethod
    def summary_block(rules: list[Rule]):
        counts = Counter(rule.source.format.value for rule in rules)
        chips = [f"{key}={value}" for key, value in sorted(counts.items())]
        if not chips:
            chips = ["none"]

        table = Table.grid(padding=(0, 2))
        table.add_column(style="bold")
        table.add_column()
        table.add_row("Rules", str(len(rules)))
        table.add_row("Formats", "  ".join(chips))
        return table

    @staticmethod
    def rules_table(rules: list[Rule]) -> Table:
        table = Table(
            Column(header="Name", overflow="ellipsis", max_width=32),
            Column(header="Format", width=10),
            Column(header="Category", width=14),
            Column(header="Priority", width=9),
            Column(header="Languages", overflow="fold", max_width=24),
            Column(header="Path", overflow="ellipsis"),
            expand=True,
            header_style="bold",
        )
        for rule in rules:
            languages = rule.scope.languages if rule.scope is not None else []
            table.add_row(
                escape(rule.metadata.name),
                rule.source.format.value,
                _category(rule),
                _styled_priority(rule),
                escape(_joined(languages)),
                escape(compact_home_path(rule.file_path)),
            )
        return table


class SearchTable:
    @staticmethod
    def results_table(results: list[SearchResult]) -> Table:
        table = Table(
            Column(header="#", width=3, justify="right"),
            Column(header="Score", width=7, justify="right"),
            Column(header="Name", overflow="ellipsis", max_width=32),
            Column(header="Format", width=10),
            Column(header="Description", overflow="ellipsis"),
            expand=True,
            header_style="bold",
        )
        for position, result in enumerate(results, start=1):
            table.add_row(
                str(position),
                f"{result.similarity:.3f}",
                escape(result.rule.metadata.name),
                result.rule.source.format.value,
                escape(result.rule.metadata.description),
            )
        return table


class ScanTable:
    @staticmethod
    def stats_panel(report: ScanReport) -> Panel:
        stats: dict[str, str] = {
            "discovered": str(report.discovered),
            "indexed": str(len(report.indexed)),
            "skipped": str(len(report.skipped)),
            "failed": str(len(report.failures)),
        }
        table = Table(show_header=False, box=None)
        for key, value in stats.items():
            table.add_row(f"[bold]{key}[/bold]", value)
        return Panel(
            table,
            title="index",
            subtitle=escape(compact_home_path(str(report.root))),
            border_style=UIStyle.GREEN.value if not report.failures else UIStyle.RED.value,
        )

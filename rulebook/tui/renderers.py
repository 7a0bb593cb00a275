import json
from typing import Any

import yaml
from rich.console import Console
from rich.markdown import Markdown
from rich.markup import escape

from rulebook.rules.models import Rule
from rulebook.service import ScanReport, SearchResult
from rulebook.tui.enums import OutputFormat, UIStyle
from rulebook.tui.sections import UISection
from rulebook.tui.tables import RuleTable, ScanTable, SearchTable
from rulebook.utils import compact_home_path, compact_home_paths_in_text


class RulebookConsoleUI:
    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def render_data(self, payload: Any, output: OutputFormat) -> None:
        if output == OutputFormat.YAML:
            text = yaml.safe_dump(payload, sort_keys=False, allow_unicode=True)
        else:
            text = json.dumps(payload, indent=2, ensure_ascii=False)
        # plain write, rich markup would eat square brackets
        self.console.out(text, highlight=False)

    def render_rules(self, rules: list[Rule], output: OutputFormat = OutputFormat.TABLE) -> None:
        if output != OutputFormat.TABLE:
            self.render_data([rule.as_dict() for rule in rules], output)
            return

        if not rules:
            self.console.print(
                UISection.note("rules", "No rules indexed.", style=UIStyle.YELLOW.value)
            )
            return

        self.console.print(
            UISection.wrap("rules overview", RuleTable.summary_block(rules), style=UIStyle.BLUE.value)
        )
        self.console.print(
            UISection.wrap("rules", RuleTable.rules_table(rules), style=UIStyle.CYAN.value)
        )

    def render_search(
        self,
        query: str,
        results: list[SearchResult],
        output: OutputFormat = OutputFormat.TABLE,
    ) -> None:
        if output != OutputFormat.TABLE:
            payload = [
                {"similarity": result.similarity, "rule": result.rule.as_dict()}
                for result in results
            ]
            self.render_data(payload, output)
            return

        if not results:
            self.console.print(
                UISection.note(
                    "search",
                    f"No rules match [bold]{escape(query)}[/bold].",
                    style=UIStyle.YELLOW.value,
                )
            )
            return

        self.console.print(
            UISection.wrap(
                "search",
                SearchTable.results_table(results),
                style=UIStyle.MAGENTA.value,
                subtitle=escape(query),
            )
        )

    def render_count(self, count: int) -> None:
        noun = "rule" if count == 1 else "rules"
        self.console.print(
            UISection.note("count", f"[bold]{count}[/bold] {noun} indexed.", style=UIStyle.BLUE.value)
        )

    def render_scan_report(self, report: ScanReport) -> None:
        self.console.print(ScanTable.stats_panel(report))
        if report.skipped:
            self.console.print(
                UISection.bullets(
                    "skipped",
                    [escape(compact_home_path(item)) for item in report.skipped],
                    style=UIStyle.YELLOW.value,
                )
            )
        if report.failures:
            self.console.print(
                UISection.bullets(
                    "failures",
                    [escape(compact_home_paths_in_text(item)) for item in report.failures],
                    style=UIStyle.RED.value,
                )
            )

    def render_rule(self, rule: Rule, output: OutputFormat = OutputFormat.TABLE) -> None:
        if output != OutputFormat.TABLE:
            self.render_data(rule.as_dict(), output)
            return

        scope = rule.scope
        context = rule.context
        rows = [
            ("Id", rule.id),
            ("Name", rule.metadata.name),
            ("Description", rule.metadata.description),
            ("Format", rule.source.format.value),
            ("Category", context.category.value if context and context.category else ""),
            ("Priority", context.priority.value if context and context.priority else ""),
            ("Languages", ", ".join(scope.languages) if scope else ""),
            ("Technologies", ", ".join(scope.technologies) if scope else ""),
            ("Patterns", ", ".join(scope.file_patterns) if scope else ""),
            ("Enabled", "yes" if rule.metadata.enabled else "no"),
        ]
        self.console.print(
            UISection.wrap(
                "rule",
                UISection.fields((key, escape(value)) for key, value in rows),
                style=UIStyle.BLUE.value,
                subtitle=escape(compact_home_path(rule.file_path)),
            )
        )
        self.console.print(
            UISection.wrap("content", Markdown(rule.content), style=UIStyle.DIM.value)
        )

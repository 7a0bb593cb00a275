import asyncio
from pathlib import Path
from typing import Callable, Dict, Optional

import click
from rich.console import Console

from rulebook.constants import DEFAULT_SEARCH_LIMIT
from rulebook.errors import RulebookError
from rulebook.index.filters import FILTER_OPERATORS
from rulebook.log import configure_logging
from rulebook.service import RulebookContext, RulesService
from rulebook.settings import Settings, load_settings
from rulebook.tui import OutputFormat, RulebookConsoleUI


OUTPUT_VALUES = [item.value for item in OutputFormat]


def _output_option() -> Callable:
    return click.option(
        "--output",
        "-o",
        type=click.Choice(OUTPUT_VALUES, case_sensitive=False),
        default=OutputFormat.TABLE.value,
        show_default=True,
        help="Render as a table or dump as JSON/YAML.",
    )


def _build_context(settings: Settings) -> RulebookContext:
    return RulebookContext.from_settings(settings)


def _service_from_obj(obj: Dict[str, object]) -> RulesService:
    settings = obj.get("settings") or load_settings()
    try:
        context = _build_context(settings)
    except RulebookError as exc:
        raise click.ClickException(f"Fatal: {exc}")
    return RulesService(context)


def _parse_filters(values: tuple[str, ...]) -> dict[str, str]:
    filters: dict[str, str] = {}
    for item in values:
        key, sep, value = item.partition("=")
        key = key.strip()
        if not sep or not key or not value.strip():
            raise click.BadParameter(
                f"expected key=value, got '{item}'", param_hint="--filter"
            )
        if key not in FILTER_OPERATORS:
            allowed = ", ".join(sorted(FILTER_OPERATORS))
            raise click.BadParameter(
                f"unknown filter '{key}' (allowed: {allowed})", param_hint="--filter"
            )
        filters[key] = value
    return filters


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """Index and search AI coding assistant rules."""
    configure_logging(verbose=verbose)
    ctx.ensure_object(dict)


@cli.command(help="Scan a directory tree and index every rule file found.")
@click.argument("root", required=False, type=click.Path(path_type=Path))
@click.pass_obj
def index(obj: Dict[str, object], root: Optional[Path]) -> None:
    ui = RulebookConsoleUI(Console())
    service = _service_from_obj(obj)
    scan_root = root or service.context.settings.RULES_DIR

    try:
        report = asyncio.run(service.scan_and_index(scan_root))
    except RulebookError as exc:
        raise click.ClickException(str(exc))

    ui.render_scan_report(report)
    if report.failures:
        raise click.exceptions.Exit(1)


@cli.command("list", help="List indexed rules.")
@_output_option()
@click.pass_obj
def list_rules(obj: Dict[str, object], output: str) -> None:
    ui = RulebookConsoleUI(Console())
    service = _service_from_obj(obj)
    try:
        rules = service.list_all()
    except RulebookError as exc:
        raise click.ClickException(str(exc))
    ui.render_rules(rules, OutputFormat(output.lower()))


@cli.command(help="Show how many rules are indexed.")
@click.pass_obj
def count(obj: Dict[str, object]) -> None:
    ui = RulebookConsoleUI(Console())
    service = _service_from_obj(obj)
    try:
        total = service.count()
    except RulebookError as exc:
        raise click.ClickException(str(exc))
    ui.render_count(total)


@cli.command(help="Semantic search over indexed rules.")
@click.argument("query")
@click.option(
    "--limit",
    "-n",
    type=click.IntRange(min=1),
    default=DEFAULT_SEARCH_LIMIT,
    show_default=True,
)
@click.option(
    "--filter",
    "-f",
    "filter_values",
    multiple=True,
    metavar="KEY=VALUE",
    help="Restrict by language, technology, framework, category or priority.",
)
@_output_option()
@click.pass_obj
def search(
    obj: Dict[str, object],
    query: str,
    limit: int,
    filter_values: tuple[str, ...],
    output: str,
) -> None:
    ui = RulebookConsoleUI(Console())
    filters = _parse_filters(filter_values)
    service = _service_from_obj(obj)
    try:
        results = asyncio.run(service.search(query, limit=limit, filters=filters))
    except RulebookError as exc:
        raise click.ClickException(str(exc))
    ui.render_search(query, results, OutputFormat(output.lower()))


@cli.command(help="Parse one rule file and print the canonical record.")
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@_output_option()
def parse(path: Path, output: str) -> None:
    ui = RulebookConsoleUI(Console())
    try:
        rule = RulesService.parse_file(path)
    except RulebookError as exc:
        raise click.ClickException(str(exc))
    if rule is None:
        raise click.ClickException(f"Not a recognized rule file: {path}")
    ui.render_rule(rule, OutputFormat(output.lower()))


def main() -> int:
    try:
        cli(standalone_mode=False)
    except click.exceptions.Exit as exc:
        code = exc.exit_code
        return code if isinstance(code, int) else 1
    except click.exceptions.Abort:
        return 1
    except click.ClickException as exc:
        exc.show()
        return 2
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

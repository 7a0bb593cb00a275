import logging

from rich.console import Console
from rich.logging import RichHandler


def configure_logging(verbose: bool = False, console: Console | None = None) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=verbose,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))

    root = logging.getLogger("rulebook")
    root.handlers = [handler]
    root.setLevel(level)

    # third-party clients are chatty at INFO
    for name in ("httpx", "chromadb"):
        logging.getLogger(name).setLevel(logging.WARNING)

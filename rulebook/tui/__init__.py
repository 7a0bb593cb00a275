from rulebook.tui.enums import OutputFormat
from rulebook.tui.renderers import RulebookConsoleUI

__all__ = ["OutputFormat", "RulebookConsoleUI"]

from enum import Enum

from rulebook.rules.models import Priority


class UIStyle(str, Enum):
    BLUE = "blue"
    GREEN = "green"
    YELLOW = "yellow"
    RED = "red"
    CYAN = "cyan"
    MAGENTA = "magenta"
    DIM = "dim"
    WHITE = "white"


class OutputFormat(str, Enum):
    TABLE = "table"
    JSON = "json"
    YAML = "yaml"


PRIORITY_STYLE = {
    Priority.LOW: UIStyle.DIM.value,
    Priority.MEDIUM: UIStyle.CYAN.value,
    Priority.HIGH: UIStyle.YELLOW.value,
    Priority.CRITICAL: UIStyle.RED.value,
}

from typing import Final


INDEX_NAME: Final[str] = "ai_rules"
DEFAULT_INDEX_DIMENSION: Final[int] = 1536
DEFAULT_SEARCH_LIMIT: Final[int] = 5
LIST_ALL_LIMIT: Final[int] = 10000
DEFAULT_EMBEDDING_CONCURRENCY: Final[int] = 4

SCOPE_DELIMITER: Final[str] = ","
DESCRIPTION_MAX_LENGTH: Final[int] = 100
ELLIPSIS: Final[str] = "..."

RULE_FILE_EXTENSIONS: Final[tuple[str, ...]] = (
    ".md",
    ".mdc",
    ".yaml",
    ".yml",
    ".json",
    ".txt",
)

SCAN_IGNORED_DIRS: Final[tuple[str, ...]] = (
    ".git",
    "node_modules",
    ".venv",
    "__pycache__",
)

COPILOT_INSTRUCTIONS_FILENAME: Final[str] = "copilot-instructions.md"
COPILOT_INSTRUCTIONS_DIR: Final[str] = ".github/instructions/"
COPILOT_INSTRUCTIONS_SUFFIX: Final[str] = ".instructions.md"
CLINE_RULES_NAME: Final[str] = ".clinerules"
WINDSURF_RULES_NAME: Final[str] = ".windsurfrules"
CURSOR_LEGACY_RULES_NAME: Final[str] = ".cursorrules"
CONTINUE_RULES_DIR: Final[str] = ".continue/rules/"
WINDSURF_RULES_DIR: Final[str] = ".windsurf/rules/"

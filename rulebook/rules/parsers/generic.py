from __future__ import annotations

from pathlib import PurePosixPath

from rulebook.rules.models import (
    OriginalFormat,
    Rule,
    RuleMetadata,
    RuleSource,
    SourceFormat,
)
from rulebook.rules.parsers.base import IRuleParser, file_name
from rulebook.utils import normalize_path_text

_SUFFIX_FORMATS: dict[str, OriginalFormat] = {
    ".md": OriginalFormat.MARKDOWN,
    ".mdc": OriginalFormat.MDC,
    ".yaml": OriginalFormat.YAML,
    ".yml": OriginalFormat.YAML,
    ".json": OriginalFormat.JSON,
}


class GenericRuleParser(IRuleParser):
    """Index any other sniffed file verbatim under its base name."""

    def _parse(self, text: str, file_path: str) -> Rule:
        suffix = PurePosixPath(normalize_path_text(file_path)).suffix.lower()
        return Rule(
            id=file_path,
            file_path=file_path,
            metadata=RuleMetadata(name=file_name(file_path)),
            source=RuleSource(
                format=SourceFormat.UNKNOWN,
                original_format=_SUFFIX_FORMATS.get(suffix, OriginalFormat.TEXT),
            ),
            content=text.strip(),
        )

"""Parse plain markdown instruction files (copilot-instructions.md, .cursorrules)."""

from __future__ import annotations

from rulebook.rules.markdown import (
    SUBHEADING_RE,
    find_bare_extension_globs,
    find_globs,
    truncate_description,
)
from rulebook.rules.models import (
    Category,
    OriginalFormat,
    Priority,
    Rule,
    RuleContext,
    RuleMetadata,
    RuleScope,
    RuleSource,
    SourceFormat,
)
from rulebook.rules.parsers.base import IRuleParser, file_stem

DEFAULT_DESCRIPTIONS: dict[SourceFormat, str] = {
    SourceFormat.COPILOT: "GitHub Copilot custom instructions",
    SourceFormat.CURSOR: "Cursor project rules",
}


def extract_heading_summary(text: str) -> tuple[str | None, str | None]:
    """Return (title, description) from the first H1 and the first subheading or paragraph."""
    title: str | None = None
    description: str | None = None
    in_fence = False

    for line in text.split("\n"):
        stripped = line.strip()
        if stripped.startswith("```"):
            in_fence = not in_fence
            continue
        if not stripped or in_fence:
            continue

        if stripped.startswith("# "):
            if title is None:
                title = stripped[2:].strip() or None
            continue

        if SUBHEADING_RE.match(stripped):
            if description is None:
                description = truncate_description(SUBHEADING_RE.sub("", stripped).strip())
            continue

        if stripped.startswith("#") or stripped.startswith(("- ", "* ")):
            continue
        if description is None:
            description = truncate_description(stripped)
        if title is not None:
            break

    return title, description


class HeadingRuleParser(IRuleParser):
    def _parse(self, text: str, file_path: str) -> Rule:
        title, description = extract_heading_summary(text)

        languages = self.tables.detect_languages(text)
        technologies = [
            technology
            for technology in self.tables.detect_technologies(text)
            if technology not in languages
        ]
        file_patterns = find_globs(text) + find_bare_extension_globs(text)

        return Rule(
            id=file_path,
            file_path=file_path,
            metadata=RuleMetadata(
                name=title or file_stem(file_path),
                description=description
                or DEFAULT_DESCRIPTIONS.get(self.source_format, "Project instructions"),
            ),
            scope=RuleScope.build(
                languages=languages,
                technologies=technologies,
                file_patterns=file_patterns,
            ),
            context=RuleContext(category=Category.STYLE, priority=Priority.MEDIUM),
            source=RuleSource(
                format=self.source_format, original_format=OriginalFormat.MARKDOWN
            ),
            content=text.strip(),
        )

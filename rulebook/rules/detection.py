"""Keyword and pattern tables shared by every dialect parser."""

from __future__ import annotations

import re
from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterable, Mapping

from rulebook.utils import unique

_GLOB_EXTENSION_RE = re.compile(r"\*\.(\w+)$")
_GLOB_BRACE_RE = re.compile(r"\*\.\{([\w,\s]+)\}$")


@dataclass(frozen=True)
class DetectionTables:
    extension_languages: Mapping[str, str]
    tag_technologies: frozenset[str]
    technology_keywords: tuple[str, ...]
    language_patterns: tuple[tuple[re.Pattern[str], str], ...]

    def languages_for_globs(self, globs: Iterable[str]) -> list[str]:
        languages: list[str] = []
        for glob in globs:
            for extension in _glob_extensions(glob.strip()):
                language = self.extension_languages.get(extension.lower())
                if language:
                    languages.append(language)
        return unique(languages)

    def technologies_for_tags(self, tags: Iterable[str]) -> list[str]:
        return unique(
            tag.strip().lower()
            for tag in tags
            if tag.strip().lower() in self.tag_technologies
        )

    def detect_languages(self, text: str) -> list[str]:
        return unique(
            language
            for pattern, language in self.language_patterns
            if pattern.search(text)
        )

    def detect_technologies(self, text: str) -> list[str]:
        lowered = text.lower()
        return unique(
            keyword
            for keyword in self.technology_keywords
            if re.search(rf"(?<![\w-]){re.escape(keyword)}(?![\w-])", lowered)
        )


def _glob_extensions(glob: str) -> list[str]:
    brace = _GLOB_BRACE_RE.search(glob)
    if brace:
        return [item.strip() for item in brace.group(1).split(",") if item.strip()]
    match = _GLOB_EXTENSION_RE.search(glob)
    if match:
        return [match.group(1)]
    return []


def _pattern(expression: str) -> re.Pattern[str]:
    return re.compile(expression, re.IGNORECASE)


EXTENSION_LANGUAGES: Mapping[str, str] = MappingProxyType(
    {
        "py": "python",
        "js": "javascript",
        "ts": "typescript",
        "tsx": "typescript",
        "jsx": "javascript",
        "java": "java",
        "cpp": "cpp",
        "c": "c",
        "rb": "ruby",
        "go": "go",
        "rs": "rust",
        "php": "php",
        "cs": "csharp",
        "swift": "swift",
        "kt": "kotlin",
        "dart": "dart",
        "vue": "vue",
        "svelte": "svelte",
    }
)

TAG_TECHNOLOGIES: frozenset[str] = frozenset(
    {
        "react",
        "vue",
        "angular",
        "svelte",
        "next",
        "nuxt",
        "express",
        "fastapi",
        "django",
        "spring",
        "rails",
    }
)

TECHNOLOGY_KEYWORDS: tuple[str, ...] = (
    "tdd",
    "test-driven",
    "typescript",
    "javascript",
    "python",
    "java",
    "rust",
    "php",
    "ruby",
    "swift",
    "kotlin",
    "dart",
    "csharp",
    "cpp",
    "react",
    "vue",
    "angular",
    "svelte",
    "next.js",
    "nuxt",
    "node.js",
    "nodejs",
    "express",
    "fastapi",
    "django",
    "spring",
    "rails",
    "jest",
    "vitest",
    "cypress",
    "playwright",
    "axios",
    "prisma",
    "sequelize",
    "docker",
    "kubernetes",
    "mongodb",
    "postgresql",
    "mysql",
    "redis",
)

LANGUAGE_PATTERNS: tuple[tuple[re.Pattern[str], str], ...] = (
    (_pattern(r"\btypescript\b|\.tsx?\b"), "typescript"),
    (_pattern(r"\bjavascript\b|\.jsx?\b"), "javascript"),
    (_pattern(r"\bpython\b|\.py\b|\bsnake_case\b"), "python"),
    (_pattern(r"\bjava\b|\.java\b"), "java"),
    (_pattern(r"\bgolang\b|\bgo lang\b|\.go\b"), "go"),
    (_pattern(r"\brust\b|\.rs\b"), "rust"),
    (_pattern(r"\bphp\b|\.php\b"), "php"),
    (_pattern(r"\bruby\b|\.rb\b"), "ruby"),
    (_pattern(r"\bswift\b|\.swift\b"), "swift"),
    (_pattern(r"\bkotlin\b|\.kt\b"), "kotlin"),
    (_pattern(r"\bdart\b|\.dart\b"), "dart"),
    (_pattern(r"\bc#|\bcsharp\b|\.cs\b"), "csharp"),
    (_pattern(r"c\+\+|\bcpp\b|\.cpp\b|\.cc\b"), "cpp"),
)

DEFAULT_TABLES = DetectionTables(
    extension_languages=EXTENSION_LANGUAGES,
    tag_technologies=TAG_TECHNOLOGIES,
    technology_keywords=TECHNOLOGY_KEYWORDS,
    language_patterns=LANGUAGE_PATTERNS,
)

"""Line-oriented regex extraction and word-boundary search."""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass

_WORD_SPLIT_RE = re.compile(r"[^\w-]+")
_IDENTIFIER_WORD_RE = re.compile(r"[A-Za-z0-9_-]+")
_IGNORED_LINE_PREFIXES = ("//", "/*")


class PatternCompileError(ValueError):
    """Raised when a named pattern is not a valid regular expression."""

    def __init__(self, name: str, pattern: str, reason: str) -> None:
        super().__init__(f"Invalid pattern '{name}' ({pattern!r}): {reason}")
        self.name = name
        self.pattern = pattern


@dataclass(slots=True, frozen=True)
class TextMatch:
    """One pattern hit with 1-based line/column metadata."""

    pattern_name: str
    text: str
    line: int
    column: int


class TextProcessor:
    """Immutable set of named, pre-compiled patterns."""

    def __init__(self, patterns: Iterable[tuple[str, str]] = ()) -> None:
        compiled: list[tuple[str, re.Pattern[str]]] = []
        for name, pattern in patterns:
            compiled.append((name, _compile(name, pattern)))
        self._patterns = tuple(compiled)

    @property
    def pattern_names(self) -> tuple[str, ...]:
        return tuple(name for name, _ in self._patterns)

    def with_pattern(self, name: str, pattern: str) -> TextProcessor:
        """Return a new processor with one more named pattern."""
        extended = TextProcessor()
        extended._patterns = self._patterns + ((name, _compile(name, pattern)),)
        return extended

    def process_content(self, content: str) -> list[TextMatch]:
        """Apply every pattern to each non-ignored line."""
        matches: list[TextMatch] = []
        for line_number, line in enumerate(split_lines(content), start=1):
            if is_ignored_line(line):
                continue
            for name, regex in self._patterns:
                group = 1 if regex.groups else 0
                for match in regex.finditer(line):
                    text = match.group(group)
                    if text is None:
                        continue
                    matches.append(
                        TextMatch(
                            pattern_name=name,
                            text=text,
                            line=line_number,
                            column=match.start(group) + 1,
                        )
                    )
        return matches


def split_lines(content: str) -> list[str]:
    """Split on line feeds only, dropping the carriage return of CRLF endings."""
    return [line.removesuffix("\r") for line in content.split("\n")]


def is_ignored_line(line: str) -> bool:
    """Blank lines and lines opening with a comment marker are skipped."""
    stripped = line.strip()
    return not stripped or stripped.startswith(_IGNORED_LINE_PREFIXES)


def find_exact_words(content: str, word: str) -> bool:
    """Return True when word appears as a whole identifier-like token."""
    return word in word_tokens(content)


def is_identifier_word(word: str) -> bool:
    """Return True when word only uses letters, digits, `_` and `-`."""
    return _IDENTIFIER_WORD_RE.fullmatch(word) is not None


def word_tokens(content: str) -> frozenset[str]:
    """Split content into identifier-like tokens; `-` and `_` stay inside tokens."""
    return frozenset(_WORD_SPLIT_RE.split(content))


def _compile(name: str, pattern: str) -> re.Pattern[str]:
    try:
        return re.compile(pattern)
    except re.error as error:
        raise PatternCompileError(name, pattern, str(error)) from error

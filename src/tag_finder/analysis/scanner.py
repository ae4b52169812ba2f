"""Word search across a file snapshot."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from pathlib import Path

from tag_finder.analysis.text_processor import find_exact_words, is_identifier_word, word_tokens
from tag_finder.config import (
    DEFAULT_CSS_EXTENSIONS,
    AppConfig,
    default_config,
    normalize_extension,
    path_extension,
)
from tag_finder.execution import ParallelExecutor, ProgressObserver
from tag_finder.models import ScanResult
from tag_finder.walker import walk_with_content_parallel


def contains_word(content: str, word: str) -> bool:
    """Whole-token match for identifier words, substring match otherwise."""
    if is_identifier_word(word):
        return find_exact_words(content, word)
    return word in content


@dataclass(slots=True, frozen=True)
class IndexedFile:
    """Snapshot entry with its identifier tokens computed once."""

    path: Path
    content: str
    tokens: frozenset[str]


def index_files(files: Iterable[tuple[Path, str]]) -> list[IndexedFile]:
    return [
        IndexedFile(path=path, content=content, tokens=word_tokens(content))
        for path, content in files
    ]


class UsageScanner:
    """Classify the files that contain a word as stylesheet or other."""

    def __init__(self, css_extensions: Iterable[str] = DEFAULT_CSS_EXTENSIONS) -> None:
        self._css_extensions = frozenset(normalize_extension(ext) for ext in css_extensions)

    def scan(self, word: str, files: Iterable[tuple[Path, str]]) -> ScanResult:
        _require_word(word)
        return self._classify(path for path, content in files if contains_word(content, word))

    def scan_indexed(self, word: str, files: Sequence[IndexedFile]) -> ScanResult:
        """Same result as scan, reading pre-computed tokens for identifier words."""
        _require_word(word)
        if is_identifier_word(word):
            hits = (entry.path for entry in files if word in entry.tokens)
        else:
            hits = (entry.path for entry in files if word in entry.content)
        return self._classify(hits)

    def _classify(self, paths: Iterable[Path]) -> ScanResult:
        css_files: list[str] = []
        other_files: list[str] = []
        for path in paths:
            if path_extension(path) in self._css_extensions:
                css_files.append(str(path))
            else:
                other_files.append(str(path))
        return ScanResult.from_matches(css_files, other_files)


def find_word(
    word: str,
    root: Path | str,
    config: AppConfig | None = None,
    observer: ProgressObserver | None = None,
) -> ScanResult:
    """Walk root and report which files contain word."""
    active = config or default_config()
    _require_word(word)
    executor = ParallelExecutor(active.execution, observer)
    files = walk_with_content_parallel(root, active.rules, executor=executor)
    return UsageScanner(active.rules.css_extensions).scan(word, files)


def _require_word(word: str) -> None:
    if not word:
        raise ValueError("Search word must be a non-empty string.")

"""Deterministic directory traversal with exclusion and extension rules."""

from __future__ import annotations

import os
import time
from collections.abc import Iterable
from dataclasses import asdict, dataclass
from pathlib import Path

from tag_finder.config import FilterRules, default_filter_rules, normalize_extension, path_extension
from tag_finder.execution import ParallelExecutor

FileSnapshot = list[tuple[Path, str]]


@dataclass(slots=True, frozen=True)
class WalkProfile:
    """Deterministic diagnostics for one walk."""

    total_candidates: int
    excluded_by_dir: int
    excluded_by_extension: int
    unreadable: int
    included: int
    total_seconds: float


@dataclass(slots=True, frozen=True)
class _WalkScanResult:
    """Included files and traversal counters."""

    files: tuple[Path, ...]
    total_candidates: int
    excluded_by_dir: int
    excluded_by_extension: int


def walk(
    root: Path | str,
    rules: FilterRules | None = None,
    extensions: Iterable[str] | None = None,
    profile: dict[str, object] | None = None,
) -> list[Path]:
    """List included files under root in deterministic order."""
    started = time.perf_counter()
    scan = _scan_tree(Path(root), rules, extensions)
    if profile is not None:
        _write_profile(profile, scan, unreadable=0, included=len(scan.files), started=started)
    return list(scan.files)


def walk_with_content(
    root: Path | str,
    rules: FilterRules | None = None,
    extensions: Iterable[str] | None = None,
    profile: dict[str, object] | None = None,
) -> FileSnapshot:
    """List included files with their text, skipping unreadable ones."""
    started = time.perf_counter()
    scan = _scan_tree(Path(root), rules, extensions)
    snapshot: FileSnapshot = []
    for path in scan.files:
        content = read_text_file(path)
        if content is not None:
            snapshot.append((path, content))
    if profile is not None:
        _write_profile(
            profile,
            scan,
            unreadable=len(scan.files) - len(snapshot),
            included=len(snapshot),
            started=started,
        )
    return snapshot


def walk_with_content_parallel(
    root: Path | str,
    rules: FilterRules | None = None,
    executor: ParallelExecutor | None = None,
    extensions: Iterable[str] | None = None,
    profile: dict[str, object] | None = None,
) -> FileSnapshot:
    """Same pairs as walk_with_content, with file reads spread over a pool."""
    started = time.perf_counter()
    scan = _scan_tree(Path(root), rules, extensions)
    runner = executor or ParallelExecutor()
    snapshot = runner.process_flat_map(scan.files, _read_pair, phase="Reading files")
    if profile is not None:
        _write_profile(
            profile,
            scan,
            unreadable=len(scan.files) - len(snapshot),
            included=len(snapshot),
            started=started,
        )
    return snapshot


def read_text_file(path: Path) -> str | None:
    """Return UTF-8 text, or None when the file cannot be read as text."""
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        return None


def _read_pair(path: Path) -> list[tuple[Path, str]]:
    content = read_text_file(path)
    if content is None:
        return []
    return [(path, content)]


def _allowed_extensions(
    rules: FilterRules | None, extensions: Iterable[str] | None
) -> tuple[frozenset[str], frozenset[str]]:
    if rules is not None:
        return rules.scanned_extensions, rules.exclude_dirs
    defaults = default_filter_rules()
    if extensions is not None:
        return frozenset(normalize_extension(ext) for ext in extensions), defaults.exclude_dirs
    return defaults.scanned_extensions, defaults.exclude_dirs


def _scan_tree(
    root: Path,
    rules: FilterRules | None,
    extensions: Iterable[str] | None,
) -> _WalkScanResult:
    """Walk tree deterministically, pruning excluded directory names."""
    if not root.is_dir():
        raise NotADirectoryError(f"Scan root is not a directory: {root}")
    allowed, excluded_dir_names = _allowed_extensions(rules, extensions)
    files: list[Path] = []
    total_candidates = 0
    excluded_by_dir = 0
    excluded_by_extension = 0
    stack: list[Path] = [root]
    while stack:
        current = stack.pop()
        try:
            with os.scandir(current) as entries:
                ordered_entries = sorted(entries, key=lambda item: item.name)
        except OSError:
            continue
        for entry in reversed(ordered_entries):
            full_path = Path(entry.path)
            if entry.is_dir(follow_symlinks=False):
                if entry.name in excluded_dir_names:
                    excluded_by_dir += 1
                    continue
                stack.append(full_path)
                continue
            if not entry.is_file(follow_symlinks=False):
                continue
            total_candidates += 1
            if path_extension(entry.name) not in allowed:
                excluded_by_extension += 1
                continue
            files.append(full_path)
    files.sort()
    return _WalkScanResult(
        files=tuple(files),
        total_candidates=total_candidates,
        excluded_by_dir=excluded_by_dir,
        excluded_by_extension=excluded_by_extension,
    )


def _write_profile(
    profile: dict[str, object],
    scan: _WalkScanResult,
    unreadable: int,
    included: int,
    started: float,
) -> None:
    payload = WalkProfile(
        total_candidates=scan.total_candidates,
        excluded_by_dir=scan.excluded_by_dir,
        excluded_by_extension=scan.excluded_by_extension,
        unreadable=unreadable,
        included=included,
        total_seconds=time.perf_counter() - started,
    )
    profile.update(asdict(payload))

"""Inference and verification of dynamically assembled class-name families.

Class names such as ``type-fire`` and ``type-water`` are often produced at
runtime from a literal prefix and a variable segment (``type-${kind}``). The
inference step groups names by a separator-based key and keeps the longest
literal prefix/suffix shared by each group; the verification step looks for
source constructs that could rebuild a name from that prefix and suffix.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from functools import lru_cache
from pathlib import Path

from tag_finder.models import DynamicPattern

SEPARATORS = ("-", "_")
MIN_GROUP_SIZE = 2
MIN_PREFIX_LENGTH = 2

_QUOTE = "[\"'`]"
_NOT_QUOTE = "[^\"'`\\n]"
_PLACEHOLDER = r"(?:\{|\$[A-Za-z_])"


def pattern_key(name: str) -> str | None:
    """Return the grouping key for a class name, or None without a separator.

    The key is the text up to and including the first separator, plus the tail
    starting at the last separator when that one sits further right.
    """
    first = _first_separator(name)
    if first is None:
        return None
    head = name[: first + 1]
    last = max(name.rfind(separator) for separator in SEPARATORS)
    if last > first:
        return f"{head}*{name[last:]}"
    return f"{head}*"


def common_prefix(names: list[str]) -> str:
    if not names:
        return ""
    shortest = min(names, key=len)
    for index, char in enumerate(shortest):
        if any(name[index] != char for name in names):
            return shortest[:index]
    return shortest


def common_suffix(names: list[str]) -> str:
    reversed_prefix = common_prefix([name[::-1] for name in names])
    return reversed_prefix[::-1]


def detect_dynamic_patterns(names: Iterable[str]) -> list[DynamicPattern]:
    """Infer prefix/suffix families shared by at least two class names."""
    groups: dict[str, set[str]] = {}
    for name in names:
        key = pattern_key(name)
        if key is None:
            continue
        groups.setdefault(key, set()).add(name)

    patterns: list[DynamicPattern] = []
    for members in groups.values():
        if len(members) < MIN_GROUP_SIZE:
            continue
        ordered = sorted(members)
        prefix = common_prefix(ordered)
        if len(prefix) < MIN_PREFIX_LENGTH:
            continue
        # prefix and suffix must not overlap inside the shortest member
        room = min(len(name) for name in ordered) - len(prefix)
        suffix = common_suffix(ordered)
        if len(suffix) > room:
            suffix = suffix[len(suffix) - room :] if room > 0 else ""
        patterns.append(DynamicPattern.build(prefix, suffix, ordered))
    patterns.sort(key=lambda item: (item.pattern, sorted(item.matching_classes)))
    return patterns


def find_pattern_usage(content: str, pattern: DynamicPattern) -> bool:
    """Return True when content could rebuild a name of the pattern at runtime."""
    return any(
        regex.search(content) is not None
        for regex in usage_regexes(pattern.prefix, pattern.suffix)
    )


def pattern_used_in_files(pattern: DynamicPattern, files: Iterable[tuple[Path, str]]) -> bool:
    return any(find_pattern_usage(content, pattern) for _, content in files)


@lru_cache(maxsize=1024)
def usage_regexes(prefix: str, suffix: str) -> tuple[re.Pattern[str], ...]:
    """Build the compiled usage forms for one prefix/suffix pair."""
    p = re.escape(prefix)
    s = re.escape(suffix)
    forms = (
        # `type-${kind}`
        rf"{p}\$\{{[^}}]*\}}{s}",
        # "type-{kind}", "type-{}".format(kind)
        rf"{p}\{{[^}}]*\}}{s}",
        # "type-a{kind}-lg" with a placeholder somewhere between prefix and suffix
        rf"(?P<quote>{_QUOTE}){p}{_NOT_QUOTE}*?{_PLACEHOLDER}{_NOT_QUOTE}*{s}(?P=quote)",
        # "btn type-$kind", "type-#{kind}"
        rf"{_QUOTE}{_NOT_QUOTE}*{p}(?:\$[A-Za-z_]\w*|#\{{[^}}]*\}}){s}",
        # "type-" + kind + "-suffix"
        rf"{_QUOTE}{p}{_QUOTE}\s*\+\s*[\w.$\[\]()]+\s*\+\s*{_QUOTE}{s}{_QUOTE}",
        # "type-" + kind
        rf"{_QUOTE}{p}{_QUOTE}\s*\+",
    )
    return tuple(re.compile(form) for form in forms)


def _first_separator(name: str) -> int | None:
    for index, char in enumerate(name):
        if char in SEPARATORS:
            return index
    return None

"""Typed records produced by class extraction and usage analysis."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass


@dataclass(slots=True, frozen=True)
class ClassRecord:
    """One CSS class selector declaration at a file and 1-based line."""

    name: str
    file: str
    line: int

    @property
    def key(self) -> tuple[str, str]:
        return (self.name, self.file)

    def to_dict(self) -> dict[str, object]:
        return {"name": self.name, "file": self.file, "line": self.line}


@dataclass(slots=True, frozen=True)
class ClassUsage:
    """Usage verdict for one class record."""

    css_class: ClassRecord
    is_unused: bool

    def to_dict(self) -> dict[str, object]:
        return {"class": self.css_class.to_dict(), "is_unused": self.is_unused}


@dataclass(slots=True, frozen=True)
class UnusedReport:
    """Aggregated result of one unused-class analysis."""

    total_classes: int
    unused_classes: tuple[ClassRecord, ...]
    used_classes: tuple[ClassRecord, ...]
    by_file: dict[str, tuple[ClassUsage, ...]]

    @classmethod
    def from_usages(cls, usages: Iterable[ClassUsage]) -> UnusedReport:
        """Aggregate usages, keeping their order in each list."""
        unused: list[ClassRecord] = []
        used: list[ClassRecord] = []
        grouped: dict[str, list[ClassUsage]] = {}
        for usage in usages:
            if usage.is_unused:
                unused.append(usage.css_class)
            else:
                used.append(usage.css_class)
            grouped.setdefault(usage.css_class.file, []).append(usage)
        return cls(
            total_classes=len(unused) + len(used),
            unused_classes=tuple(unused),
            used_classes=tuple(used),
            by_file={path: tuple(items) for path, items in grouped.items()},
        )

    @property
    def unused_percentage(self) -> float:
        if self.total_classes == 0:
            return 0.0
        return len(self.unused_classes) / self.total_classes * 100.0

    def files(self) -> list[str]:
        """Return stylesheet paths in sorted order."""
        return sorted(self.by_file.keys())

    def unused_in_file(self, file: str) -> list[ClassUsage]:
        return [usage for usage in self.by_file.get(file, ()) if usage.is_unused]

    def to_dict(self) -> dict[str, object]:
        return {
            "total_classes": self.total_classes,
            "unused_classes": [record.to_dict() for record in self.unused_classes],
            "used_classes": [record.to_dict() for record in self.used_classes],
            "by_file": {
                path: [usage.to_dict() for usage in usages]
                for path, usages in sorted(self.by_file.items())
            },
        }


@dataclass(slots=True, frozen=True)
class DynamicPattern:
    """Inferred family of class names around a variable middle segment."""

    prefix: str
    suffix: str
    pattern: str
    matching_classes: frozenset[str]

    @classmethod
    def build(cls, prefix: str, suffix: str, names: Iterable[str]) -> DynamicPattern:
        return cls(
            prefix=prefix,
            suffix=suffix,
            pattern=f"{prefix}*{suffix}",
            matching_classes=frozenset(names),
        )

    def to_dict(self) -> dict[str, object]:
        return {
            "prefix": self.prefix,
            "suffix": self.suffix,
            "pattern": self.pattern,
            "matching_classes": sorted(self.matching_classes),
        }


@dataclass(slots=True, frozen=True)
class ScanResult:
    """Files containing a word, split into stylesheets and everything else."""

    css_files: tuple[str, ...]
    other_files: tuple[str, ...]
    is_css_only: bool

    @classmethod
    def from_matches(cls, css_files: Iterable[str], other_files: Iterable[str]) -> ScanResult:
        css = tuple(css_files)
        other = tuple(other_files)
        return cls(css_files=css, other_files=other, is_css_only=bool(css) and not other)

    @property
    def found(self) -> bool:
        return bool(self.css_files) or bool(self.other_files)

    def to_dict(self) -> dict[str, object]:
        return {
            "css_files": list(self.css_files),
            "other_files": list(self.other_files),
            "is_css_only": self.is_css_only,
        }

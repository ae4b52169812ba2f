"""Unused CSS class detection: walk, extract, then verify usage in two phases."""

from __future__ import annotations

from pathlib import Path

from tag_finder.analysis.css_parser import extract_classes
from tag_finder.analysis.dynamic_patterns import detect_dynamic_patterns, pattern_used_in_files
from tag_finder.analysis.scanner import UsageScanner, index_files
from tag_finder.config import AppConfig, default_config
from tag_finder.execution import ParallelExecutor, ProgressObserver, null_observer
from tag_finder.execution.progress import note
from tag_finder.models import ClassRecord, ClassUsage, DynamicPattern, UnusedReport
from tag_finder.walker import FileSnapshot, walk_with_content_parallel

PHASE_ANALYSIS = "Analysis"
PHASE_EXACT = "Checking exact matches"
PHASE_PATTERNS = "Checking dynamic patterns"


class UsageDetector:
    """Build an UnusedReport for a directory tree."""

    def __init__(
        self,
        config: AppConfig | None = None,
        observer: ProgressObserver | None = None,
    ) -> None:
        self._config = config or default_config()
        self._observer = observer or null_observer
        self._executor = ParallelExecutor(self._config.execution, self._observer)
        self._scanner = UsageScanner(self._config.rules.css_extensions)

    @property
    def config(self) -> AppConfig:
        return self._config

    def generate_report(self, root: Path | str) -> UnusedReport:
        rules = self._config.rules
        files = walk_with_content_parallel(root, rules, executor=self._executor)
        stylesheets = [(path, content) for path, content in files if rules.is_css_file(path)]
        classes = extract_classes(stylesheets, executor=self._executor)
        self._notify(f"Found {len(classes)} CSS classes in {len(stylesheets)} stylesheets")
        patterns = self.detect_patterns(classes)
        return self.analyze_class_usage(classes, files, patterns)

    def detect_patterns(self, classes: list[ClassRecord]) -> list[DynamicPattern]:
        patterns = detect_dynamic_patterns(record.name for record in classes)
        self._notify(f"Found {len(patterns)} dynamic patterns")
        for pattern in patterns:
            self._notify(f"{pattern.pattern} (covers {len(pattern.matching_classes)} classes)")
        return patterns

    def analyze_class_usage(
        self,
        classes: list[ClassRecord],
        files: FileSnapshot,
        patterns: list[DynamicPattern],
    ) -> UnusedReport:
        """Exact-match pass over every class, then a pattern pass over the rest."""
        indexed = index_files(files)
        css_only = self._executor.process(
            classes,
            lambda record: self._scanner.scan_indexed(record.name, indexed).is_css_only,
            phase=PHASE_EXACT,
        )
        residual = {record.name for record, unused in zip(classes, css_only) if unused}
        pending = css_only.count(True)
        self._notify(
            f"{len(classes) - pending} used via exact match, {pending} need pattern check"
        )

        rescued = self._names_used_via_patterns(residual, files, patterns)
        usages = [
            ClassUsage(css_class=record, is_unused=unused and record.name not in rescued)
            for record, unused in zip(classes, css_only)
        ]
        report = UnusedReport.from_usages(usages)
        self._notify(
            f"Analysis complete: {len(report.unused_classes)} unused of {report.total_classes}"
        )
        return report

    def _names_used_via_patterns(
        self,
        residual: set[str],
        files: FileSnapshot,
        patterns: list[DynamicPattern],
    ) -> set[str]:
        candidates = [pattern for pattern in patterns if pattern.matching_classes & residual]
        if not candidates:
            return set()
        used_flags = self._executor.process(
            candidates,
            lambda pattern: pattern_used_in_files(pattern, files),
            phase=PHASE_PATTERNS,
        )
        rescued: set[str] = set()
        for pattern, used in zip(candidates, used_flags):
            if used:
                rescued.update(pattern.matching_classes & residual)
        return rescued

    def _notify(self, message: str) -> None:
        if self._config.execution.progress_enabled:
            self._observer(note(PHASE_ANALYSIS, message))


def analyze_directory(
    root: Path | str,
    config: AppConfig | None = None,
    observer: ProgressObserver | None = None,
) -> UnusedReport:
    """Run one unused-class analysis over root."""
    return UsageDetector(config, observer).generate_report(root)

"""CSS class selector extraction."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from tag_finder.analysis.text_processor import TextProcessor
from tag_finder.execution import ParallelExecutor
from tag_finder.models import ClassRecord

CSS_CLASS_PATTERN_NAME = "css_class"
CSS_CLASS_PATTERN = r"\.([a-zA-Z][a-zA-Z0-9_-]*)"


def build_class_processor() -> TextProcessor:
    return TextProcessor([(CSS_CLASS_PATTERN_NAME, CSS_CLASS_PATTERN)])


def is_valid_class_name(name: str) -> bool:
    """Reject one-character names and purely numeric fragments."""
    return len(name) >= 2 and not name.isdigit()


def deduplicate_classes(classes: Iterable[ClassRecord]) -> list[ClassRecord]:
    """Keep the first record for every (name, file) pair."""
    seen: set[tuple[str, str]] = set()
    output: list[ClassRecord] = []
    for record in classes:
        if record.key in seen:
            continue
        seen.add(record.key)
        output.append(record)
    return output


def extract_file_classes(
    path: Path | str, content: str, processor: TextProcessor | None = None
) -> list[ClassRecord]:
    """Extract valid class records from one stylesheet, in line order."""
    active = processor or build_class_processor()
    file = str(path)
    return [
        ClassRecord(name=match.text, file=file, line=match.line)
        for match in active.process_content(content)
        if match.pattern_name == CSS_CLASS_PATTERN_NAME and is_valid_class_name(match.text)
    ]


def extract_classes(
    files: Iterable[tuple[Path, str]],
    executor: ParallelExecutor | None = None,
) -> list[ClassRecord]:
    """Extract deduplicated class records from stylesheet contents."""
    processor = build_class_processor()
    runner = executor or ParallelExecutor()
    records = runner.process_flat_map(
        files,
        lambda item: extract_file_classes(item[0], item[1], processor),
        phase="Extracting classes",
    )
    return deduplicate_classes(records)

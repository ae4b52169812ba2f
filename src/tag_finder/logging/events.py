"""Structured JSONL event log utilities."""

from __future__ import annotations

import json
import threading
from dataclasses import asdict, dataclass
from datetime import UTC, datetime
from pathlib import Path

from tag_finder.execution.progress import ProgressEvent


@dataclass(slots=True, frozen=True)
class AuditEvent:
    """Sanitized representation of a single bridge request."""

    timestamp: str
    request_id: str
    tool: str
    ok: bool
    error_code: str | None
    metadata: dict[str, object]


@dataclass(slots=True, frozen=True)
class ProgressRecord:
    """Timestamped progress event as written to the log."""

    timestamp: str
    kind: str
    phase: str
    current: int
    total: int
    message: str


def utc_timestamp() -> str:
    """Return an ISO-8601 UTC timestamp."""
    return datetime.now(tz=UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def summarize_arguments(arguments: dict[str, object]) -> dict[str, object]:
    """Reduce request arguments to log-safe metadata."""
    summary: dict[str, object] = {}
    for key in sorted(arguments.keys()):
        value = arguments[key]
        if key == "directory" and isinstance(value, str):
            summary[key] = value
            continue
        if key == "word" and isinstance(value, str):
            summary["word_length"] = len(value)
            continue
        if isinstance(value, (int, float, bool)) or value is None:
            summary[key] = value
            continue
        if isinstance(value, str):
            summary[f"{key}_length"] = len(value)
            continue
        summary[f"{key}_type"] = type(value).__name__
    return summary


class JsonlEventLogger:
    """Append-only JSONL logger, safe to share between threads."""

    def __init__(self, path: Path) -> None:
        self._path = path
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._lock = threading.Lock()

    @property
    def path(self) -> Path:
        """Return on-disk JSONL path."""
        return self._path

    def append(self, event: AuditEvent | ProgressRecord) -> None:
        """Append one event as one JSON object per line."""
        line = json.dumps(asdict(event), sort_keys=True)
        with self._lock, self._path.open("a", encoding="utf-8") as handle:
            handle.write(line)
            handle.write("\n")


class JsonlProgressObserver:
    """Progress observer that writes every event to a JSONL log."""

    def __init__(self, logger: JsonlEventLogger) -> None:
        self._logger = logger

    def __call__(self, event: ProgressEvent) -> None:
        self._logger.append(
            ProgressRecord(
                timestamp=utc_timestamp(),
                kind=event.kind,
                phase=event.phase,
                current=event.current,
                total=event.total,
                message=event.message,
            )
        )

"""Progress events and observer implementations."""

from __future__ import annotations

import sys
from collections.abc import Callable
from dataclasses import dataclass
from typing import TextIO

PHASE_STARTED = "phase_started"
ITEM_PROCESSED = "item_processed"
PHASE_FINISHED = "phase_finished"
NOTE = "note"

PROGRESS_SEGMENTS = 20


@dataclass(slots=True, frozen=True)
class ProgressEvent:
    """One progress notification emitted by the core."""

    kind: str
    phase: str
    current: int
    total: int
    message: str


ProgressObserver = Callable[[ProgressEvent], None]


def null_observer(event: ProgressEvent) -> None:
    """Discard every event."""


def fan_out(*observers: ProgressObserver) -> ProgressObserver:
    """Combine observers into one that notifies each in order."""
    active = tuple(observers)

    def observer(event: ProgressEvent) -> None:
        for target in active:
            target(event)

    return observer


def progress_step_size(total: int, segments: int = PROGRESS_SEGMENTS) -> int:
    """Return how many items pass between two progress reports."""
    return max(1, total // segments)


def should_report(current: int, total: int, step: int) -> bool:
    return current % step == 0 or current == total


def phase_started(phase: str, total: int, message: str) -> ProgressEvent:
    return ProgressEvent(kind=PHASE_STARTED, phase=phase, current=0, total=total, message=message)


def item_processed(phase: str, current: int, total: int) -> ProgressEvent:
    return ProgressEvent(
        kind=ITEM_PROCESSED,
        phase=phase,
        current=current,
        total=total,
        message=f"{phase} {current}/{total}",
    )


def phase_finished(phase: str, total: int, message: str) -> ProgressEvent:
    return ProgressEvent(
        kind=PHASE_FINISHED, phase=phase, current=total, total=total, message=message
    )


def note(phase: str, message: str) -> ProgressEvent:
    """Free-form diagnostic attached to a phase."""
    return ProgressEvent(kind=NOTE, phase=phase, current=0, total=0, message=message)


class ConsoleProgressObserver:
    """Render progress messages as indented console lines."""

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream

    def __call__(self, event: ProgressEvent) -> None:
        stream = self._stream or sys.stderr
        indent = "   " if event.kind in (ITEM_PROCESSED, NOTE) else ""
        stream.write(f"{indent}{event.message}\n")
        stream.flush()


class RecordingObserver:
    """Keep every event in memory, in arrival order."""

    def __init__(self) -> None:
        self.events: list[ProgressEvent] = []

    def __call__(self, event: ProgressEvent) -> None:
        self.events.append(event)

    def of_kind(self, kind: str) -> list[ProgressEvent]:
        return [event for event in self.events if event.kind == kind]

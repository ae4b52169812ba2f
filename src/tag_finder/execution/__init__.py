"""Parallel execution and progress reporting."""

from .parallel import BatchFailedError, ExecutorInitError, ParallelExecutor
from .progress import (
    ITEM_PROCESSED,
    NOTE,
    PHASE_FINISHED,
    PHASE_STARTED,
    ConsoleProgressObserver,
    ProgressEvent,
    ProgressObserver,
    RecordingObserver,
    fan_out,
    null_observer,
    progress_step_size,
)

__all__ = [
    "BatchFailedError",
    "ConsoleProgressObserver",
    "ExecutorInitError",
    "ITEM_PROCESSED",
    "NOTE",
    "PHASE_FINISHED",
    "PHASE_STARTED",
    "ParallelExecutor",
    "ProgressEvent",
    "ProgressObserver",
    "RecordingObserver",
    "fan_out",
    "null_observer",
    "progress_step_size",
]

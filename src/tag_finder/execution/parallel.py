"""Bounded thread-pool map and flat-map runner."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from concurrent.futures import Future, ThreadPoolExecutor, as_completed
from typing import TypeVar

from tag_finder.config import ExecutionOptions
from tag_finder.execution.progress import (
    ProgressObserver,
    item_processed,
    null_observer,
    phase_finished,
    phase_started,
    progress_step_size,
    should_report,
)

T = TypeVar("T")
R = TypeVar("R")


class ExecutorInitError(RuntimeError):
    """Raised when the worker pool cannot be built."""


class BatchFailedError(RuntimeError):
    """Raised after a batch drains when at least one worker failed."""

    def __init__(self, phase: str, index: int, failures: int, cause: BaseException) -> None:
        super().__init__(f"{phase} failed on item {index} ({failures} failure(s)): {cause}")
        self.phase = phase
        self.index = index
        self.failures = failures
        self.cause = cause


class ParallelExecutor:
    """Apply a worker to every item on a fixed-size pool."""

    def __init__(
        self,
        options: ExecutionOptions | None = None,
        observer: ProgressObserver | None = None,
    ) -> None:
        self._options = options or ExecutionOptions()
        self._observer = observer or null_observer
        thread_count = self._options.resolved_thread_count()
        if isinstance(thread_count, bool) or not isinstance(thread_count, int) or thread_count < 1:
            raise ExecutorInitError(
                f"Thread count must be a positive integer, got {thread_count!r}."
            )
        self._thread_count = thread_count

    @property
    def thread_count(self) -> int:
        return self._thread_count

    @property
    def options(self) -> ExecutionOptions:
        return self._options

    def process(
        self,
        items: Iterable[T],
        worker: Callable[[T], R],
        phase: str = "Processing",
    ) -> list[R]:
        """Return worker results in input order."""
        return self._run(list(items), worker, phase)

    def process_flat_map(
        self,
        items: Iterable[T],
        worker: Callable[[T], Iterable[R]],
        phase: str = "Processing",
    ) -> list[R]:
        """Return the concatenation of worker results in input order."""
        batches = self._run(list(items), lambda item: list(worker(item)), phase)
        output: list[R] = []
        for batch in batches:
            output.extend(batch)
        return output

    def _run(self, items: Sequence[T], worker: Callable[[T], R], phase: str) -> list[R]:
        total = len(items)
        report = self._options.progress_enabled
        if report:
            self._observer(
                phase_started(
                    phase,
                    total,
                    f"{phase}: {total} items using {self._thread_count} threads...",
                )
            )
        if total == 0:
            if report:
                self._observer(phase_finished(phase, 0, f"{phase} complete"))
            return []

        try:
            pool = ThreadPoolExecutor(
                max_workers=self._thread_count, thread_name_prefix="tag-finder"
            )
        except ValueError as error:
            raise ExecutorInitError(f"Cannot build worker pool: {error}") from error

        step = progress_step_size(total)
        with pool:
            futures: dict[Future[R], int] = {}
            try:
                for index, item in enumerate(items):
                    futures[pool.submit(worker, item)] = index
            except RuntimeError as error:
                for future in futures:
                    future.cancel()
                raise ExecutorInitError(f"Cannot start worker threads: {error}") from error

            completed = 0
            for future in as_completed(futures):
                completed += 1
                if report and should_report(completed, total, step):
                    self._observer(item_processed(phase, completed, total))

        results: list[R | None] = [None] * total
        failures: list[tuple[int, BaseException]] = []
        for future, index in futures.items():
            error = future.exception()
            if error is not None:
                failures.append((index, error))
                continue
            results[index] = future.result()
        if failures:
            failures.sort(key=lambda item: item[0])
            index, cause = failures[0]
            raise BatchFailedError(phase, index, len(failures), cause) from cause

        if report:
            self._observer(phase_finished(phase, total, f"{phase} complete"))
        return results  # type: ignore[return-value]

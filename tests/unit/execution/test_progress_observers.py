from __future__ import annotations

import io

from tag_finder.execution import (
    ConsoleProgressObserver,
    ProgressEvent,
    fan_out,
    progress_step_size,
)
from tag_finder.execution.progress import item_processed, note, phase_started, should_report


def test_step_size_is_total_over_twenty_with_floor_of_one() -> None:
    assert progress_step_size(0) == 1
    assert progress_step_size(19) == 1
    assert progress_step_size(100) == 5
    assert progress_step_size(1000) == 50


def test_should_report_on_step_and_on_last_item() -> None:
    assert should_report(5, 100, 5)
    assert not should_report(6, 100, 5)
    assert should_report(7, 7, 5)


def test_console_observer_writes_messages() -> None:
    stream = io.StringIO()
    observer = ConsoleProgressObserver(stream)

    observer(phase_started("Reading files", 3, "Reading files: 3 items using 2 threads..."))
    observer(item_processed("Reading files", 3, 3))
    observer(note("Analysis", "Found 2 dynamic patterns"))

    assert stream.getvalue().splitlines() == [
        "Reading files: 3 items using 2 threads...",
        "   Reading files 3/3",
        "   Found 2 dynamic patterns",
    ]


def test_fan_out_notifies_every_observer_in_order() -> None:
    calls: list[tuple[str, str]] = []
    event = ProgressEvent(kind="note", phase="p", current=0, total=0, message="m")

    combined = fan_out(
        lambda item: calls.append(("first", item.message)),
        lambda item: calls.append(("second", item.message)),
    )
    combined(event)

    assert calls == [("first", "m"), ("second", "m")]

"""Structured logging utilities."""

from .events import (
    AuditEvent,
    JsonlEventLogger,
    JsonlProgressObserver,
    ProgressRecord,
    summarize_arguments,
    utc_timestamp,
)

__all__ = [
    "AuditEvent",
    "JsonlEventLogger",
    "JsonlProgressObserver",
    "ProgressRecord",
    "summarize_arguments",
    "utc_timestamp",
]

"""JSON-lines bridge between a UI shell and the analysis tools.

Each input line is one request, ``{"id", "method", "params"}``, and produces
exactly one output line: ``{"request_id", "ok", "result"}`` on success or
``{"request_id", "ok", "error": {"code", "message"}}`` on failure. Methods
name a tool directly, or go through ``tools/call`` with ``{"name",
"arguments"}``.
"""

from __future__ import annotations

import itertools
import json
from dataclasses import dataclass
from pathlib import Path
from typing import TextIO

from tag_finder.analysis import PatternCompileError
from tag_finder.config import AppConfig, CliOverrides, load_effective_config
from tag_finder.execution import BatchFailedError, ExecutorInitError, ProgressObserver
from tag_finder.logging import AuditEvent, JsonlEventLogger, summarize_arguments, utc_timestamp
from tag_finder.tools import ToolError, build_tools

# first match wins; PatternCompileError is a ValueError
_FAILURE_CODES: tuple[tuple[type[Exception], str], ...] = (
    (PatternCompileError, "INIT_FAILED"),
    (ExecutorInitError, "INIT_FAILED"),
    (BatchFailedError, "BATCH_FAILED"),
    (OSError, "INVALID_PARAMS"),
    (ValueError, "INVALID_PARAMS"),
)


@dataclass(slots=True, frozen=True)
class ToolCall:
    """A request resolved to one tool invocation."""

    request_id: str
    tool: str
    arguments: dict[str, object]


class BridgeServer:
    """Routes JSON-line requests to the analysis tools."""

    def __init__(
        self,
        config: AppConfig,
        audit_logger: JsonlEventLogger | None = None,
        observer: ProgressObserver | None = None,
    ) -> None:
        self._tools = build_tools(config, observer)
        self._audit_logger = audit_logger
        self._anonymous_ids = itertools.count(1)

    def serve(self, in_stream: TextIO, out_stream: TextIO) -> None:
        for raw_line in in_stream:
            line = raw_line.strip()
            if not line:
                continue
            out_stream.write(f"{json.dumps(self.handle_line(line), sort_keys=True)}\n")
            out_stream.flush()

    def handle_line(self, raw_line: str) -> dict[str, object]:
        try:
            payload = json.loads(raw_line)
        except json.JSONDecodeError:
            call = ToolCall(
                request_id=self._anonymous_id(),
                tool="invalid_json",
                arguments={"raw_line_length": len(raw_line)},
            )
            error = ToolError("INVALID_JSON", "Request must be valid JSON.")
            return self._respond(call, error=error)
        return self.handle_payload(payload)

    def handle_payload(self, payload: object) -> dict[str, object]:
        request_id = self._request_id(payload)
        call = ToolCall(request_id=request_id, tool="invalid_request", arguments={})
        try:
            call = _read_call(request_id, payload)
            result = self._dispatch(call)
        except ToolError as error:
            return self._respond(call, error=error)
        return self._respond(call, result=result)

    def _dispatch(self, call: ToolCall) -> dict[str, object]:
        handler = self._tools.get(call.tool)
        if handler is None:
            raise ToolError("UNKNOWN_TOOL", f"Unknown tool: {call.tool}")
        try:
            return handler(call.arguments)
        except ToolError:
            raise
        except Exception as error:
            raise _as_tool_error(error) from error

    def _respond(
        self,
        call: ToolCall,
        result: dict[str, object] | None = None,
        error: ToolError | None = None,
    ) -> dict[str, object]:
        if self._audit_logger is not None:
            self._audit_logger.append(
                AuditEvent(
                    timestamp=utc_timestamp(),
                    request_id=call.request_id,
                    tool=call.tool,
                    ok=error is None,
                    error_code=error.code if error is not None else None,
                    metadata=summarize_arguments(call.arguments),
                )
            )
        if error is not None:
            return {
                "request_id": call.request_id,
                "ok": False,
                "error": {"code": error.code, "message": error.message},
            }
        return {"request_id": call.request_id, "ok": True, "result": result or {}}

    def _request_id(self, payload: object) -> str:
        value = payload.get("id") if isinstance(payload, dict) else None
        if isinstance(value, str) and value:
            return value
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return self._anonymous_id()

    def _anonymous_id(self) -> str:
        return f"req-{next(self._anonymous_ids):06d}"


def _read_call(request_id: str, payload: object) -> ToolCall:
    if not isinstance(payload, dict):
        raise ToolError("INVALID_REQUEST", "Request must be an object.")
    method = payload.get("method")
    params = payload.get("params", {})
    if not isinstance(method, str) or not method:
        raise ToolError("INVALID_REQUEST", "Request method must be a non-empty string.")
    if not isinstance(params, dict):
        raise ToolError("INVALID_PARAMS", "Request params must be an object.")
    if method != "tools/call":
        return ToolCall(request_id=request_id, tool=method, arguments=params)

    name = params.get("name")
    arguments = params.get("arguments", {})
    if not isinstance(name, str) or not name:
        raise ToolError("INVALID_PARAMS", "tools/call params.name must be a non-empty string.")
    if not isinstance(arguments, dict):
        raise ToolError("INVALID_PARAMS", "tools/call params.arguments must be an object.")
    return ToolCall(request_id=request_id, tool=name, arguments=arguments)


def _as_tool_error(error: Exception) -> ToolError:
    for kind, code in _FAILURE_CODES:
        if isinstance(error, kind):
            return ToolError(code, str(error))
    return ToolError("INTERNAL_ERROR", "Unhandled server error while executing tool.")


def create_server(
    base_dir: str = ".",
    config_path: str | None = None,
    audit_log: str | None = None,
    cli_overrides: CliOverrides | None = None,
    observer: ProgressObserver | None = None,
) -> BridgeServer:
    """Load the effective config for base_dir and build a server on it."""
    config = load_effective_config(
        base_dir=Path(base_dir).resolve(),
        config_path=Path(config_path) if config_path is not None else None,
        overrides=cli_overrides,
    )
    audit_logger = JsonlEventLogger(Path(audit_log)) if audit_log is not None else None
    return BridgeServer(config=config, audit_logger=audit_logger, observer=observer)

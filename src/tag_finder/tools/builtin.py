"""Bridge tools: unused-class analysis, word search and status."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

from tag_finder.analysis import analyze_directory, find_word
from tag_finder.config import AppConfig
from tag_finder.execution import ProgressObserver

ToolHandler = Callable[[dict[str, object]], dict[str, object]]


class ToolError(Exception):
    """Request failure carrying a bridge error code."""

    def __init__(self, code: str, message: str) -> None:
        super().__init__(message)
        self.code = code
        self.message = message


def build_tools(
    config: AppConfig,
    observer: ProgressObserver | None = None,
) -> dict[str, ToolHandler]:
    """Map tool names to handlers; `status` lists every name in this mapping."""

    def analyze_css(arguments: dict[str, object]) -> dict[str, object]:
        directory = _require_directory(arguments, "analyze_css")
        return analyze_directory(directory, config=config, observer=observer).to_dict()

    def find_word_tool(arguments: dict[str, object]) -> dict[str, object]:
        word = arguments.get("word")
        if not isinstance(word, str) or not word:
            raise ToolError("INVALID_PARAMS", "find_word requires a non-empty string 'word'.")
        directory = _require_directory(arguments, "find_word")
        return find_word(word, directory, config=config, observer=observer).to_dict()

    tools: dict[str, ToolHandler] = {
        "analyze_css": analyze_css,
        "find_word": find_word_tool,
    }

    def status(_: dict[str, object]) -> dict[str, object]:
        return {"tools": list(tools), "config": config.to_public_dict()}

    tools["status"] = status
    return tools


def _require_directory(arguments: dict[str, object], tool: str) -> Path:
    directory = arguments.get("directory")
    if not isinstance(directory, str) or not directory:
        raise ToolError("INVALID_PARAMS", f"{tool} requires a non-empty string 'directory'.")
    path = Path(directory)
    if not path.is_dir():
        raise ToolError("INVALID_PARAMS", f"{tool} directory does not exist: {directory}")
    return path

"""Tools exposed over the request/response bridge."""

from .builtin import ToolError, ToolHandler, build_tools

__all__ = ["ToolError", "ToolHandler", "build_tools"]

"""MCP transport for the gateway tools."""

from kbgate.server.app import ToolCallFailed, create_server, run_stdio, tool_definitions
from kbgate.server.web import create_http_app, run_http

__all__ = [
    "ToolCallFailed",
    "create_http_app",
    "create_server",
    "run_http",
    "run_stdio",
    "tool_definitions",
]

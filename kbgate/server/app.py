"""MCP server wiring: publishes the registry's tools and dispatches calls to it."""

from __future__ import annotations

from typing import Any

import mcp.types as types
from loguru import logger
from mcp.server.lowlevel import Server
from mcp.server.stdio import stdio_server

from kbgate import __version__
from kbgate.tools.registry import ToolRegistry

SERVER_NAME = "kbgate"


class ToolCallFailed(Exception):
    """Carries an error result out of the call handler so MCP marks it ``isError``."""


def tool_definitions(registry: ToolRegistry) -> list[types.Tool]:
    """Registry tools as MCP tool definitions."""
    return [
        types.Tool(
            name=tool.name,
            title=tool.title,
            description=tool.description,
            inputSchema=tool.parameters,
            annotations=types.ToolAnnotations(title=tool.title, **tool.annotations.to_dict()),
        )
        for tool in registry.tools()
    ]


def create_server(registry: ToolRegistry) -> Server:
    """Build a low-level MCP server backed by ``registry``."""
    server: Server = Server(SERVER_NAME, version=__version__)

    @server.list_tools()
    async def list_tools() -> list[types.Tool]:
        return tool_definitions(registry)

    @server.call_tool()
    async def call_tool(name: str, arguments: dict[str, Any] | None) -> list[types.TextContent]:
        result = await registry.execute(name, arguments)
        if result.is_error:
            raise ToolCallFailed(result.text)
        return [types.TextContent(type="text", text=result.text)]

    return server


async def run_stdio(registry: ToolRegistry) -> None:
    """Serve over stdin/stdout until the client disconnects."""
    server = create_server(registry)
    async with stdio_server() as (read_stream, write_stream):
        logger.info("kbgate MCP server running via stdio")
        await server.run(read_stream, write_stream, server.create_initialization_options())

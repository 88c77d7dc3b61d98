"""Streamable HTTP transport with health and tool discovery endpoints."""

from __future__ import annotations

import contextlib
import time
from collections.abc import AsyncIterator
from datetime import datetime, timezone

import uvicorn
from loguru import logger
from mcp.server.streamable_http_manager import StreamableHTTPSessionManager
from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.routing import Mount, Route
from starlette.types import Receive, Scope, Send

from kbgate.server.app import create_server
from kbgate.tools.registry import ToolRegistry


def create_http_app(registry: ToolRegistry) -> Starlette:
    """Starlette app serving MCP at ``/mcp`` plus ``/health`` and ``/tools``."""
    server = create_server(registry)
    session_manager = StreamableHTTPSessionManager(app=server)
    started = time.monotonic()

    async def handle_mcp(scope: Scope, receive: Receive, send: Send) -> None:
        await session_manager.handle_request(scope, receive, send)

    async def health(request: Request) -> JSONResponse:
        return JSONResponse({
            "status": "ok",
            "uptime": round(time.monotonic() - started, 3),
            "timestamp": datetime.now(timezone.utc).isoformat(),
        })

    async def list_tools(request: Request) -> JSONResponse:
        tools = [
            {
                "name": tool.name,
                "title": tool.title,
                "description": tool.description.split("\n")[0],
                "annotations": tool.annotations.to_dict(),
            }
            for tool in registry.tools()
        ]
        return JSONResponse({"count": len(tools), "tools": tools})

    async def tool_detail(request: Request) -> JSONResponse:
        tool = registry.get(request.path_params["name"])
        if tool is None:
            return JSONResponse(
                {"error": "Tool not found", "availableTools": registry.tool_names},
                status_code=404,
            )
        return JSONResponse(tool.to_schema())

    @contextlib.asynccontextmanager
    async def lifespan(app: Starlette) -> AsyncIterator[None]:
        async with session_manager.run():
            yield
        logger.info("HTTP transport stopped")

    return Starlette(
        routes=[
            Route("/health", health, methods=["GET"]),
            Route("/tools", list_tools, methods=["GET"]),
            Route("/tools/{name}", tool_detail, methods=["GET"]),
            Mount("/mcp", app=handle_mcp),
        ],
        lifespan=lifespan,
    )


async def run_http(registry: ToolRegistry, host: str, port: int) -> None:
    """Serve the HTTP app with uvicorn until interrupted."""
    app = create_http_app(registry)
    logger.info("kbgate MCP server running via HTTP at http://{}:{}/mcp", host, port)
    config = uvicorn.Config(app, host=host, port=port, log_level="warning")
    await uvicorn.Server(config).serve()

"""Tool registry: the boundary where every tool failure becomes an error result."""

from __future__ import annotations

from typing import Any

from loguru import logger

from kbgate.errors import GatewayError, ParameterValidationError
from kbgate.tools.base import Tool, ToolResult


class ToolRegistry:
    """Holds the registered tools and dispatches calls to them."""

    def __init__(self) -> None:
        self._tools: dict[str, Tool] = {}

    def register(self, tool: Tool) -> None:
        self._tools[tool.name] = tool

    def unregister(self, name: str) -> None:
        self._tools.pop(name, None)

    def get(self, name: str) -> Tool | None:
        return self._tools.get(name)

    def has(self, name: str) -> bool:
        return name in self._tools

    @property
    def tool_names(self) -> list[str]:
        return list(self._tools)

    def tools(self) -> list[Tool]:
        return list(self._tools.values())

    def get_definitions(self) -> list[dict[str, Any]]:
        return [tool.to_schema() for tool in self._tools.values()]

    async def execute(self, name: str, params: dict[str, Any] | None) -> ToolResult:
        """Validate and run a tool call. Never raises."""
        tool = self._tools.get(name)
        if tool is None:
            return ToolResult(f"Error: Tool '{name}' not found", is_error=True)

        params = params or {}
        logger.debug("Tool call: {}", name)
        try:
            errors = tool.validate_params(params)
            if errors:
                raise ParameterValidationError(name, errors)
            return ToolResult(await tool.execute(**params))
        except GatewayError as e:
            return ToolResult(e.render(), is_error=True)
        except Exception as e:
            logger.exception("Tool {} failed", name)
            return ToolResult(f"Error executing {name}: {e}", is_error=True)

    def __len__(self) -> int:
        return len(self._tools)

    def __contains__(self, name: str) -> bool:
        return name in self._tools

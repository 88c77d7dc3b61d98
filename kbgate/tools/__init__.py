"""Gateway tools and the registry that dispatches them."""

from __future__ import annotations

from kbgate.config.schema import Config
from kbgate.db.base import DatabaseAdapter
from kbgate.safety.confirm import ConfirmationGate
from kbgate.tools.base import Tool, ToolContext, ToolResult
from kbgate.tools.ddl import ExecuteDDLTool
from kbgate.tools.explain import ExplainTool
from kbgate.tools.modify import ExecuteDMLTool
from kbgate.tools.query import QueryTool
from kbgate.tools.registry import ToolRegistry
from kbgate.tools.schema import (
    DescribeTableTool,
    ListConstraintsTool,
    ListIndexesTool,
    ListSchemasTool,
    ListTablesTool,
    TableStatsTool,
)
from kbgate.tools.table_data import TableDataTool


def build_context(config: Config) -> ToolContext:
    return ToolContext(
        default_schema=config.access.default_schema,
        default_row_limit=config.limits.default_row_limit,
        max_row_limit=config.limits.max_row_limit,
        character_limit=config.limits.character_limit,
    )


def build_registry(db: DatabaseAdapter, config: Config) -> ToolRegistry:
    """Register every gateway tool against one adapter and configuration."""
    ctx = build_context(config)
    policy = config.access.policy()
    gate = ConfirmationGate()

    registry = ToolRegistry()
    registry.register(QueryTool(db, ctx))
    registry.register(ExecuteDMLTool(db, policy, ctx, gate))
    registry.register(ExecuteDDLTool(db, policy, ctx, gate))
    registry.register(ListSchemasTool(db, ctx))
    registry.register(ListTablesTool(db, ctx))
    registry.register(DescribeTableTool(db, ctx))
    registry.register(ListIndexesTool(db, ctx))
    registry.register(ListConstraintsTool(db, ctx))
    registry.register(ExplainTool(db))
    registry.register(TableDataTool(db, ctx))
    registry.register(TableStatsTool(db, ctx))
    return registry


__all__ = ["Tool", "ToolContext", "ToolRegistry", "ToolResult", "build_context", "build_registry"]

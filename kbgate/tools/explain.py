"""Execution plan tool."""

from __future__ import annotations

from typing import Any

from loguru import logger

from kbgate.db.base import DatabaseAdapter
from kbgate.safety.classify import is_read_only
from kbgate.tools.base import Tool, ToolAnnotations


class ExplainTool(Tool):
    """Show the execution plan for a query using EXPLAIN.

    With ``analyze`` the statement is actually executed by the backend.
    """

    # EXPLAIN ANALYZE runs the statement, so the tool is not advertised as read-only.
    annotations = ToolAnnotations(read_only=False, destructive=False, idempotent=True)

    def __init__(self, db: DatabaseAdapter) -> None:
        self._db = db

    @property
    def name(self) -> str:
        return "kb_explain"

    @property
    def title(self) -> str:
        return "Explain Query"

    @property
    def description(self) -> str:
        return (
            "Get the execution plan for a SQL query using EXPLAIN. Use this to analyze "
            "query performance, spot full table scans and check index usage.\n\n"
            "With analyze=true the query is actually executed (EXPLAIN ANALYZE) to "
            "collect real timings, including any side effects it has."
        )

    @property
    def parameters(self) -> dict[str, Any]:
        return {
            "type": "object",
            "properties": {
                "sql": {
                    "type": "string",
                    "minLength": 1,
                    "description": "SQL query to explain.",
                },
                "analyze": {
                    "type": "boolean",
                    "default": False,
                    "description": "Run EXPLAIN ANALYZE (actually executes the query).",
                },
                "format": {
                    "type": "string",
                    "enum": ["text", "json", "yaml"],
                    "default": "text",
                    "description": "Output format for the execution plan.",
                },
            },
            "required": ["sql"],
            "additionalProperties": False,
        }

    async def execute(self, sql: str, analyze: bool = False, format: str = "text") -> str:
        if analyze and not is_read_only(sql):
            logger.warning("EXPLAIN ANALYZE will execute a non read-only statement: {}", sql[:80])

        options = ["ANALYZE"] if analyze else []
        if format != "text":
            options.append(f"FORMAT {format.upper()}")
        prefix = f"EXPLAIN ({', '.join(options)})" if options else "EXPLAIN"

        result = await self._db.execute(f"{prefix} {sql}")
        plan = "\n".join(str(row[0]) for row in result.rows if row)
        return f"# Execution Plan\n\n```\n{plan}\n```"

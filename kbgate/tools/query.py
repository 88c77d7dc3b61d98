"""Read-only SQL query execution tool."""

from __future__ import annotations

from typing import Any

from loguru import logger

from kbgate.db.base import DatabaseAdapter
from kbgate.errors import ClassificationRejection
from kbgate.formatting import format_rows, plural
from kbgate.safety.classify import is_read_only
from kbgate.safety.qualify import qualify_table_names
from kbgate.tools.base import SCHEMA_PARAM, SQL_PARAMS_SCHEMA, Tool, ToolAnnotations, ToolContext


class QueryTool(Tool):
    """Execute a read-only query (SELECT / WITH / EXPLAIN / SHOW)."""

    annotations = ToolAnnotations(read_only=True, idempotent=True)

    def __init__(self, db: DatabaseAdapter, ctx: ToolContext) -> None:
        self._db = db
        self._ctx = ctx

    @property
    def name(self) -> str:
        return "kb_query"

    @property
    def title(self) -> str:
        return "Execute Query"

    @property
    def description(self) -> str:
        return (
            "Execute a read-only SQL query (SELECT/WITH/SHOW) against the database.\n\n"
            "Returns query results as a formatted table. Use parameterized queries "
            "($1, $2, ...) for safe value substitution. For INSERT/UPDATE/DELETE use "
            "kb_execute; for DDL use kb_execute_ddl.\n\n"
            "Unqualified table names are prefixed with the configured schema; "
            "override it with the 'schema' parameter."
        )

    @property
    def parameters(self) -> dict[str, Any]:
        return {
            "type": "object",
            "properties": {
                "sql": {
                    "type": "string",
                    "minLength": 1,
                    "description": "SELECT query to execute. Only read-only statements are allowed.",
                },
                "params": SQL_PARAMS_SCHEMA,
                "schema": SCHEMA_PARAM,
            },
            "required": ["sql"],
            "additionalProperties": False,
        }

    async def execute(
        self,
        sql: str,
        params: list[Any] | None = None,
        schema: str | None = None,
    ) -> str:
        if not is_read_only(sql):
            logger.warning("kb_query rejected non read-only statement: {}", sql[:80])
            raise ClassificationRejection(
                "Only read-only queries (SELECT/WITH/SHOW) are allowed. "
                "Use kb_execute for DML or kb_execute_ddl for DDL."
            )

        qualified = qualify_table_names(sql, self._ctx.resolve_schema(schema))
        result = await self._db.execute(qualified, params)
        table = format_rows(result.columns, result.rows, self._ctx.character_limit)
        return f"{table}\n\n({plural(result.row_count, 'row')})"

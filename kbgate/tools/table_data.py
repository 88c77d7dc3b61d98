"""Paged table preview tool."""

from __future__ import annotations

import asyncio
from typing import Any

from kbgate.db.base import DatabaseAdapter
from kbgate.formatting import format_rows
from kbgate.tools.base import SCHEMA_PARAM, Tool, ToolAnnotations, ToolContext


def quote_ident(name: str) -> str:
    return '"' + name.replace('"', '""') + '"'


class TableDataTool(Tool):
    """Preview rows of a table with optional filtering, ordering and paging."""

    annotations = ToolAnnotations(read_only=True, idempotent=True)

    def __init__(self, db: DatabaseAdapter, ctx: ToolContext) -> None:
        self._db = db
        self._ctx = ctx

    @property
    def name(self) -> str:
        return "kb_table_data"

    @property
    def title(self) -> str:
        return "Preview Table Data"

    @property
    def description(self) -> str:
        return (
            "Preview data from a table with optional filtering and pagination. "
            "A shortcut for common SELECT operations without writing full SQL.\n\n"
            f"Returns up to 'limit' rows (default {self._ctx.default_row_limit}, "
            f"max {self._ctx.max_row_limit}) with the total row count."
        )

    @property
    def parameters(self) -> dict[str, Any]:
        return {
            "type": "object",
            "properties": {
                "table": {
                    "type": "string",
                    "minLength": 1,
                    "description": "Table name to preview data from.",
                },
                "schema": SCHEMA_PARAM,
                "limit": {
                    "type": "integer",
                    "minimum": 1,
                    "maximum": self._ctx.max_row_limit,
                    "default": self._ctx.default_row_limit,
                    "description": "Number of rows to return.",
                },
                "offset": {
                    "type": "integer",
                    "minimum": 0,
                    "default": 0,
                    "description": "Number of rows to skip.",
                },
                "where": {
                    "type": "string",
                    "description": "Optional WHERE condition without the WHERE keyword, e.g. \"status = 'active'\".",
                },
                "order_by": {
                    "type": "string",
                    "description": "Optional ORDER BY clause without the keywords, e.g. \"created_at DESC\".",
                },
            },
            "required": ["table"],
            "additionalProperties": False,
        }

    async def execute(
        self,
        table: str,
        schema: str | None = None,
        limit: int | None = None,
        offset: int = 0,
        where: str | None = None,
        order_by: str | None = None,
    ) -> str:
        limit = min(limit or self._ctx.default_row_limit, self._ctx.max_row_limit)
        qualified = f"{quote_ident(self._ctx.resolve_schema(schema))}.{quote_ident(table)}"

        count_sql = f"SELECT count(*) AS total FROM {qualified}"
        data_sql = f"SELECT * FROM {qualified}"
        if where:
            count_sql += f" WHERE {where}"
            data_sql += f" WHERE {where}"
        if order_by:
            data_sql += f" ORDER BY {order_by}"
        data_sql += f" LIMIT {limit} OFFSET {offset}"

        count_result, data_result = await asyncio.gather(
            self._db.execute(count_sql),
            self._db.execute(data_sql),
        )

        total = int(count_result.scalar() or 0)
        showing = data_result.row_count
        lines = [
            format_rows(data_result.columns, data_result.rows, self._ctx.character_limit),
            "",
            f"Showing {offset + 1}-{offset + showing} of {total} total row(s).",
        ]
        if offset + showing < total:
            lines.append(f"More rows available. Use offset: {offset + showing} to see next page.")
        return "\n".join(lines)

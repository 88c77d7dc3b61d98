"""Catalog inspection tools: schemas, tables, columns, indexes, constraints, statistics."""

from __future__ import annotations

from typing import Any

from kbgate.db.base import DatabaseAdapter
from kbgate.tools.base import SCHEMA_PARAM, Tool, ToolAnnotations, ToolContext

_LIST_SCHEMAS_SQL = """
SELECT schema_name, schema_owner
FROM information_schema.schemata
WHERE schema_name NOT IN ('pg_catalog', 'information_schema', 'pg_toast', 'sys_catalog')
  AND schema_name NOT LIKE 'pg_temp_%'
  AND schema_name NOT LIKE 'pg_toast_temp_%'
ORDER BY schema_name
"""

_RELKIND_FILTERS = {
    "table": "AND c.relkind = 'r'",
    "view": "AND c.relkind IN ('v', 'm')",
    "all": "AND c.relkind IN ('r', 'v', 'm')",
}

_LIST_TABLES_SQL = """
SELECT
  c.relname AS name,
  CASE c.relkind
    WHEN 'r' THEN 'table'
    WHEN 'v' THEN 'view'
    WHEN 'm' THEN 'materialized view'
  END AS type,
  pg_catalog.pg_get_userbyid(c.relowner) AS owner,
  c.reltuples::bigint AS estimated_rows,
  obj_description(c.oid, 'pg_class') AS comment
FROM pg_catalog.pg_class c
JOIN pg_catalog.pg_namespace n ON n.oid = c.relnamespace
WHERE n.nspname = $1
  {relkind_filter}
ORDER BY c.relname
"""

_DESCRIBE_COLUMNS_SQL = """
SELECT
  a.attname AS column_name,
  pg_catalog.format_type(a.atttypid, a.atttypmod) AS data_type,
  CASE WHEN a.attnotnull THEN 'NO' ELSE 'YES' END AS nullable,
  pg_catalog.pg_get_expr(d.adbin, d.adrelid) AS default_value,
  col_description(c.oid, a.attnum) AS comment
FROM pg_catalog.pg_attribute a
JOIN pg_catalog.pg_class c ON c.oid = a.attrelid
JOIN pg_catalog.pg_namespace n ON n.oid = c.relnamespace
LEFT JOIN pg_catalog.pg_attrdef d ON d.adrelid = a.attrelid AND d.adnum = a.attnum
WHERE n.nspname = $1
  AND c.relname = $2
  AND a.attnum > 0
  AND NOT a.attisdropped
ORDER BY a.attnum
"""

_PRIMARY_KEY_SQL = """
SELECT a.attname
FROM pg_index i
JOIN pg_attribute a ON a.attrelid = i.indrelid AND a.attnum = ANY(i.indkey)
JOIN pg_class c ON c.oid = i.indrelid
JOIN pg_namespace n ON n.oid = c.relnamespace
WHERE i.indisprimary
  AND n.nspname = $1
  AND c.relname = $2
"""

_LIST_INDEXES_SQL = """
SELECT
  i.relname AS index_name,
  am.amname AS method,
  ix.indisunique AS is_unique,
  ix.indisprimary AS is_primary,
  pg_get_indexdef(ix.indexrelid) AS definition
FROM pg_index ix
JOIN pg_class t ON t.oid = ix.indrelid
JOIN pg_class i ON i.oid = ix.indexrelid
JOIN pg_namespace n ON n.oid = t.relnamespace
JOIN pg_am am ON am.oid = i.relam
WHERE n.nspname = $1
  AND t.relname = $2
ORDER BY i.relname
"""

_LIST_CONSTRAINTS_SQL = """
SELECT
  con.conname AS constraint_name,
  CASE con.contype
    WHEN 'p' THEN 'PRIMARY KEY'
    WHEN 'f' THEN 'FOREIGN KEY'
    WHEN 'u' THEN 'UNIQUE'
    WHEN 'c' THEN 'CHECK'
    WHEN 'x' THEN 'EXCLUSION'
  END AS constraint_type,
  pg_get_constraintdef(con.oid) AS definition
FROM pg_constraint con
JOIN pg_class c ON c.oid = con.conrelid
JOIN pg_namespace n ON n.oid = c.relnamespace
WHERE n.nspname = $1
  AND c.relname = $2
ORDER BY con.contype, con.conname
"""

_TABLE_STATS_SQL = """
SELECT
  pg_size_pretty(pg_total_relation_size(c.oid)) AS total_size,
  pg_size_pretty(pg_relation_size(c.oid)) AS table_size,
  pg_size_pretty(pg_indexes_size(c.oid)) AS index_size,
  c.reltuples::bigint AS estimated_rows,
  s.n_live_tup AS live_rows,
  s.n_dead_tup AS dead_rows,
  s.last_vacuum,
  s.last_autovacuum,
  s.last_analyze,
  s.last_autoanalyze
FROM pg_class c
JOIN pg_namespace n ON n.oid = c.relnamespace
LEFT JOIN pg_stat_user_tables s ON s.relid = c.oid
WHERE n.nspname = $1
  AND c.relname = $2
"""


def _or(value: Any, fallback: str = "") -> Any:
    return fallback if value is None or value == "" else value


def _table_parameters(description: str) -> dict[str, Any]:
    return {
        "type": "object",
        "properties": {
            "table": {"type": "string", "minLength": 1, "description": description},
            "schema": SCHEMA_PARAM,
        },
        "required": ["table"],
        "additionalProperties": False,
    }


class _InspectionTool(Tool):
    """Shared plumbing for read-only catalog queries."""

    annotations = ToolAnnotations(read_only=True, idempotent=True)

    def __init__(self, db: DatabaseAdapter, ctx: ToolContext) -> None:
        self._db = db
        self._ctx = ctx

    async def _records(self, sql: str, *params: Any) -> list[dict[str, Any]]:
        result = await self._db.execute(sql, list(params) if params else None)
        return result.records()


class ListSchemasTool(_InspectionTool):
    """List user schemas, excluding system schemas."""

    @property
    def name(self) -> str:
        return "kb_list_schemas"

    @property
    def title(self) -> str:
        return "List Schemas"

    @property
    def description(self) -> str:
        return (
            "List all schemas in the database, excluding internal system schemas.\n\n"
            "Returns schema names with their owners."
        )

    @property
    def parameters(self) -> dict[str, Any]:
        return {"type": "object", "properties": {}, "additionalProperties": False}

    async def execute(self) -> str:
        rows = await self._records(_LIST_SCHEMAS_SQL)
        if not rows:
            return "No user schemas found."
        lines = ["# Schemas", ""]
        for row in rows:
            lines.append(f"- **{row['schema_name']}** (owner: {row['schema_owner']})")
        return "\n".join(lines)


class ListTablesTool(_InspectionTool):
    """List tables and/or views in a schema."""

    @property
    def name(self) -> str:
        return "kb_list_tables"

    @property
    def title(self) -> str:
        return "List Tables"

    @property
    def description(self) -> str:
        return (
            "List all tables and/or views in a schema.\n\n"
            "Returns each object's type, owner, estimated row count and comment."
        )

    @property
    def parameters(self) -> dict[str, Any]:
        return {
            "type": "object",
            "properties": {
                "schema": SCHEMA_PARAM,
                "type": {
                    "type": "string",
                    "enum": ["table", "view", "all"],
                    "default": "all",
                    "description": "Filter by object type: 'table', 'view', or 'all'.",
                },
            },
            "additionalProperties": False,
        }

    async def execute(self, schema: str | None = None, type: str = "all") -> str:
        schema_name = self._ctx.resolve_schema(schema)
        sql = _LIST_TABLES_SQL.format(relkind_filter=_RELKIND_FILTERS[type])
        rows = await self._records(sql, schema_name)
        if not rows:
            what = "tables or views" if type == "all" else f"{type}s"
            return f"No {what} found in schema '{schema_name}'."

        lines = [f"# Tables in schema '{schema_name}'", ""]
        lines.append("| Name | Type | Owner | Est. Rows | Comment |")
        lines.append("|------|------|-------|-----------|---------|")
        for row in rows:
            lines.append(
                f"| {row['name']} | {row['type']} | {row['owner']} "
                f"| {row['estimated_rows']} | {_or(row['comment'])} |"
            )
        lines.extend(["", f"Total: {len(rows)} object(s)"])
        return "\n".join(lines)


class DescribeTableTool(_InspectionTool):
    """Columns, types, nullability, defaults, primary key and comments of a table."""

    @property
    def name(self) -> str:
        return "kb_describe_table"

    @property
    def title(self) -> str:
        return "Describe Table"

    @property
    def description(self) -> str:
        return (
            "Get the structure of a table or view: columns, data types, nullability, "
            "defaults, primary key membership and comments."
        )

    @property
    def parameters(self) -> dict[str, Any]:
        return _table_parameters("Table or view name to describe.")

    async def execute(self, table: str, schema: str | None = None) -> str:
        schema_name = self._ctx.resolve_schema(schema)
        columns = await self._records(_DESCRIBE_COLUMNS_SQL, schema_name, table)
        if not columns:
            return f"Table '{schema_name}.{table}' not found or has no columns."

        pk_rows = await self._records(_PRIMARY_KEY_SQL, schema_name, table)
        pk_columns = {r["attname"] for r in pk_rows}

        lines = [f"# Table: {schema_name}.{table}", ""]
        lines.append("| # | Column | Type | Nullable | Default | PK | Comment |")
        lines.append("|---|--------|------|----------|---------|----|---------|")
        for idx, row in enumerate(columns, start=1):
            pk = "PK" if row["column_name"] in pk_columns else ""
            lines.append(
                f"| {idx} | {row['column_name']} | {row['data_type']} | {row['nullable']} "
                f"| {_or(row['default_value'])} | {pk} | {_or(row['comment'])} |"
            )
        lines.extend(["", f"Total: {len(columns)} column(s)"])
        return "\n".join(lines)


class ListIndexesTool(_InspectionTool):
    """Indexes on a table with method, uniqueness and definition."""

    @property
    def name(self) -> str:
        return "kb_list_indexes"

    @property
    def title(self) -> str:
        return "List Indexes"

    @property
    def description(self) -> str:
        return (
            "List all indexes on a table with their method (btree/hash/gin/gist), "
            "uniqueness and definition."
        )

    @property
    def parameters(self) -> dict[str, Any]:
        return _table_parameters("Table name to list indexes for.")

    async def execute(self, table: str, schema: str | None = None) -> str:
        schema_name = self._ctx.resolve_schema(schema)
        rows = await self._records(_LIST_INDEXES_SQL, schema_name, table)
        if not rows:
            return f"No indexes found on '{schema_name}.{table}'."

        lines = [f"# Indexes on {schema_name}.{table}", ""]
        for row in rows:
            flags = []
            if row["is_primary"]:
                flags.append("PRIMARY KEY")
            elif row["is_unique"]:
                flags.append("UNIQUE")
            flag_str = f" [{', '.join(flags)}]" if flags else ""
            lines.append(f"## {row['index_name']}{flag_str}")
            lines.append(f"- Method: {row['method']}")
            lines.append(f"- Definition: `{row['definition']}`")
            lines.append("")
        lines.append(f"Total: {len(rows)} index(es)")
        return "\n".join(lines)


class ListConstraintsTool(_InspectionTool):
    """PK / FK / UNIQUE / CHECK / EXCLUSION constraints of a table."""

    @property
    def name(self) -> str:
        return "kb_list_constraints"

    @property
    def title(self) -> str:
        return "List Constraints"

    @property
    def description(self) -> str:
        return "List all constraints (PK, FK, UNIQUE, CHECK) on a table with their definitions."

    @property
    def parameters(self) -> dict[str, Any]:
        return _table_parameters("Table name to list constraints for.")

    async def execute(self, table: str, schema: str | None = None) -> str:
        schema_name = self._ctx.resolve_schema(schema)
        rows = await self._records(_LIST_CONSTRAINTS_SQL, schema_name, table)
        if not rows:
            return f"No constraints found on '{schema_name}.{table}'."

        lines = [f"# Constraints on {schema_name}.{table}", ""]
        lines.append("| Name | Type | Definition |")
        lines.append("|------|------|------------|")
        for row in rows:
            lines.append(
                f"| {row['constraint_name']} | {row['constraint_type']} | `{row['definition']}` |"
            )
        lines.extend(["", f"Total: {len(rows)} constraint(s)"])
        return "\n".join(lines)


class TableStatsTool(_InspectionTool):
    """Storage size, tuple counts and maintenance timestamps of a table."""

    @property
    def name(self) -> str:
        return "kb_table_stats"

    @property
    def title(self) -> str:
        return "Table Statistics"

    @property
    def description(self) -> str:
        return (
            "Get storage and usage statistics for a table: total/table/index size, "
            "row estimates, live and dead tuples, last vacuum and analyze times."
        )

    @property
    def parameters(self) -> dict[str, Any]:
        return _table_parameters("Table name to get statistics for.")

    async def execute(self, table: str, schema: str | None = None) -> str:
        schema_name = self._ctx.resolve_schema(schema)
        rows = await self._records(_TABLE_STATS_SQL, schema_name, table)
        if not rows:
            return f"Table '{schema_name}.{table}' not found."

        row = rows[0]
        lines = [
            f"# Statistics: {schema_name}.{table}",
            "",
            "| Metric | Value |",
            "|--------|-------|",
            f"| Total Size | {row['total_size']} |",
            f"| Table Size | {row['table_size']} |",
            f"| Index Size | {row['index_size']} |",
            f"| Estimated Rows | {row['estimated_rows']} |",
            f"| Live Rows | {_or(row['live_rows'], 'N/A')} |",
            f"| Dead Rows | {_or(row['dead_rows'], 'N/A')} |",
            f"| Last Vacuum | {_or(row['last_vacuum'], 'Never')} |",
            f"| Last Auto Vacuum | {_or(row['last_autovacuum'], 'Never')} |",
            f"| Last Analyze | {_or(row['last_analyze'], 'Never')} |",
            f"| Last Auto Analyze | {_or(row['last_autoanalyze'], 'Never')} |",
        ]
        return "\n".join(lines)

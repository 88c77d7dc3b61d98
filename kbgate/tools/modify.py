"""DML execution tool: INSERT / UPDATE / DELETE behind the confirmation gate."""

from __future__ import annotations

from typing import Any

from loguru import logger

from kbgate.db.base import DatabaseAdapter
from kbgate.formatting import format_rows, plural
from kbgate.safety.classify import classify_dml
from kbgate.safety.confirm import ConfirmationGate, GatedStatement, GateState
from kbgate.safety.policy import AccessPolicy, required_for_dml
from kbgate.safety.qualify import qualify_table_names
from kbgate.tools.base import (
    CONFIRMED_PARAM,
    SCHEMA_PARAM,
    SQL_PARAMS_SCHEMA,
    Tool,
    ToolAnnotations,
    ToolContext,
)


class ExecuteDMLTool(Tool):
    """Execute INSERT / UPDATE / DELETE.

    Pipeline: classify -> access check -> qualify -> confirm -> execute.
    """

    annotations = ToolAnnotations(read_only=False, destructive=True, idempotent=False)

    def __init__(
        self,
        db: DatabaseAdapter,
        policy: AccessPolicy,
        ctx: ToolContext,
        gate: ConfirmationGate | None = None,
    ) -> None:
        self._db = db
        self._policy = policy
        self._ctx = ctx
        self._gate = gate or ConfirmationGate()

    @property
    def name(self) -> str:
        return "kb_execute"

    @property
    def title(self) -> str:
        return "Execute DML"

    @property
    def description(self) -> str:
        return (
            "Execute a DML statement (INSERT, UPDATE, DELETE) against the database.\n\n"
            "The first call returns a preview of the statement; call again with "
            "`confirmed: true` to execute it. Returns the number of affected rows. "
            "INSERT/UPDATE need access mode 'readwrite', DELETE needs 'full'.\n\n"
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
                    "description": "DML statement (INSERT/UPDATE/DELETE) to execute.",
                },
                "params": SQL_PARAMS_SCHEMA,
                "confirmed": CONFIRMED_PARAM,
                "schema": SCHEMA_PARAM,
            },
            "required": ["sql"],
            "additionalProperties": False,
        }

    async def execute(
        self,
        sql: str,
        params: list[Any] | None = None,
        confirmed: bool = False,
        schema: str | None = None,
    ) -> str:
        dml_kind = classify_dml(sql)
        self._policy.check(required_for_dml(dml_kind), dml_kind.value)

        qualified = qualify_table_names(sql, self._ctx.resolve_schema(schema))
        statement = GatedStatement(sql=qualified, operation=dml_kind.value, params=params)
        if self._gate.state(confirmed) is GateState.AWAITING_CONFIRMATION:
            return self._gate.preview(statement)

        logger.info("Executing confirmed {}: {}", dml_kind.value, qualified[:200])
        result = await self._db.execute(qualified, params)
        text = (
            f"Statement executed successfully. "
            f"{plural(result.affected_rows, 'row')} affected."
        )
        if result.rows:
            text += "\n\nReturning:\n" + format_rows(
                result.columns, result.rows, self._ctx.character_limit
            )
        return text

"""DDL execution tool: CREATE / ALTER / DROP / TRUNCATE behind the confirmation gate."""

from __future__ import annotations

from typing import Any

from loguru import logger

from kbgate.db.base import DatabaseAdapter
from kbgate.safety.classify import is_dangerous_ddl
from kbgate.safety.confirm import ConfirmationGate, GatedStatement, GateState
from kbgate.safety.policy import AccessLevel, AccessPolicy
from kbgate.safety.qualify import qualify_table_names
from kbgate.tools.base import CONFIRMED_PARAM, SCHEMA_PARAM, Tool, ToolAnnotations, ToolContext


class ExecuteDDLTool(Tool):
    """Execute DDL statements. Always requires the admin access level.

    Dangerous statements (DROP, TRUNCATE, anything mentioning CASCADE) get an
    elevated preview and a warning on success; the access threshold is the same.
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
        return "kb_execute_ddl"

    @property
    def title(self) -> str:
        return "Execute DDL"

    @property
    def description(self) -> str:
        return (
            "Execute a DDL statement (CREATE, ALTER, DROP, TRUNCATE, etc.) against the database.\n\n"
            "WARNING: DDL operations modify database structure and can be destructive. "
            "DROP and TRUNCATE operations are irreversible. Requires access mode 'admin'.\n\n"
            "The first call returns a preview of the statement; call again with "
            "`confirmed: true` to execute it."
        )

    @property
    def parameters(self) -> dict[str, Any]:
        return {
            "type": "object",
            "properties": {
                "sql": {
                    "type": "string",
                    "minLength": 1,
                    "description": "DDL statement (CREATE/ALTER/DROP/TRUNCATE) to execute.",
                },
                "confirmed": CONFIRMED_PARAM,
                "schema": SCHEMA_PARAM,
            },
            "required": ["sql"],
            "additionalProperties": False,
        }

    async def execute(
        self,
        sql: str,
        confirmed: bool = False,
        schema: str | None = None,
    ) -> str:
        self._policy.check(AccessLevel.ADMIN, "DDL")

        qualified = qualify_table_names(sql, self._ctx.resolve_schema(schema))
        dangerous = is_dangerous_ddl(qualified)
        statement = GatedStatement(sql=qualified, operation="DDL", dangerous=dangerous)
        if self._gate.state(confirmed) is GateState.AWAITING_CONFIRMATION:
            return self._gate.preview(statement)

        logger.info("Executing confirmed DDL: {}", qualified[:200])
        await self._db.execute(qualified)
        if dangerous:
            return "WARNING: Destructive DDL executed successfully. This operation cannot be undone."
        return "DDL statement executed successfully."

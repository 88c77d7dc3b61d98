"""Two-phase confirm-before-execute gate for mutating statements.

The gate keeps nothing between calls. The first call (``confirmed`` false or
absent) gets a preview that embeds the rewritten statement and its
parameters; the caller resends the same arguments with ``confirmed: true``
to run it. Nothing ties the two calls together beyond the caller echoing
the statement back.
"""

from __future__ import annotations

import enum
import json
from dataclasses import dataclass
from typing import Any

from loguru import logger


class GateState(enum.Enum):
    AWAITING_CONFIRMATION = "awaiting_confirmation"
    PROCEED = "proceed"


@dataclass(frozen=True)
class GatedStatement:
    """A rewritten statement waiting at the gate."""

    sql: str
    operation: str
    params: list[Any] | None = None
    dangerous: bool = False


class ConfirmationGate:
    """Decides between previewing and executing a mutating statement.

    Callers must have passed the access check before consulting the gate.
    """

    @staticmethod
    def state(confirmed: bool | None) -> GateState:
        return GateState.PROCEED if confirmed is True else GateState.AWAITING_CONFIRMATION

    @staticmethod
    def preview(statement: GatedStatement) -> str:
        """Build the response for a call that has not been confirmed yet."""
        logger.info("Confirmation requested for {}: {}", statement.operation, statement.sql[:200])
        if statement.dangerous:
            header = (
                f"DANGER: Confirmation required for DANGEROUS {statement.operation} "
                "operation (DROP/TRUNCATE/CASCADE)."
            )
        else:
            header = f"WARNING: Confirmation required for {statement.operation} operation."

        lines = [header, "", "SQL statement to execute:", "```sql", statement.sql, "```"]
        if statement.params:
            lines.append(f"Parameters: {json.dumps(statement.params, ensure_ascii=False)}")
        lines.append("")
        if statement.dangerous:
            lines.append("WARNING: This operation is destructive and CANNOT be undone!")
        lines.append("Please call this tool again with `confirmed: true` to execute.")
        return "\n".join(lines)

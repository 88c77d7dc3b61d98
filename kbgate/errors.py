"""Error taxonomy for tool calls.

Every per-call failure is raised as a ``GatewayError`` subclass and turned
into an error result at the tool registry boundary.
"""

from __future__ import annotations

from typing import Any


class GatewayError(Exception):
    """Base class for errors reported back to the caller."""

    def render(self) -> str:
        return f"Error: {self}"


class ParameterValidationError(GatewayError):
    """Arguments do not match the tool's parameter schema."""

    def __init__(self, tool: str, errors: list[str]) -> None:
        self.tool = tool
        self.errors = errors
        super().__init__(f"Invalid parameters for tool '{tool}': " + "; ".join(errors))


class ClassificationRejection(GatewayError):
    """A statement was sent to a tool that does not accept its kind."""


class AccessDenied(GatewayError):
    """The active access level ranks below the level an operation requires."""

    def __init__(self, operation: str, required: Any, current: Any) -> None:
        self.operation = operation
        self.required = getattr(required, "label", required)
        self.current = getattr(current, "label", current)
        super().__init__(
            f"{operation} operations require access mode '{self.required}' or higher "
            f"(current: '{self.current}')."
        )

    def render(self) -> str:
        return (
            f"Access denied: {self} "
            "Please contact your administrator to change the access mode setting."
        )


class BackendError(GatewayError):
    """Failure reported by the database backend or the connection to it."""

    def __init__(
        self,
        message: str,
        *,
        detail: str | None = None,
        hint: str | None = None,
        code: str | None = None,
        position: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.detail = detail
        self.hint = hint
        self.code = code
        self.position = position

    @classmethod
    def from_exception(cls, exc: BaseException) -> BackendError:
        """Build from an asyncpg ``PostgresError`` or any other exception."""
        if isinstance(exc, BackendError):
            return exc
        message = getattr(exc, "message", None) or str(exc) or type(exc).__name__
        position = getattr(exc, "position", None)
        return cls(
            message,
            detail=getattr(exc, "detail", None),
            hint=getattr(exc, "hint", None),
            code=getattr(exc, "sqlstate", None),
            position=str(position) if position else None,
        )

    def render(self) -> str:
        parts = [f"Error: {self.message}"]
        if self.detail:
            parts.append(f"Detail: {self.detail}")
        if self.hint:
            parts.append(f"Hint: {self.hint}")
        if self.position:
            parts.append(f"Position: {self.position}")
        if self.code:
            parts.append(f"Code: {self.code}")
        return "\n".join(parts)

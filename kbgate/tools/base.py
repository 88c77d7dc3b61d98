"""Base class for gateway tools."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

SQL_PARAMS_SCHEMA: dict[str, Any] = {
    "type": "array",
    "items": {"type": ["string", "number", "boolean", "null"]},
    "description": "Optional parameterized query values ($1, $2, ...).",
}

SCHEMA_PARAM: dict[str, Any] = {
    "type": "string",
    "description": "Schema name (default: the configured default schema, or 'public').",
}

CONFIRMED_PARAM: dict[str, Any] = {
    "type": "boolean",
    "default": False,
    "description": (
        "Set to true to confirm execution. The first call without it returns "
        "a preview for confirmation."
    ),
}


@dataclass
class ToolResult:
    """Text response of a tool call."""

    text: str
    is_error: bool = False


@dataclass(frozen=True)
class ToolAnnotations:
    """Behaviour hints published with the tool definition."""

    read_only: bool = True
    destructive: bool = False
    idempotent: bool = True
    open_world: bool = False

    def to_dict(self) -> dict[str, bool]:
        return {
            "readOnlyHint": self.read_only,
            "destructiveHint": self.destructive,
            "idempotentHint": self.idempotent,
            "openWorldHint": self.open_world,
        }


@dataclass
class ToolContext:
    """Per-process settings shared by all tools."""

    default_schema: str = "public"
    default_row_limit: int = 100
    max_row_limit: int = 1000
    character_limit: int = 50000

    def resolve_schema(self, override: str | None) -> str:
        return override or self.default_schema or "public"


class Tool(ABC):
    """Abstract base class for gateway tools.

    Parameters are validated strictly before ``execute`` runs: unknown
    argument names are rejected.
    """

    _TYPE_MAP = {
        "string": str,
        "integer": int,
        "number": (int, float),
        "boolean": bool,
        "array": list,
        "object": dict,
        "null": type(None),
    }

    annotations = ToolAnnotations()

    @property
    @abstractmethod
    def name(self) -> str:
        """Tool name used in tool calls."""

    @property
    @abstractmethod
    def title(self) -> str:
        """Short human-readable title."""

    @property
    @abstractmethod
    def description(self) -> str:
        """Description of what the tool does."""

    @property
    @abstractmethod
    def parameters(self) -> dict[str, Any]:
        """JSON Schema for tool parameters."""

    @abstractmethod
    async def execute(self, **kwargs: Any) -> str:
        """Execute the tool with validated parameters.

        Returns:
            Text result. Failures are raised as ``GatewayError``.
        """

    def validate_params(self, params: dict[str, Any]) -> list[str]:
        """Validate tool parameters against JSON schema. Returns error list."""
        schema = self.parameters or {}
        if schema.get("type", "object") != "object":
            raise ValueError(f"Schema must be object type, got {schema.get('type')!r}")
        return self._validate(params, {**schema, "type": "object"}, "")

    def _matches_type(self, val: Any, t: str) -> bool:
        if t not in self._TYPE_MAP:
            return True
        if t in ("integer", "number") and isinstance(val, bool):
            return False
        return isinstance(val, self._TYPE_MAP[t])

    def _validate(self, val: Any, schema: dict[str, Any], path: str) -> list[str]:
        t, label = schema.get("type"), path or "parameter"
        types = t if isinstance(t, list) else [t] if t else []
        if types and not any(self._matches_type(val, x) for x in types):
            return [f"{label} should be {' or '.join(types)}"]
        if isinstance(t, list):
            t = next(x for x in types if self._matches_type(val, x))

        errors: list[str] = []
        if "enum" in schema and val not in schema["enum"]:
            errors.append(f"{label} must be one of {schema['enum']}")
        if t in ("integer", "number"):
            if "minimum" in schema and val < schema["minimum"]:
                errors.append(f"{label} must be >= {schema['minimum']}")
            if "maximum" in schema and val > schema["maximum"]:
                errors.append(f"{label} must be <= {schema['maximum']}")
        if t == "string" and "minLength" in schema and len(val) < schema["minLength"]:
            errors.append(f"{label} must not be empty")
        if t == "object":
            props = schema.get("properties", {})
            for k in schema.get("required", []):
                if k not in val:
                    errors.append(f"missing required {path + '.' + k if path else k}")
            for k, v in val.items():
                key = path + "." + k if path else k
                if k in props:
                    errors.extend(self._validate(v, props[k], key))
                elif schema.get("additionalProperties", True) is False:
                    errors.append(f"unrecognized parameter {key}")
        if t == "array" and "items" in schema:
            for i, item in enumerate(val):
                errors.extend(self._validate(item, schema["items"], f"{path}[{i}]" if path else f"[{i}]"))
        return errors

    def to_schema(self) -> dict[str, Any]:
        """Tool definition as published to clients."""
        return {
            "name": self.name,
            "title": self.title,
            "description": self.description,
            "inputSchema": self.parameters,
            "annotations": self.annotations.to_dict(),
        }

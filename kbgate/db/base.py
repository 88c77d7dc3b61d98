"""Database adapter abstract base class and result type."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Sequence


@dataclass
class QueryResult:
    """Result of a database statement."""

    columns: list[str] = field(default_factory=list)
    rows: list[tuple] = field(default_factory=list)
    affected_rows: int = 0
    execution_time_ms: float = 0

    @property
    def row_count(self) -> int:
        return len(self.rows)

    def records(self) -> list[dict[str, Any]]:
        """Rows as column-name -> value mappings."""
        return [dict(zip(self.columns, row)) for row in self.rows]

    def scalar(self) -> Any:
        """First column of the first row, or None."""
        if not self.rows or not self.rows[0]:
            return None
        return self.rows[0][0]


class DatabaseAdapter(ABC):
    """Executor interface the tools run statements through.

    Implementations raise ``kbgate.errors.BackendError`` for every failure
    coming from the backend or the connection to it.
    """

    @abstractmethod
    async def connect(self, **kwargs: Any) -> None:
        """Establish connection to the database."""

    @abstractmethod
    async def close(self) -> None:
        """Close the database connection."""

    @abstractmethod
    async def execute(self, sql: str, params: Sequence[Any] | None = None) -> QueryResult:
        """Execute a SQL statement with positional ($1, $2, ...) parameters."""

    @abstractmethod
    async def server_version(self) -> str:
        """Return the backend's version string."""

    @property
    @abstractmethod
    def db_type(self) -> str:
        """Return the database type identifier (e.g. 'kingbase')."""

    @property
    @abstractmethod
    def is_connected(self) -> bool:
        """Whether the adapter currently has an active connection."""

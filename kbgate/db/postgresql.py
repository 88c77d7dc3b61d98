"""PostgreSQL / KingBase database adapter."""

from __future__ import annotations

import asyncio
import time
from typing import Any, Sequence

import asyncpg
from loguru import logger

from kbgate.db.base import DatabaseAdapter, QueryResult
from kbgate.errors import BackendError
from kbgate.safety.classify import StatementKind, classify


def parse_status(status: str | None) -> int:
    """Affected-row count from a command tag such as ``UPDATE 3`` or ``INSERT 0 1``."""
    try:
        return int(status.split()[-1])
    except (ValueError, IndexError, AttributeError):
        return 0


_SCRIPT_KINDS = frozenset({StatementKind.DDL, StatementKind.DANGEROUS_DDL})


def _status_result(status: str, start: float) -> QueryResult:
    elapsed = (time.monotonic() - start) * 1000
    return QueryResult(affected_rows=parse_status(status), execution_time_ms=round(elapsed, 2))


class PostgreSQLAdapter(DatabaseAdapter):
    """Async adapter over a bounded asyncpg pool.

    Every ``execute`` is a single acquire-use-release cycle.
    """

    def __init__(self, db_type: str = "postgresql") -> None:
        self._pool: Any = None
        self._db_type = db_type

    @property
    def db_type(self) -> str:
        return self._db_type

    @property
    def is_connected(self) -> bool:
        return self._pool is not None and not self._pool.is_closing()

    async def connect(self, **kwargs: Any) -> None:
        try:
            self._pool = await asyncpg.create_pool(
                host=kwargs.get("host", "localhost"),
                port=kwargs.get("port", 54321),
                user=kwargs.get("user", "system"),
                password=kwargs.get("password", ""),
                database=kwargs.get("database", "kingbase"),
                min_size=kwargs.get("pool_min_size", 1),
                max_size=kwargs.get("pool_max_size", 5),
                timeout=kwargs.get("connect_timeout", 10.0),
            )
        except (asyncpg.PostgresError, asyncpg.InterfaceError, OSError, asyncio.TimeoutError) as e:
            raise BackendError.from_exception(e) from e

    async def close(self) -> None:
        if self._pool:
            await self._pool.close()
            self._pool = None

    async def execute(self, sql: str, params: Sequence[Any] | None = None) -> QueryResult:
        if not self._pool:
            raise BackendError("Not connected")
        args = tuple(params or ())
        start = time.monotonic()
        try:
            async with self._pool.acquire() as conn:
                if not args and classify(sql) in _SCRIPT_KINDS:
                    status = await conn.execute(sql)
                    return _status_result(status, start)
                try:
                    stmt = await conn.prepare(sql)
                except asyncpg.PostgresSyntaxError:
                    if args:
                        raise
                    # Multi-statement text only runs over the simple query protocol.
                    status = await conn.execute(sql)
                    return _status_result(status, start)
                attributes = stmt.get_attributes()
                if attributes:
                    columns = [attr.name for attr in attributes]
                    records = await stmt.fetch(*args)
                    rows = [tuple(r) for r in records]
                    status = stmt.get_statusmsg()
                    affected_rows = parse_status(status) if status else len(rows)
                else:
                    columns = []
                    rows = []
                    affected_rows = parse_status(await conn.execute(sql, *args))
        except (asyncpg.PostgresError, asyncpg.InterfaceError, OSError) as e:
            logger.warning("Backend error: {}", e)
            raise BackendError.from_exception(e) from e

        elapsed = (time.monotonic() - start) * 1000
        return QueryResult(
            columns=columns,
            rows=rows,
            affected_rows=affected_rows,
            execution_time_ms=round(elapsed, 2),
        )

    async def server_version(self) -> str:
        result = await self.execute("SELECT version()")
        return str(result.scalar() or "")

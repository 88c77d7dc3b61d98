"""Shared fixtures: a recording in-memory adapter and configured registries."""

from __future__ import annotations

from typing import Any, Callable, Sequence

import pytest

from kbgate.config.schema import AccessConfig, Config
from kbgate.db.base import DatabaseAdapter, QueryResult
from kbgate.safety.policy import AccessLevel
from kbgate.tools import build_registry

Responder = Callable[[str, Sequence[Any] | None], QueryResult]


class FakeAdapter(DatabaseAdapter):
    """Records every statement; answers from a responder, a queue, or a default."""

    def __init__(self, responder: Responder | None = None) -> None:
        self.calls: list[tuple[str, list[Any] | None]] = []
        self.queue: list[QueryResult | Exception] = []
        self.responder = responder
        self._connected = True

    @property
    def db_type(self) -> str:
        return "kingbase"

    @property
    def is_connected(self) -> bool:
        return self._connected

    async def connect(self, **kwargs: Any) -> None:
        self._connected = True

    async def close(self) -> None:
        self._connected = False

    async def execute(self, sql: str, params: Sequence[Any] | None = None) -> QueryResult:
        self.calls.append((sql, list(params) if params is not None else None))
        if self.queue:
            item = self.queue.pop(0)
            if isinstance(item, Exception):
                raise item
            return item
        if self.responder is not None:
            return self.responder(sql, params)
        return QueryResult()

    async def server_version(self) -> str:
        return "KingbaseES V008R006 on x86_64-pc-linux-gnu"

    @property
    def statements(self) -> list[str]:
        return [sql for sql, _ in self.calls]


def make_config(mode: AccessLevel | str = AccessLevel.READONLY, schema: str = "public") -> Config:
    return Config(access=AccessConfig(mode=mode, default_schema=schema))


@pytest.fixture
def fake_db() -> FakeAdapter:
    return FakeAdapter()


@pytest.fixture
def registry_for(fake_db):
    """Factory: a full tool registry at the given access level, backed by ``fake_db``."""

    def _build(mode: AccessLevel | str = AccessLevel.READONLY, schema: str = "public"):
        return build_registry(fake_db, make_config(mode, schema))

    return _build

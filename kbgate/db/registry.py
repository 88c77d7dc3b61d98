"""Backend type -> adapter factory lookup."""

from __future__ import annotations

from typing import Any, Callable

from kbgate.db.base import DatabaseAdapter

AdapterFactory = Callable[[], DatabaseAdapter]


class AdapterRegistry:
    """Class-level table of adapter factories keyed by ``database.type``."""

    _factories: dict[str, AdapterFactory] = {}

    @classmethod
    def register(cls, db_type: str, factory: AdapterFactory) -> None:
        cls._factories[db_type] = factory

    @classmethod
    def available_types(cls) -> list[str]:
        return sorted(cls._factories)

    @classmethod
    def create(cls, db_type: str) -> DatabaseAdapter:
        """Build an unconnected adapter. Unknown types raise ``ValueError``."""
        try:
            factory = cls._factories[db_type]
        except KeyError:
            known = ", ".join(cls.available_types()) or "(none)"
            raise ValueError(f"Unsupported database type: {db_type!r}. Available: {known}") from None
        return factory()

    @classmethod
    async def create_and_connect(cls, **settings: Any) -> DatabaseAdapter:
        """Build the adapter named by ``settings['type']`` and open its pool."""
        db_type = settings.pop("type", None)
        if not db_type:
            raise ValueError("Missing 'type' in connection config")
        adapter = cls.create(db_type)
        await adapter.connect(**settings)
        return adapter


def _register_defaults() -> None:
    # KingBase speaks the PostgreSQL wire protocol.
    from kbgate.db.postgresql import PostgreSQLAdapter

    AdapterRegistry.register("postgresql", lambda: PostgreSQLAdapter("postgresql"))
    AdapterRegistry.register("kingbase", lambda: PostgreSQLAdapter("kingbase"))


_register_defaults()

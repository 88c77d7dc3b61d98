"""Database adapters."""

from kbgate.db.base import DatabaseAdapter, QueryResult
from kbgate.db.registry import AdapterRegistry

__all__ = ["AdapterRegistry", "DatabaseAdapter", "QueryResult"]

"""Lexical statement classification.

Leading-keyword and substring checks on the trimmed, upper-cased text. No
parsing: every input, malformed or empty, gets a classification.
"""

from __future__ import annotations

import enum

_READ_ONLY_PREFIXES = ("SELECT", "WITH", "EXPLAIN", "SHOW", "\\D")
_DANGEROUS_PREFIXES = ("DROP", "TRUNCATE")
_DDL_PREFIXES = (
    "CREATE", "ALTER", "DROP", "TRUNCATE", "COMMENT",
    "RENAME", "GRANT", "REVOKE",
)


class DMLKind(enum.Enum):
    INSERT = "INSERT"
    UPDATE = "UPDATE"
    DELETE = "DELETE"
    OTHER = "OTHER"


class StatementKind(enum.Enum):
    READ_ONLY = "read_only"
    INSERT = "insert"
    UPDATE = "update"
    DELETE = "delete"
    OTHER_DML = "other_dml"
    DDL = "ddl"
    DANGEROUS_DDL = "dangerous_ddl"


def _normalize(sql: str) -> str:
    return sql.strip().upper()


def is_read_only(sql: str) -> bool:
    """Does the statement look like a read-only query?"""
    return _normalize(sql).startswith(_READ_ONLY_PREFIXES)


def classify_dml(sql: str) -> DMLKind:
    """Classify a DML statement by its leading keyword."""
    upper = _normalize(sql)
    if upper.startswith("INSERT"):
        return DMLKind.INSERT
    if upper.startswith("UPDATE"):
        return DMLKind.UPDATE
    if upper.startswith("DELETE"):
        return DMLKind.DELETE
    return DMLKind.OTHER


def is_dangerous_ddl(sql: str) -> bool:
    """DROP / TRUNCATE, or CASCADE anywhere in the text (string literals included)."""
    upper = _normalize(sql)
    return upper.startswith(_DANGEROUS_PREFIXES) or "CASCADE" in upper


def classify(sql: str) -> StatementKind:
    """Combine the three checks into a single statement kind."""
    if is_read_only(sql):
        return StatementKind.READ_ONLY
    dml = classify_dml(sql)
    if dml is not DMLKind.OTHER:
        return StatementKind[dml.name]
    if is_dangerous_ddl(sql):
        return StatementKind.DANGEROUS_DDL
    if _normalize(sql).startswith(_DDL_PREFIXES):
        return StatementKind.DDL
    return StatementKind.OTHER_DML

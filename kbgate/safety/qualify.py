"""Schema qualification of bare table references.

A keyword scan, not a parser: identifiers that happen to look like table
names after FROM / JOIN / INTO / UPDATE get the schema prefix. References
that already carry a dot are left alone, which keeps the rewrite idempotent.
"""

from __future__ import annotations

import re

_TABLE_KEYWORDS = ("FROM", "JOIN", "INTO", "UPDATE")
_NOT_TABLES = frozenset({"SELECT", "WITH", "VALUES", "TABLE", "NULL"})

_PATTERNS = [
    re.compile(
        rf"(?<![.\w]){keyword}\s+"
        r'(?![\w"]+\.)'  # already schema-qualified
        r"(\w+)"
        r"(?=[\s,;)]|$)",
        re.IGNORECASE,
    )
    for keyword in _TABLE_KEYWORDS
]


def qualify_table_names(sql: str, schema: str) -> str:
    """Prefix unqualified table names with ``schema``."""

    def _rewrite(match: re.Match[str]) -> str:
        table = match.group(1)
        if table.upper() in _NOT_TABLES:
            return match.group(0)
        lead = match.group(0)[: match.start(1) - match.start(0)]
        return f"{lead}{schema}.{table}"

    result = sql
    for pattern in _PATTERNS:
        result = pattern.sub(_rewrite, result)
    return result

"""Plain-text rendering of row sets."""

from __future__ import annotations

from typing import Any, Sequence

CHARACTER_LIMIT = 50000
TRUNCATION_NOTICE = (
    "\n\n... [Output truncated. Use LIMIT or add WHERE conditions to reduce results.]"
)


def _cell(value: Any) -> str:
    return "NULL" if value is None else str(value)


def format_rows(
    columns: Sequence[str],
    rows: Sequence[Sequence[Any]],
    character_limit: int = CHARACTER_LIMIT,
) -> str:
    """Render rows as a padded ``col | col`` table, capped at ``character_limit``."""
    if not rows:
        return "No rows returned."

    cells = [[_cell(v) for v in row] for row in rows]
    widths = [
        max([len(col)] + [len(r[i]) for r in cells])
        for i, col in enumerate(columns)
    ]

    lines = [" | ".join(col.ljust(widths[i]) for i, col in enumerate(columns))]
    lines.append("-+-".join("-" * w for w in widths))
    for r in cells:
        lines.append(" | ".join(v.ljust(widths[i]) for i, v in enumerate(r)))

    text = "\n".join(lines)
    if len(text) > character_limit:
        text = text[:character_limit] + TRUNCATION_NOTICE
    return text


def plural(count: int, singular: str, plural_form: str | None = None) -> str:
    return f"{count} {singular if count == 1 else (plural_form or singular + 's')}"

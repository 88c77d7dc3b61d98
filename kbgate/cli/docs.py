"""Markdown reference for the registered tools."""

from __future__ import annotations

import json
from datetime import datetime, timezone

from kbgate.tools.base import Tool
from kbgate.tools.registry import ToolRegistry


def _tool_section(tool: Tool) -> list[str]:
    hints = tool.annotations
    lines = [
        f"### `{tool.name}` - {tool.title}",
        "",
        tool.description,
        "",
        f"- Read-only: {'yes' if hints.read_only else 'no'}",
        f"- Destructive: {'yes' if hints.destructive else 'no'}",
        f"- Idempotent: {'yes' if hints.idempotent else 'no'}",
        "",
        "Input schema:",
        "",
        "```json",
        json.dumps(tool.parameters, indent=2),
        "```",
        "",
    ]
    return lines


def render_tools_markdown(registry: ToolRegistry) -> str:
    """TOOLS.md content, tools grouped into read-only and write sections."""
    tools = registry.tools()
    read_only = [t for t in tools if t.annotations.read_only]
    write = [t for t in tools if not t.annotations.read_only]

    lines = [
        "# kbgate Tools",
        "",
        f"Generated {datetime.now(timezone.utc).strftime('%Y-%m-%d')} - {len(tools)} tools.",
        "",
        "| Tool | Title | Category |",
        "|------|-------|----------|",
    ]
    for tool in tools:
        category = "Read-Only" if tool.annotations.read_only else "Write"
        lines.append(f"| `{tool.name}` | {tool.title} | {category} |")
    lines.append("")

    for heading, group in (("Read-Only Tools", read_only), ("Write Tools", write)):
        if not group:
            continue
        lines.extend([f"## {heading}", ""])
        for tool in group:
            lines.extend(_tool_section(tool))
    return "\n".join(lines)

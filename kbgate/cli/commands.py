"""CLI commands for kbgate."""

from __future__ import annotations

import asyncio
import json
import sys
from pathlib import Path

import typer
from loguru import logger
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from kbgate import __version__
from kbgate.cli.docs import render_tools_markdown
from kbgate.config.loader import get_config_path, load_config, read_config_file, save_config
from kbgate.config.schema import Config
from kbgate.db.registry import AdapterRegistry
from kbgate.errors import BackendError
from kbgate.server.app import run_stdio
from kbgate.server.web import run_http
from kbgate.tools import build_registry

app = typer.Typer(
    name="kbgate",
    help="kbgate - permission-gated SQL gateway for KingBase / PostgreSQL",
    no_args_is_help=True,
)

console = Console()


def version_callback(value: bool) -> None:
    """Print version and exit when --version is provided."""
    if value:
        console.print(f"kbgate v{__version__}")
        raise typer.Exit()


def _configure_logging(verbose: bool) -> None:
    # stdout belongs to the stdio transport
    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if verbose else "INFO")


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    """kbgate CLI entry point."""


@app.command()
def onboard(
    config_path: Path | None = typer.Option(
        None,
        "--config",
        "-c",
        help="Custom config path (default: ~/.kbgate/config.json).",
    ),
    overwrite: bool = typer.Option(
        False,
        "--overwrite",
        help="Overwrite existing config with defaults.",
    ),
) -> None:
    """Initialize the kbgate configuration file."""
    path = config_path or get_config_path()

    if path.exists() and not overwrite:
        try:
            config = read_config_file(path)
        except (json.JSONDecodeError, ValidationError) as e:
            console.print(f"[red]Cannot refresh {path}:[/red] {e}")
            console.print("Fix the file or rerun with --overwrite.")
            raise typer.Exit(code=1)
        save_config(config, path)
        console.print(f"[green]Config refreshed:[/green] {path}")
        console.print("Existing values are preserved; missing fields are added.")
        return

    existed = path.exists()
    save_config(Config(), path)
    if existed:
        console.print(f"[green]Config reset:[/green] {path}")
    else:
        console.print(f"[green]Config created:[/green] {path}")

    console.print("\nNext steps:")
    console.print("- Configure your database in the `database` section")
    console.print("- Choose an access mode: readonly, readwrite, full or admin")
    console.print("- Start the server: `kbgate serve`")


async def _serve(config: Config) -> int:
    try:
        adapter = await AdapterRegistry.create_and_connect(**config.database.model_dump())
    except BackendError as e:
        logger.error("Failed to connect to database: {}", e.message)
        logger.error("Check the host, port, user, password and database settings.")
        return 1

    try:
        try:
            version = await adapter.server_version()
        except BackendError as e:
            logger.error("Failed to connect to database: {}", e.message)
            return 1
        logger.info("Connected to database: {}", version[:80])
        logger.info("Access mode: {}", config.access.mode.label)

        registry = build_registry(adapter, config)
        if config.server.transport == "http":
            await run_http(registry, config.server.host, config.server.port)
        else:
            await run_stdio(registry)
    finally:
        await adapter.close()
        logger.info("Database pool closed")
    return 0


@app.command()
def serve(
    config_path: Path | None = typer.Option(
        None, "--config", "-c", help="Config file path.",
    ),
    transport: str | None = typer.Option(
        None, "--transport", "-t", help="Transport: stdio or http (overrides config).",
    ),
    verbose: bool = typer.Option(
        False, "--verbose", help="Enable debug logging.",
    ),
) -> None:
    """Start the MCP server."""
    _configure_logging(verbose)
    config = load_config(config_path)
    if transport:
        if transport.lower() not in ("stdio", "http"):
            console.print(f"[red]Unknown transport:[/red] {transport}")
            raise typer.Exit(code=2)
        config.server.transport = transport.lower()

    code = asyncio.run(_serve(config))
    if code:
        raise typer.Exit(code=code)


def _offline_registry(config: Config):
    # Tool metadata only; the adapter is never connected.
    return build_registry(AdapterRegistry.create(config.database.type), config)


@app.command()
def tools(
    config_path: Path | None = typer.Option(
        None, "--config", "-c", help="Config file path.",
    ),
) -> None:
    """List the tools this server exposes."""
    config = load_config(config_path)
    registry = _offline_registry(config)

    table = Table(title=f"kbgate tools (access mode: {config.access.mode.label})")
    table.add_column("Tool", style="cyan")
    table.add_column("Title")
    table.add_column("Read-only", justify="center")
    table.add_column("Destructive", justify="center")
    for tool in registry.tools():
        hints = tool.annotations
        table.add_row(
            tool.name,
            tool.title,
            "yes" if hints.read_only else "no",
            "yes" if hints.destructive else "no",
        )
    console.print(table)


@app.command()
def docs(
    output: Path = typer.Option(
        Path("TOOLS.md"), "--output", "-o", help="Where to write the markdown.",
    ),
    config_path: Path | None = typer.Option(
        None, "--config", "-c", help="Config file path.",
    ),
) -> None:
    """Generate TOOLS.md from the registered tools."""
    registry = _offline_registry(load_config(config_path))
    output.write_text(render_tools_markdown(registry), encoding="utf-8")
    console.print(f"[green]Wrote[/green] {output} ({len(registry)} tools)")

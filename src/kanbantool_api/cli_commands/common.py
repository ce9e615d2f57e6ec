"""Helpers shared by CLI commands."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from pathlib import Path
from typing import Any, TypeVar

import typer
from rich.table import Table

from ..client import KanbanToolClient
from ..core import console
from ..core.config import load_config
from ..core.errors import ApiError, ConfigError

T = TypeVar("T")


def parse_params(values: list[str] | None) -> dict[str, str]:
    """Parse repeated ``key=value`` options into a dict."""
    params: dict[str, str] = {}
    for item in values or []:
        if "=" not in item:
            raise typer.BadParameter(f"Expected key=value, got '{item}'")
        key, value = item.split("=", 1)
        params[key.strip()] = value
    return params


def run_with_client(
    operation: Callable[[KanbanToolClient], Awaitable[T]],
    working_dir: Path | None = None,
) -> T:
    """Load config, run one API operation and close the client.

    Exits with code 1 on configuration or API errors.
    """
    try:
        config = load_config(working_dir)
        client = KanbanToolClient.from_config(config)
    except ConfigError as e:
        console.error(f"Configuration error: {e}")
        raise typer.Exit(1) from None

    async def _run() -> T:
        async with client:
            return await operation(client)

    try:
        return asyncio.run(_run())
    except ApiError as e:
        console.error(f"API error {e.code}: {e.record.message}")
        raise typer.Exit(1) from None


def print_records(
    records: Any,
    title: str,
    columns: list[tuple[str, str]],
    as_json: bool = False,
) -> None:
    """Print a list of API records as a table, or as JSON.

    Args:
        records: Unwrapped API payload.
        title: Table title.
        columns: (field, header) pairs.
        as_json: Print raw JSON instead of a table.
    """
    if as_json:
        console.print_json(records)
        return

    if isinstance(records, dict):
        records = [records]
    if not records:
        console.show(f"[dim]No {title.lower()} found.[/dim]")
        return

    table = Table(title=title)
    for _, header in columns:
        table.add_column(header)
    for record in records:
        table.add_row(*(str(record.get(field, "")) if isinstance(record, dict) else "" for field, _ in columns))
    console.show(table)

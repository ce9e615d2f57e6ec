"""Console output helpers shared by CLI commands."""

from __future__ import annotations

import json
from typing import Any

from rich.console import Console

console = Console()
err_console = Console(stderr=True)


def success(message: str) -> None:
    console.print(f"[green]✓ {message}[/green]")


def warning(message: str) -> None:
    err_console.print(f"[yellow]{message}[/yellow]")


def error(message: str) -> None:
    err_console.print(f"[red]{message}[/red]")


def show(renderable: Any, **kwargs: Any) -> None:
    console.print(renderable, **kwargs)


def print_json(payload: Any) -> None:
    """Print a payload as indented JSON without Rich markup."""
    console.print_json(json.dumps(payload, default=str))

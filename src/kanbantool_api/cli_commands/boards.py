"""Board commands - boards, board, tasks, changelog."""

from __future__ import annotations

import typer

from ..core import console
from .common import print_records, run_with_client

BOARD_COLUMNS = [("id", "ID"), ("name", "Name"), ("description", "Description")]
TASK_COLUMNS = [
    ("id", "ID"),
    ("name", "Name"),
    ("workflow_stage_id", "Stage"),
    ("swimlane_id", "Swimlane"),
    ("assigned_user_id", "Assignee"),
]


def boards(
    as_json: bool = typer.Option(False, "--json", help="Print raw JSON"),
) -> None:
    """List boards visible to the API user."""
    result = run_with_client(lambda api: api.get_boards())
    print_records(result, "Boards", BOARD_COLUMNS, as_json)


def board(
    board_id: int = typer.Argument(..., help="Board identifier"),
) -> None:
    """Show board settings: users, permissions, stages and swimlanes."""
    result = run_with_client(lambda api: api.get_board_settings(board_id))
    console.print_json(result)


def tasks(
    board_id: int = typer.Argument(..., help="Board identifier"),
    as_json: bool = typer.Option(False, "--json", help="Print raw JSON"),
) -> None:
    """List tasks on a board."""
    result = run_with_client(lambda api: api.get_tasks(board_id))
    print_records(result, "Tasks", TASK_COLUMNS, as_json)


def changelog(
    board_id: int = typer.Argument(..., help="Board identifier"),
    from_date: str | None = typer.Option(None, "--from", help="Only entries from this date"),
    to_date: str | None = typer.Option(None, "--to", help="Only entries up to this date"),
    limit: int | None = typer.Option(None, "--limit", "-n", help="Maximum number of entries"),
) -> None:
    """Show the board changelog (at most 1000 entries)."""
    result = run_with_client(lambda api: api.get_changelog(board_id, from_date, to_date, limit))
    console.print_json(result)


def register_board_commands(app: typer.Typer) -> None:
    app.command()(boards)
    app.command()(board)
    app.command()(tasks)
    app.command()(changelog)

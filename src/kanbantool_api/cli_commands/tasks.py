"""Task commands - tasks, comments and subtasks of a board."""

from __future__ import annotations

import typer

from ..client import MoveDirection
from ..core import console
from .common import parse_params, print_records, run_with_client

task_app = typer.Typer(help="Create, move, archive and delete tasks.")
comment_app = typer.Typer(help="List, add and delete task comments.")
subtask_app = typer.Typer(help="List, add, delete and reorder subtasks.")

COMMENT_COLUMNS = [("id", "ID"), ("user_id", "User"), ("content", "Content"), ("created_at", "Created")]
SUBTASK_COLUMNS = [("id", "ID"), ("name", "Name"), ("completed", "Done")]

FIELD_HELP = "Extra field as key=value, e.g. task[color]=red (repeatable)"


# =============================================================================
# Tasks
# =============================================================================


@task_app.command("create")
def task_create(
    board_id: int = typer.Argument(..., help="Board identifier"),
    name: str = typer.Option(..., "--name", "-n", help="Task name"),
    description: str | None = typer.Option(None, "--description", "-d", help="Task description"),
    fields: list[str] | None = typer.Option(None, "--field", "-F", help=FIELD_HELP),
) -> None:
    """Create a task on a board."""
    params = {"task[name]": name, **parse_params(fields)}
    if description is not None:
        params["task[description]"] = description

    task = run_with_client(lambda api: api.create_task(board_id, params))
    console.success(f"Created task {task.get('id')}: {task.get('name', name)}")


@task_app.command("update")
def task_update(
    board_id: int = typer.Argument(..., help="Board identifier"),
    task_id: int = typer.Argument(..., help="Task identifier"),
    fields: list[str] = typer.Option(..., "--field", "-F", help=FIELD_HELP),
) -> None:
    """Update task attributes."""
    params = parse_params(fields)
    run_with_client(lambda api: api.update_task(board_id, task_id, params))
    console.success(f"Updated task {task_id}")


@task_app.command("move")
def task_move(
    board_id: int = typer.Argument(..., help="Board identifier"),
    task_id: int = typer.Argument(..., help="Task identifier"),
    direction: MoveDirection = typer.Argument(..., help="Direction to move the task"),
    override: str | None = typer.Option(None, "--override", help="Override WIP limits with this comment"),
) -> None:
    """Move a task one step up, down, or to a neighbouring stage or swimlane."""
    run_with_client(lambda api: api.move_task(board_id, task_id, direction, override))
    console.success(f"Moved task {task_id} ({direction.value})")


@task_app.command("move-to")
def task_move_to(
    board_id: int = typer.Argument(..., help="Board identifier"),
    task_id: int = typer.Argument(..., help="Task identifier"),
    stage: int = typer.Option(..., "--stage", help="Target workflow stage identifier"),
    swimlane: int = typer.Option(..., "--swimlane", help="Target swimlane identifier"),
    position: int | None = typer.Option(None, "--position", help="Position within the cell"),
    override: str | None = typer.Option(None, "--override", help="Override WIP limits with this comment"),
) -> None:
    """Move a task to a workflow stage and swimlane."""
    run_with_client(
        lambda api: api.move_task_to(board_id, task_id, stage, swimlane, position, override)
    )
    console.success(f"Moved task {task_id} to stage {stage}, swimlane {swimlane}")


@task_app.command("archive")
def task_archive(
    board_id: int = typer.Argument(..., help="Board identifier"),
    task_id: int = typer.Argument(..., help="Task identifier"),
) -> None:
    """Archive a task."""
    run_with_client(lambda api: api.archive_task(board_id, task_id))
    console.success(f"Archived task {task_id}")


@task_app.command("unarchive")
def task_unarchive(
    board_id: int = typer.Argument(..., help="Board identifier"),
    task_id: int = typer.Argument(..., help="Task identifier"),
) -> None:
    """Put an archived task back on the board."""
    run_with_client(lambda api: api.unarchive_task(board_id, task_id))
    console.success(f"Unarchived task {task_id}")


@task_app.command("delete")
def task_delete(
    board_id: int = typer.Argument(..., help="Board identifier"),
    task_id: int = typer.Argument(..., help="Task identifier"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation"),
) -> None:
    """Permanently delete a task."""
    if not yes:
        typer.confirm(f"Permanently delete task {task_id}?", abort=True)
    run_with_client(lambda api: api.delete_task(board_id, task_id))
    console.success(f"Deleted task {task_id}")


# =============================================================================
# Comments
# =============================================================================


@comment_app.command("list")
def comment_list(
    board_id: int = typer.Argument(..., help="Board identifier"),
    task_id: int = typer.Argument(..., help="Task identifier"),
    as_json: bool = typer.Option(False, "--json", help="Print raw JSON"),
) -> None:
    """List comments of a task."""
    result = run_with_client(lambda api: api.get_task_comments(board_id, task_id))
    print_records(result, "Comments", COMMENT_COLUMNS, as_json)


@comment_app.command("show")
def comment_show(
    board_id: int = typer.Argument(..., help="Board identifier"),
    task_id: int = typer.Argument(..., help="Task identifier"),
    comment_id: int = typer.Argument(..., help="Comment identifier"),
) -> None:
    """Show a single comment."""
    result = run_with_client(lambda api: api.get_task_comment(board_id, task_id, comment_id))
    console.print_json(result)


@comment_app.command("add")
def comment_add(
    board_id: int = typer.Argument(..., help="Board identifier"),
    task_id: int = typer.Argument(..., help="Task identifier"),
    content: str = typer.Argument(..., help="Comment text"),
) -> None:
    """Add a comment to a task."""
    comment = run_with_client(
        lambda api: api.create_task_comment(board_id, task_id, {"comment[content]": content})
    )
    console.success(f"Added comment {comment.get('id')}")


@comment_app.command("delete")
def comment_delete(
    board_id: int = typer.Argument(..., help="Board identifier"),
    task_id: int = typer.Argument(..., help="Task identifier"),
    comment_id: int = typer.Argument(..., help="Comment identifier"),
) -> None:
    """Delete one of your recent comments."""
    run_with_client(lambda api: api.delete_task_comment(board_id, task_id, comment_id))
    console.success(f"Deleted comment {comment_id}")


# =============================================================================
# Subtasks
# =============================================================================


@subtask_app.command("list")
def subtask_list(
    board_id: int = typer.Argument(..., help="Board identifier"),
    task_id: int = typer.Argument(..., help="Task identifier"),
    as_json: bool = typer.Option(False, "--json", help="Print raw JSON"),
) -> None:
    """List subtasks of a task."""
    result = run_with_client(lambda api: api.get_task_subtasks(board_id, task_id))
    print_records(result, "Subtasks", SUBTASK_COLUMNS, as_json)


@subtask_app.command("show")
def subtask_show(
    board_id: int = typer.Argument(..., help="Board identifier"),
    task_id: int = typer.Argument(..., help="Task identifier"),
    subtask_id: int = typer.Argument(..., help="Subtask identifier"),
) -> None:
    """Show a single subtask."""
    result = run_with_client(lambda api: api.get_task_subtask(board_id, task_id, subtask_id))
    console.print_json(result)


@subtask_app.command("add")
def subtask_add(
    board_id: int = typer.Argument(..., help="Board identifier"),
    task_id: int = typer.Argument(..., help="Task identifier"),
    name: str = typer.Argument(..., help="Subtask name"),
) -> None:
    """Add a subtask at the bottom of the list."""
    subtask = run_with_client(
        lambda api: api.create_task_subtask(board_id, task_id, {"subtask[name]": name})
    )
    console.success(f"Added subtask {subtask.get('id')}")


@subtask_app.command("delete")
def subtask_delete(
    board_id: int = typer.Argument(..., help="Board identifier"),
    task_id: int = typer.Argument(..., help="Task identifier"),
    subtask_id: int = typer.Argument(..., help="Subtask identifier"),
) -> None:
    """Delete a subtask."""
    run_with_client(lambda api: api.delete_task_subtask(board_id, task_id, subtask_id))
    console.success(f"Deleted subtask {subtask_id}")


@subtask_app.command("reorder")
def subtask_reorder(
    board_id: int = typer.Argument(..., help="Board identifier"),
    task_id: int = typer.Argument(..., help="Task identifier"),
    order: str = typer.Argument(..., help="All subtask IDs in the new order, comma separated"),
) -> None:
    """Reorder subtasks, e.g. `subtask reorder 1234 456 5,2,8`."""
    try:
        new_order = [int(part) for part in order.split(",") if part.strip()]
    except ValueError:
        raise typer.BadParameter(f"Expected comma separated IDs, got '{order}'") from None

    run_with_client(lambda api: api.reorder_task_subtasks(board_id, task_id, new_order))
    console.success(f"Reordered {len(new_order)} subtasks")


def register_task_commands(app: typer.Typer) -> None:
    app.add_typer(task_app, name="task")
    app.add_typer(comment_app, name="comment")
    app.add_typer(subtask_app, name="subtask")

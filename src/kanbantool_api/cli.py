"""CLI entry point for kanbantool-api."""

import logging

import typer
from rich.console import Console

from . import __version__
from .cli_commands.boards import register_board_commands
from .cli_commands.config import register_config_commands
from .cli_commands.tasks import register_task_commands


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console = Console()
        console.print(f"kanbantool-api v{__version__}")
        raise typer.Exit(0)


app = typer.Typer(
    name="kanbantool",
    help="""Command-line client for the KanbanTool API.

Account settings come from .kanbantool/config.json or the
KANBANTOOL_SUBDOMAIN and KANBANTOOL_API_TOKEN environment variables.

Quick start:
  kanbantool config init --subdomain acme
  export KANBANTOOL_API_TOKEN=...
  kanbantool boards
  kanbantool tasks 1234
""",
    add_completion=False,
)


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        help="Show version and exit",
        callback=version_callback,
        is_eager=True,
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Log requests and errors"),
) -> None:
    """kanbantool - Work with KanbanTool boards from the terminal."""
    # API errors are printed by the commands; only log them in verbose mode
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.ERROR,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    # httpx logs full request URLs, which carry the API token
    for name in ("httpx", "httpcore"):
        logging.getLogger(name).setLevel(logging.WARNING)


# Register commands from submodules
register_config_commands(app)  # config init, config show, config path
register_board_commands(app)  # boards, board, tasks, changelog
register_task_commands(app)  # task ..., comment ..., subtask ...


def run() -> None:
    app()


if __name__ == "__main__":
    run()

"""Config commands - init, show and path for `.kanbantool/config.json`."""

from __future__ import annotations

import typer

from ..core import console
from ..core.config import (
    generate_default_config,
    get_config_path,
    load_config,
    save_config,
)
from ..core.errors import ConfigError

config_app = typer.Typer(help="Manage the KanbanTool client configuration.")


@config_app.command("init")
def config_init(
    subdomain: str | None = typer.Option(None, "--subdomain", "-s", help="Account subdomain"),
    api_token: str | None = typer.Option(
        None, "--token", "-t", help="API token (prefer KANBANTOOL_API_TOKEN)"
    ),
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite an existing config file"),
) -> None:
    """Create .kanbantool/config.json with default values."""
    path = get_config_path()
    if path.exists() and not force:
        console.warning(f"Config already exists at {path} (use --force to overwrite)")
        raise typer.Exit(1)

    config = generate_default_config()
    config.account.subdomain = subdomain
    config.account.api_token = api_token
    save_config(config)
    console.success(f"Config written to {path}")


@config_app.command("show")
def config_show(
    show_token: bool = typer.Option(False, "--show-token", help="Print the API token unmasked"),
) -> None:
    """Show the effective configuration (file plus environment)."""
    try:
        config = load_config()
    except ConfigError as e:
        console.error(str(e))
        raise typer.Exit(1) from None

    data = config.model_dump()
    token = data["account"]["api_token"]
    if token and not show_token:
        data["account"]["api_token"] = token[:4] + "…"
    console.print_json(data)


@config_app.command("path")
def config_path() -> None:
    """Print the path of the config file."""
    console.show(str(get_config_path()), soft_wrap=True)


def register_config_commands(app: typer.Typer) -> None:
    app.add_typer(config_app, name="config")

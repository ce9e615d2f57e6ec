"""Configuration Model - Pydantic models for kanbantool-api configuration.

This module defines the configuration schema for the KanbanTool client:
- Account settings (subdomain, API token)
- API settings (host, API version, timeout, User-Agent)

Configuration is loaded from `.kanbantool/config.json` in the working directory.
Environment variables override specific settings.

Environment Variable Mapping:
| Config Key               | Environment Variable      |
|--------------------------|---------------------------|
| account.subdomain        | KANBANTOOL_SUBDOMAIN      |
| account.api_token        | KANBANTOOL_API_TOKEN      |
| api.host                 | KANBANTOOL_HOST           |
| api.api_version          | KANBANTOOL_API_VERSION    |
| api.timeout_seconds      | KANBANTOOL_TIMEOUT        |
"""

from __future__ import annotations

import json
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, ValidationError

from .errors import ConfigError, MissingAccountError
from .transport import DEFAULT_USER_AGENT

CONFIG_DIR_NAME = ".kanbantool"
CONFIG_FILE_NAME = "config.json"

# =============================================================================
# Configuration Sub-Models
# =============================================================================


class AccountConfig(BaseModel):
    """Account identity.

    Both values can be left out of the config file and supplied through
    environment variables instead, which keeps the token out of version control.
    """

    subdomain: str | None = Field(
        default=None,
        description="Account subdomain, e.g. 'acme' for acme.kanbantool.com. "
        "Overridden by KANBANTOOL_SUBDOMAIN.",
    )
    api_token: str | None = Field(
        default=None,
        description="API token from the account settings. Overridden by KANBANTOOL_API_TOKEN.",
    )


class APIConfig(BaseModel):
    """API endpoint and request settings."""

    host: str = Field(
        default="kanbantool.com",
        min_length=1,
        description="Service host. Overridden by KANBANTOOL_HOST.",
    )
    api_version: str = Field(
        default="v1",
        min_length=1,
        description="API version path segment. Overridden by KANBANTOOL_API_VERSION.",
    )
    timeout_seconds: float = Field(
        default=10.0,
        gt=0,
        description="Seconds before a call fails with a timeout error. Overridden by KANBANTOOL_TIMEOUT.",
    )
    user_agent: str = Field(
        default=DEFAULT_USER_AGENT,
        min_length=1,
        description="User-Agent header sent with every request.",
    )


# =============================================================================
# Main Configuration Model
# =============================================================================


class KanbanToolConfig(BaseModel):
    """Root configuration object.

    Example config.json:
    ```json
    {
      "version": "1.0",
      "account": {
        "subdomain": "acme",
        "api_token": null
      },
      "api": {
        "host": "kanbantool.com",
        "api_version": "v1",
        "timeout_seconds": 10.0
      }
    }
    ```
    """

    version: str = Field(
        default="1.0",
        description="Configuration schema version.",
    )
    account: AccountConfig = Field(
        default_factory=AccountConfig,
        description="Account identity (subdomain, token).",
    )
    api: APIConfig = Field(
        default_factory=APIConfig,
        description="API endpoint and request settings.",
    )

    def require_account(self) -> tuple[str, str]:
        """Return (subdomain, api_token).

        Raises:
            MissingAccountError: If either value is not set.
        """
        missing = []
        if not self.account.subdomain:
            missing.append("subdomain")
        if not self.account.api_token:
            missing.append("api_token")
        if missing:
            raise MissingAccountError(missing)
        return self.account.subdomain, self.account.api_token  # type: ignore[return-value]


# =============================================================================
# Default Configuration Generator
# =============================================================================


def generate_default_config() -> KanbanToolConfig:
    return KanbanToolConfig()


def generate_default_config_dict() -> dict[str, Any]:
    return generate_default_config().model_dump()


def generate_default_config_json(indent: int = 2) -> str:
    """Generate default configuration as a formatted JSON string.

    Args:
        indent: Number of spaces for JSON indentation.
    """
    return generate_default_config().model_dump_json(indent=indent)


# =============================================================================
# Loading and Saving
# =============================================================================

ENV_OVERRIDES: dict[str, tuple[str, str]] = {
    "KANBANTOOL_SUBDOMAIN": ("account", "subdomain"),
    "KANBANTOOL_API_TOKEN": ("account", "api_token"),
    "KANBANTOOL_HOST": ("api", "host"),
    "KANBANTOOL_API_VERSION": ("api", "api_version"),
    "KANBANTOOL_TIMEOUT": ("api", "timeout_seconds"),
}


def get_config_path(working_dir: Path | None = None) -> Path:
    return (working_dir or Path.cwd()) / CONFIG_DIR_NAME / CONFIG_FILE_NAME


def apply_env_overrides(
    config: KanbanToolConfig, environ: Mapping[str, str] | None = None
) -> KanbanToolConfig:
    """Return a copy of the config with environment overrides applied.

    Args:
        config: Base configuration.
        environ: Environment mapping, defaults to ``os.environ``.

    Raises:
        ConfigError: If an override has an invalid value.
    """
    environ = os.environ if environ is None else environ
    data = config.model_dump()

    for env_var, (section, key) in ENV_OVERRIDES.items():
        value = environ.get(env_var)
        if value:
            data[section][key] = value

    try:
        return KanbanToolConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError("Invalid configuration from environment", _describe(e)) from e


def load_config(
    working_dir: Path | None = None, environ: Mapping[str, str] | None = None
) -> KanbanToolConfig:
    """Load configuration from file and environment.

    A missing config file is not an error; defaults are used instead.

    Raises:
        ConfigError: If the file contains invalid JSON or an invalid structure.
    """
    path = get_config_path(working_dir)
    config = KanbanToolConfig()

    if path.exists():
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise ConfigError(
                f"Config file {path} contains invalid JSON",
                f"JSON parse error at line {e.lineno}, column {e.colno}: {e.msg}",
            ) from e

        try:
            config = KanbanToolConfig.model_validate(data)
        except ValidationError as e:
            raise ConfigError(f"Config file {path} has invalid structure", _describe(e)) from e

    return apply_env_overrides(config, environ)


def save_config(config: KanbanToolConfig, working_dir: Path | None = None) -> Path:
    """Write the configuration to `.kanbantool/config.json`."""
    path = get_config_path(working_dir)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(config.model_dump_json(indent=2) + "\n", encoding="utf-8")
    return path


def _describe(error: ValidationError) -> str:
    parts = []
    for item in error.errors():
        field = ".".join(str(loc) for loc in item["loc"])
        parts.append(f"{field}: {item['msg']}")
    return "; ".join(parts)

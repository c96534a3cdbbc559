"""Configuration file and environment loading."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from pathlib import Path

import click
import yaml

from prompts_mcp.config.schema import DEFAULT_CONFIG, ServerConfig

logger = logging.getLogger(__name__)

CONFIG_DIRNAME = ".prompts-mcp"
CONFIG_FILENAME = "config.yaml"

# Environment variable -> config field
ENV_VARS: dict[str, str] = {
    "TEMPLATES_DIR": "templates_dir",
    "SKILLS_DIR": "skills_dir",
    "HOST": "host",
    "PORT": "port",
    "LOG_LEVEL": "log_level",
}


def get_home_config_path() -> Path:
    """Get path to global config: ~/.prompts-mcp/config.yaml."""
    return Path.home() / CONFIG_DIRNAME / CONFIG_FILENAME


def get_local_config_path() -> Path:
    """Get path to local config: ./.prompts-mcp/config.yaml."""
    return Path.cwd() / CONFIG_DIRNAME / CONFIG_FILENAME


def load_yaml_config(path: Path) -> dict[str, object] | None:
    """Load a YAML config file, return None if not found, empty or invalid."""
    if not path.exists():
        return None
    try:
        with path.open(encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as exc:
        logger.warning("Ignoring invalid config file %s: %s", path, exc)
        return None
    if not isinstance(data, dict):
        return None
    result: dict[str, object] = data
    return result


def load_env_config(environ: Mapping[str, str] | None = None) -> ServerConfig:
    """Build a config from environment variables.

    Empty variables are treated as unset.

    Raises:
        click.BadParameter: If PORT is set but is not an integer.
    """
    env = os.environ if environ is None else environ
    data: dict[str, object] = {}
    for var, field_name in ENV_VARS.items():
        value = env.get(var)
        if value:
            data[field_name] = value

    port = data.get("port")
    if port is not None:
        try:
            data["port"] = int(str(port))
        except ValueError:
            raise click.BadParameter(
                f"expected an integer, got {port!r}", param_hint="PORT"
            ) from None

    return ServerConfig.from_dict(data)


def load_config(
    overrides: ServerConfig | None = None,
    environ: Mapping[str, str] | None = None,
) -> ServerConfig:
    """Load merged configuration.

    Precedence (lowest to highest):
    1. Built-in defaults
    2. Global config (~/.prompts-mcp/config.yaml)
    3. Local config (./.prompts-mcp/config.yaml)
    4. Environment variables (TEMPLATES_DIR, SKILLS_DIR, HOST, PORT, LOG_LEVEL)
    5. Explicit overrides (CLI options)

    Returns merged ServerConfig.
    """
    config = DEFAULT_CONFIG

    for path in (get_home_config_path(), get_local_config_path()):
        data = load_yaml_config(path)
        if data:
            config = config.merge(ServerConfig.from_dict(data))

    config = config.merge(load_env_config(environ))

    if overrides is not None:
        config = config.merge(overrides)

    return config

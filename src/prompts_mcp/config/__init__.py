"""Configuration loading."""

from prompts_mcp.config.loader import (
    get_home_config_path,
    get_local_config_path,
    load_config,
    load_env_config,
    load_yaml_config,
)
from prompts_mcp.config.schema import DEFAULT_CONFIG, ServerConfig

__all__ = [
    "DEFAULT_CONFIG",
    "ServerConfig",
    "get_home_config_path",
    "get_local_config_path",
    "load_config",
    "load_env_config",
    "load_yaml_config",
]

"""Configuration schema for prompts-mcp-server."""

from __future__ import annotations

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

from prompts_mcp.skills.loader import SKILL_DIRNAME
from prompts_mcp.templates.loader import TEMPLATE_DIRNAME


def _coerce_port(value: Any) -> int | None:
    """Coerce a port value to int, returning None if it is not numeric."""
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


@dataclass(frozen=True)
class ServerConfig:
    """Server configuration.

    None values indicate "not set" and are filled in from lower-priority
    sources when configs are merged.
    """

    # Artifact directories (relative paths resolve against the cwd)
    templates_dir: str | None = None
    skills_dir: str | None = None

    # HTTP transport
    host: str | None = None
    port: int | None = None

    log_level: str | None = None

    def merge(self, other: ServerConfig) -> ServerConfig:
        """Merge another config into this one.

        Values from `other` take precedence when they are not None.
        Returns a new ServerConfig instance.
        """
        return ServerConfig(
            **{
                f.name: (
                    getattr(other, f.name)
                    if getattr(other, f.name) is not None
                    else getattr(self, f.name)
                )
                for f in fields(self)
            }
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert config to dictionary, excluding None values."""
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not None
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ServerConfig:
        """Create a ServerConfig from a dictionary.

        Unknown keys are ignored. Values of the wrong type are dropped.
        """

        def _str(key: str) -> str | None:
            value = data.get(key)
            if value is None or isinstance(value, (dict, list)):
                return None
            return str(value)

        return cls(
            templates_dir=_str("templates_dir"),
            skills_dir=_str("skills_dir"),
            host=_str("host"),
            port=_coerce_port(data.get("port")),
            log_level=_str("log_level"),
        )

    def templates_path(self) -> Path:
        """Absolute templates directory."""
        return _resolve(self.templates_dir or DEFAULT_CONFIG.templates_dir)

    def skills_path(self) -> Path:
        """Absolute skills directory."""
        return _resolve(self.skills_dir or DEFAULT_CONFIG.skills_dir)


def _resolve(path: str | None) -> Path:
    return Path(path or ".").expanduser().resolve()


# Default configuration values (used when not specified anywhere)
DEFAULT_CONFIG = ServerConfig(
    templates_dir=TEMPLATE_DIRNAME,
    skills_dir=SKILL_DIRNAME,
    host="127.0.0.1",
    port=3000,
    log_level="INFO",
)

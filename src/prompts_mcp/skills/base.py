"""Base skill definition."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any


@dataclass(frozen=True)
class Skill:
    """A skill document with trigger keywords.

    Skills are instructions an agent pulls in when a request matches one
    of the triggers.
    """

    name: str
    description: str
    content: str
    triggers: tuple[str, ...] = ()
    source: Path | None = None

    def to_summary(self) -> dict[str, Any]:
        """Listing view, without content."""
        return {
            "name": self.name,
            "description": self.description,
            "triggers": list(self.triggers),
        }

    def to_dict(self) -> dict[str, Any]:
        """Full view including content."""
        result = self.to_summary()
        result["content"] = self.content
        return result

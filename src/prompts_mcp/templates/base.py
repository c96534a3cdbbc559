"""Base prompt template definition."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any


@dataclass(frozen=True)
class PromptTemplate:
    """A reusable prompt loaded from a markdown file.

    The content may contain ``{{variable}}`` placeholders which are filled
    in by ``render_template``.
    """

    name: str  # file stem, e.g. "code-review"
    description: str
    content: str  # body with the metadata header removed
    variables: tuple[str, ...] = ()  # placeholders, in order of first use
    source: Path | None = None  # file the template was loaded from

    def to_summary(self) -> dict[str, Any]:
        """Listing view, without content."""
        return {
            "name": self.name,
            "description": self.description,
            "variables": list(self.variables),
        }

    def to_dict(self) -> dict[str, Any]:
        """Full view including content. ``source`` is runtime-only."""
        result = self.to_summary()
        result["content"] = self.content
        return result


@dataclass(frozen=True)
class RenderResult:
    """Outcome of rendering a template with a set of values."""

    name: str
    rendered: str
    unresolved: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "name": self.name,
            "rendered": self.rendered,
            "unresolved": list(self.unresolved),
        }

"""Registry facade over the template and skill directories.

Every operation reads the directory again; nothing is cached between calls,
so edits made to the files on disk are visible on the next call.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from pathlib import Path
from typing import Generic, TypeVar

from prompts_mcp.skills import Skill, discover_skill_files, load_all_skills, load_skill
from prompts_mcp.templates import (
    PromptTemplate,
    discover_template_files,
    load_all_templates,
    load_template,
)

logger = logging.getLogger(__name__)

ArtifactT = TypeVar("ArtifactT", PromptTemplate, Skill)


class ArtifactNotFoundError(LookupError):
    """Raised when no artifact file exists for the requested name."""

    def __init__(self, kind: str, name: str, available: Sequence[str]) -> None:
        self.kind = kind
        self.name = name
        self.available = tuple(available)
        listing = ", ".join(self.available) or "none"
        super().__init__(
            f'{kind.capitalize()} "{name}" not found. '
            f"Available {kind}s: {listing}"
        )


class ArtifactRegistry(Generic[ArtifactT]):
    """Lookup, listing and reload over one artifact directory."""

    def __init__(
        self,
        kind: str,
        directory: Path,
        discover: Callable[[Path], dict[str, Path]],
        load_one: Callable[[Path], ArtifactT],
        load_all: Callable[[Path], list[ArtifactT]],
    ) -> None:
        self.kind = kind  # singular, lower-case: "template", "skill"
        self.directory = directory
        self._discover = discover
        self._load_one = load_one
        self._load_all = load_all

    def list_all(self) -> list[ArtifactT]:
        """Load all artifacts currently in the directory."""
        return self._load_all(self.directory)

    def names(self) -> list[str]:
        """Names of the artifacts currently in the directory."""
        return list(self._discover(self.directory))

    def get(self, name: str) -> ArtifactT:
        """Load a single artifact by name.

        Raises:
            ArtifactNotFoundError: If no file in the directory maps to
                ``name``. The error lists the names that do exist.
        """
        files = self._discover(self.directory)
        path = files.get(name)
        if path is None:
            raise ArtifactNotFoundError(self.kind, name, list(files))
        return self._load_one(path)

    def reload(self) -> list[ArtifactT]:
        """Re-read the directory after external changes.

        Equivalent to ``list_all``; kept separate so callers can state that
        they expect the files to have changed.
        """
        artifacts = self.list_all()
        logger.info(
            "Reloaded %d %ss from %s", len(artifacts), self.kind, self.directory
        )
        return artifacts


def template_registry(templates_dir: Path) -> ArtifactRegistry[PromptTemplate]:
    """Create the registry for a templates directory."""
    return ArtifactRegistry(
        "template",
        templates_dir,
        discover=discover_template_files,
        load_one=load_template,
        load_all=load_all_templates,
    )


def skill_registry(skills_dir: Path) -> ArtifactRegistry[Skill]:
    """Create the registry for a skills directory."""
    return ArtifactRegistry(
        "skill",
        skills_dir,
        discover=discover_skill_files,
        load_one=load_skill,
        load_all=load_all_skills,
    )

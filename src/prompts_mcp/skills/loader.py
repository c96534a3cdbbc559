"""Skill loading and discovery."""

from __future__ import annotations

from pathlib import Path

from prompts_mcp.discovery import discover_artifact_files
from prompts_mcp.headers import (
    CommentHeaderParser,
    FrontMatterParser,
    HeaderParser,
    parse_header,
)
from prompts_mcp.skills.base import Skill

# Constants
SKILL_DIRNAME = "skills"
DEFAULT_DESCRIPTION = "Skill: {name}"

# Front matter first; the comment header only carries a description.
SKILL_HEADERS: tuple[HeaderParser, ...] = (
    FrontMatterParser(fields=("description", "triggers")),
    CommentHeaderParser(fields=("description",)),
)


def parse_triggers(raw: str | None) -> tuple[str, ...]:
    """Split a comma-separated trigger list, trimming each entry.

    Empty entries are dropped.
    """
    if not raw:
        return ()
    return tuple(t.strip() for t in raw.split(",") if t.strip())


def discover_skill_files(skills_dir: Path) -> dict[str, Path]:
    """Discover skill files in a directory.

    Returns dict mapping skill name -> .md file path.
    """
    return discover_artifact_files(skills_dir, kind="Skills")


def load_skill(path: Path) -> Skill:
    """Load a Skill from a markdown file."""
    raw = path.read_text(encoding="utf-8")
    name = path.stem
    parsed = parse_header(raw, SKILL_HEADERS)

    return Skill(
        name=name,
        description=parsed.metadata.get(
            "description", DEFAULT_DESCRIPTION.format(name=name)
        ),
        content=parsed.body,
        triggers=parse_triggers(parsed.metadata.get("triggers")),
        source=path,
    )


def load_all_skills(skills_dir: Path) -> list[Skill]:
    """Load every skill in a directory, in filename order.

    Returns an empty list if the directory does not exist.
    """
    files = discover_skill_files(skills_dir)
    return [load_skill(path) for path in files.values()]

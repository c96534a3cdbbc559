"""Skill definitions and loading."""

from prompts_mcp.skills.base import Skill
from prompts_mcp.skills.loader import (
    SKILL_DIRNAME,
    discover_skill_files,
    load_all_skills,
    load_skill,
    parse_triggers,
)

__all__ = [
    "SKILL_DIRNAME",
    "Skill",
    "discover_skill_files",
    "load_all_skills",
    "load_skill",
    "parse_triggers",
]

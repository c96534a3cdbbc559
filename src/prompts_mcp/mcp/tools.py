"""MCP tool handler implementations.

Each handler takes a registry, performs one operation against the files on
disk and returns the response payload. FastMCP sends the payload both as
structured content and as indented JSON text.
"""

import logging
from collections.abc import Mapping
from typing import Any

from mcp.server.fastmcp.exceptions import ToolError

from prompts_mcp.registry import ArtifactNotFoundError, ArtifactRegistry
from prompts_mcp.skills import Skill
from prompts_mcp.templates import PromptTemplate, render_template

logger = logging.getLogger(__name__)

# Tool name -> access level; reload tools are not read-only
TOOL_ACCESS: dict[str, str] = {
    "prompts_list_templates": "read",
    "prompts_get_template": "read",
    "prompts_render_template": "read",
    "prompts_reload_templates": "reload",
    "skills_list_skills": "read",
    "skills_get_skill": "read",
    "skills_reload_skills": "reload",
}

TOOL_NAMES: tuple[str, ...] = tuple(TOOL_ACCESS)


def _not_found(exc: ArtifactNotFoundError) -> ToolError:
    logger.info("Lookup failed: %s", exc)
    return ToolError(str(exc))


# ── Templates ─────────────────────────────────────────────────────────


def handle_list_templates(
    registry: ArtifactRegistry[PromptTemplate],
) -> dict[str, Any]:
    """Handle the prompts_list_templates MCP tool call.

    Returns:
        Template summaries (no content) and a count.
    """
    templates = registry.list_all()
    return {
        "templates": [t.to_summary() for t in templates],
        "count": len(templates),
    }


def handle_get_template(
    registry: ArtifactRegistry[PromptTemplate], name: str
) -> dict[str, Any]:
    """Handle the prompts_get_template MCP tool call.

    Args:
        registry: The templates registry.
        name: Template name (file name without .md).

    Returns:
        The full template including raw content.

    Raises:
        ToolError: If the template does not exist.
    """
    try:
        template = registry.get(name)
    except ArtifactNotFoundError as exc:
        raise _not_found(exc) from exc
    return template.to_dict()


def handle_render_template(
    registry: ArtifactRegistry[PromptTemplate],
    name: str,
    variables: Mapping[str, str] | None = None,
) -> dict[str, Any]:
    """Handle the prompts_render_template MCP tool call.

    Placeholders without a value are left in the output and reported in
    ``unresolved``.

    Args:
        registry: The templates registry.
        name: Template name.
        variables: Mapping of placeholder name -> value.

    Returns:
        Name, rendered text and unresolved variables.

    Raises:
        ToolError: If the template does not exist.
    """
    try:
        template = registry.get(name)
    except ArtifactNotFoundError as exc:
        raise _not_found(exc) from exc
    return render_template(template, variables or {}).to_dict()


def handle_reload_templates(
    registry: ArtifactRegistry[PromptTemplate],
) -> dict[str, Any]:
    """Handle the prompts_reload_templates MCP tool call."""
    templates = registry.reload()
    return {
        "message": f"Reloaded {len(templates)} templates from {registry.directory}",
        "templates": [t.to_summary() for t in templates],
        "count": len(templates),
    }


# ── Skills ────────────────────────────────────────────────────────────


def handle_list_skills(registry: ArtifactRegistry[Skill]) -> dict[str, Any]:
    """Handle the skills_list_skills MCP tool call."""
    skills = registry.list_all()
    return {
        "skills": [s.to_summary() for s in skills],
        "count": len(skills),
    }


def handle_get_skill(registry: ArtifactRegistry[Skill], name: str) -> dict[str, Any]:
    """Handle the skills_get_skill MCP tool call.

    Raises:
        ToolError: If the skill does not exist.
    """
    try:
        skill = registry.get(name)
    except ArtifactNotFoundError as exc:
        raise _not_found(exc) from exc
    return skill.to_dict()


def handle_reload_skills(registry: ArtifactRegistry[Skill]) -> dict[str, Any]:
    """Handle the skills_reload_skills MCP tool call."""
    skills = registry.reload()
    return {
        "message": f"Reloaded {len(skills)} skills from {registry.directory}",
        "skills": [s.to_summary() for s in skills],
        "count": len(skills),
    }

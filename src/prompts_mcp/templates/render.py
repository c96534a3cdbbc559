"""Placeholder substitution."""

from __future__ import annotations

import re
from collections.abc import Mapping

from prompts_mcp.templates.base import PromptTemplate, RenderResult
from prompts_mcp.templates.variables import VARIABLE_PATTERN


def render_content(content: str, values: Mapping[str, str]) -> str:
    """Substitute ``{{name}}`` placeholders in a single pass.

    Placeholders whose name is a key of ``values`` are replaced by the
    value; all others are left as-is, braces included. Substituted values
    are not scanned again.
    """

    def _replace(match: re.Match[str]) -> str:
        key = match.group(1)
        if key in values:
            return values[key]
        return match.group(0)

    return VARIABLE_PATTERN.sub(_replace, content)


def render_template(
    template: PromptTemplate, values: Mapping[str, str] | None = None
) -> RenderResult:
    """Render a template and report which of its variables were not given.

    ``unresolved`` is derived from ``template.variables`` rather than from
    the rendered text, so placeholders that appear inside a supplied value
    never count as unresolved.

    Args:
        template: The template to render.
        values: Mapping of variable name -> replacement text.

    Returns:
        RenderResult with the rendered text and unresolved variable names.
    """
    values = values or {}
    rendered = render_content(template.content, values)
    unresolved = tuple(v for v in template.variables if v not in values)
    return RenderResult(name=template.name, rendered=rendered, unresolved=unresolved)

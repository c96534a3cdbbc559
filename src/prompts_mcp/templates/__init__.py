"""Prompt template definitions, loading and rendering."""

from prompts_mcp.templates.base import PromptTemplate, RenderResult
from prompts_mcp.templates.loader import (
    TEMPLATE_DIRNAME,
    discover_template_files,
    load_all_templates,
    load_template,
)
from prompts_mcp.templates.render import render_content, render_template
from prompts_mcp.templates.variables import extract_variables

__all__ = [
    "PromptTemplate",
    "RenderResult",
    "TEMPLATE_DIRNAME",
    "discover_template_files",
    "extract_variables",
    "load_all_templates",
    "load_template",
    "render_content",
    "render_template",
]

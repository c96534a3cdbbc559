"""Template loading and discovery."""

from __future__ import annotations

from pathlib import Path

from prompts_mcp.discovery import discover_artifact_files
from prompts_mcp.headers import CommentHeaderParser, HeaderParser, parse_header
from prompts_mcp.templates.base import PromptTemplate
from prompts_mcp.templates.variables import extract_variables

# Constants
TEMPLATE_DIRNAME = "templates"
DEFAULT_DESCRIPTION = "Prompt template: {name}"

# Templates only support the <!-- description: ... --> header
TEMPLATE_HEADERS: tuple[HeaderParser, ...] = (
    CommentHeaderParser(fields=("description",)),
)


def discover_template_files(templates_dir: Path) -> dict[str, Path]:
    """Discover template files in a directory.

    Returns dict mapping template name -> .md file path.
    """
    return discover_artifact_files(templates_dir, kind="Templates")


def load_template(path: Path) -> PromptTemplate:
    """Load a PromptTemplate from a markdown file.

    Read errors propagate to the caller.
    """
    raw = path.read_text(encoding="utf-8")
    name = path.stem
    parsed = parse_header(raw, TEMPLATE_HEADERS)

    return PromptTemplate(
        name=name,
        description=parsed.metadata.get(
            "description", DEFAULT_DESCRIPTION.format(name=name)
        ),
        content=parsed.body,
        variables=extract_variables(parsed.body),
        source=path,
    )


def load_all_templates(templates_dir: Path) -> list[PromptTemplate]:
    """Load every template in a directory, in filename order.

    Returns an empty list if the directory does not exist.
    """
    files = discover_template_files(templates_dir)
    return [load_template(path) for path in files.values()]

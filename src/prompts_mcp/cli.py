"""Command-line interface for prompts-mcp-server."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import NoReturn

import click
from rich.markup import escape

from prompts_mcp import __version__
from prompts_mcp.config import (
    ServerConfig,
    get_home_config_path,
    get_local_config_path,
    load_config,
)
from prompts_mcp.console import console
from prompts_mcp.logging import setup_logging
from prompts_mcp.mcp import PromptsMCPServer
from prompts_mcp.registry import (
    ArtifactNotFoundError,
    ArtifactRegistry,
    skill_registry,
    template_registry,
)
from prompts_mcp.skills import Skill
from prompts_mcp.templates import PromptTemplate, render_template

logger = logging.getLogger(__name__)


def version_callback(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
    """Print version and exit."""
    if not value or ctx.resilient_parsing:
        return
    console.print(f"prompts-mcp [bold cyan]{__version__}[/bold cyan]")
    ctx.exit()


def _parse_assignments(
    _ctx: click.Context, _param: click.Parameter, values: tuple[str, ...]
) -> dict[str, str]:
    """Parse repeated ``key=value`` options into a dict."""
    result: dict[str, str] = {}
    for item in values:
        key, sep, value = item.partition("=")
        if not sep or not key:
            raise click.BadParameter(f"expected key=value, got {item!r}")
        result[key] = value
    return result


def _not_found(exc: ArtifactNotFoundError) -> NoReturn:
    console.print(f"[red]{escape(str(exc))}[/red]", highlight=False)
    raise SystemExit(1)


@click.group(invoke_without_command=True)
@click.option(
    "--version",
    is_flag=True,
    callback=version_callback,
    expose_value=False,
    is_eager=True,
    help="Show version and exit.",
)
@click.pass_context
def main(ctx: click.Context) -> None:
    """prompts-mcp - serve prompt templates and skills over MCP."""
    if ctx.invoked_subcommand is None:
        console.print("[bold]prompts-mcp[/bold] - prompt templates and skills over MCP")
        console.print("\nRun [cyan]prompts-mcp --help[/cyan] for available commands.")


@main.command()
@click.option("--host", help="Interface to bind (default: 127.0.0.1).")
@click.option("--port", "-p", type=int, help="Port to listen on (default: 3000).")
@click.option(
    "--templates-dir",
    type=click.Path(file_okay=False, path_type=Path),
    help="Directory of template .md files (default: ./templates).",
)
@click.option(
    "--skills-dir",
    type=click.Path(file_okay=False, path_type=Path),
    help="Directory of skill .md files (default: ./skills).",
)
@click.option("--log-level", help="Log level (default: INFO).")
def serve(
    host: str | None,
    port: int | None,
    templates_dir: Path | None,
    skills_dir: Path | None,
    log_level: str | None,
) -> None:
    """Run the MCP server over streamable HTTP.

    The MCP endpoint is served at /mcp and a health check at /health.
    Templates and skills are re-read from disk on every request.
    """
    overrides = ServerConfig(
        templates_dir=str(templates_dir) if templates_dir else None,
        skills_dir=str(skills_dir) if skills_dir else None,
        host=host,
        port=port,
        log_level=log_level,
    )
    config = load_config(overrides)
    setup_logging(config.log_level or "INFO")

    server = PromptsMCPServer(config)
    try:
        server.serve()
    except KeyboardInterrupt:
        logger.info("Interrupted, shutting down")


@main.command("config")
def show_config() -> None:
    """Show the resolved configuration."""
    config = load_config()

    console.print("[bold]Configuration:[/bold]\n")
    console.print(f"  templates_dir: [cyan]{config.templates_path()}[/cyan]")
    console.print(f"  skills_dir:    [cyan]{config.skills_path()}[/cyan]")
    console.print(f"  host:          {config.host}")
    console.print(f"  port:          {config.port}")
    console.print(f"  log_level:     {config.log_level}")
    console.print()
    for label, path in (
        ("Global", get_home_config_path()),
        ("Local", get_local_config_path()),
    ):
        state = "found" if path.exists() else "not found"
        console.print(f"[dim]{label} config: {path} ({state})[/dim]")


# ── Templates ─────────────────────────────────────────────────────────


@main.group(invoke_without_command=True)
@click.option(
    "--dir",
    "directory",
    type=click.Path(file_okay=False, path_type=Path),
    help="Templates directory (overrides configuration).",
)
@click.pass_context
def templates(ctx: click.Context, directory: Path | None) -> None:
    """Inspect and render prompt templates.

    Use subcommands: prompts-mcp templates list, show, render
    """
    setup_logging("WARNING")
    path = directory.resolve() if directory else load_config().templates_path()
    ctx.obj = template_registry(path)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


@templates.command("list")
@click.pass_obj
def templates_list(registry: ArtifactRegistry[PromptTemplate]) -> None:
    """List available templates."""
    items = registry.list_all()

    if not items:
        console.print("[yellow]No templates found.[/yellow]")
        console.print(f"[dim]Add .md files to {escape(str(registry.directory))}[/dim]")
        return

    console.print(f"[bold]Available Templates ({len(items)}):[/bold]\n")
    for tmpl in items:
        console.print(f"  [cyan]{escape(tmpl.name)}[/cyan]", highlight=False)
        console.print(f"    {tmpl.description}", markup=False, highlight=False)
        if tmpl.variables:
            console.print(
                f"    Variables: {', '.join(tmpl.variables)}",
                markup=False,
                highlight=False,
            )


@templates.command("show")
@click.argument("name")
@click.pass_obj
def templates_show(registry: ArtifactRegistry[PromptTemplate], name: str) -> None:
    """Show a template's metadata and raw content."""
    try:
        tmpl = registry.get(name)
    except ArtifactNotFoundError as exc:
        _not_found(exc)

    console.print(f"[bold cyan]{escape(tmpl.name)}[/bold cyan]", highlight=False)
    console.print(tmpl.description, markup=False, highlight=False)
    variables = ", ".join(tmpl.variables) or "none"
    console.print(f"Variables: {variables}\n", markup=False, highlight=False)
    click.echo(tmpl.content)


@templates.command("render")
@click.argument("name")
@click.option(
    "--var",
    "-v",
    "values",
    multiple=True,
    callback=_parse_assignments,
    help="Variable value as key=value. Repeatable.",
)
@click.option("--json", "as_json", is_flag=True, help="Print the result as JSON.")
@click.pass_obj
def templates_render(
    registry: ArtifactRegistry[PromptTemplate],
    name: str,
    values: dict[str, str],
    as_json: bool,
) -> None:
    """Render a template with variable values.

    Placeholders without a value are left as-is and reported.
    """
    try:
        tmpl = registry.get(name)
    except ArtifactNotFoundError as exc:
        _not_found(exc)

    result = render_template(tmpl, values)

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        return

    click.echo(result.rendered)
    if result.unresolved:
        console.print(
            f"\n[yellow]Unresolved: {', '.join(result.unresolved)}[/yellow]",
            highlight=False,
        )


# ── Skills ────────────────────────────────────────────────────────────


@main.group(invoke_without_command=True)
@click.option(
    "--dir",
    "directory",
    type=click.Path(file_okay=False, path_type=Path),
    help="Skills directory (overrides configuration).",
)
@click.pass_context
def skills(ctx: click.Context, directory: Path | None) -> None:
    """Inspect skills.

    Use subcommands: prompts-mcp skills list, show
    """
    setup_logging("WARNING")
    path = directory.resolve() if directory else load_config().skills_path()
    ctx.obj = skill_registry(path)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


@skills.command("list")
@click.pass_obj
def skills_list(registry: ArtifactRegistry[Skill]) -> None:
    """List available skills."""
    items = registry.list_all()

    if not items:
        console.print("[yellow]No skills found.[/yellow]")
        console.print(f"[dim]Add .md files to {escape(str(registry.directory))}[/dim]")
        return

    console.print(f"[bold]Available Skills ({len(items)}):[/bold]\n")
    for skill in items:
        console.print(f"  [cyan]{escape(skill.name)}[/cyan]", highlight=False)
        console.print(f"    {skill.description}", markup=False, highlight=False)
        if skill.triggers:
            console.print(
                f"    Triggers: {', '.join(skill.triggers)}",
                markup=False,
                highlight=False,
            )


@skills.command("show")
@click.argument("name")
@click.pass_obj
def skills_show(registry: ArtifactRegistry[Skill], name: str) -> None:
    """Show a skill's metadata and content."""
    try:
        skill = registry.get(name)
    except ArtifactNotFoundError as exc:
        _not_found(exc)

    console.print(f"[bold cyan]{escape(skill.name)}[/bold cyan]", highlight=False)
    console.print(skill.description, markup=False, highlight=False)
    triggers = ", ".join(skill.triggers) or "none"
    console.print(f"Triggers: {triggers}\n", markup=False, highlight=False)
    click.echo(skill.content)

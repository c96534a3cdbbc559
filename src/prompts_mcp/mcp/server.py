"""prompts-mcp-server with streamable HTTP transport."""

import asyncio
import logging
import threading
import time
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Annotated, Any

import uvicorn
from mcp.server.fastmcp import FastMCP
from mcp.server.transport_security import TransportSecuritySettings
from mcp.types import ToolAnnotations
from pydantic import Field
from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.routing import Mount, Route

from prompts_mcp.config import ServerConfig
from prompts_mcp.mcp.tools import (
    TOOL_ACCESS,
    handle_get_skill,
    handle_get_template,
    handle_list_skills,
    handle_list_templates,
    handle_reload_skills,
    handle_reload_templates,
    handle_render_template,
)
from prompts_mcp.registry import (
    ArtifactRegistry,
    skill_registry,
    template_registry,
)
from prompts_mcp.skills import Skill
from prompts_mcp.templates import PromptTemplate

logger = logging.getLogger(__name__)

SERVER_NAME = "prompts-mcp-server"
MCP_PATH = "/mcp"

_LOCAL_HOSTS = ("127.0.0.1", "localhost", "::1")


def _annotations(tool_name: str) -> ToolAnnotations:
    """Build MCP tool annotations from the tool's access level."""
    return ToolAnnotations(
        readOnlyHint=TOOL_ACCESS[tool_name] == "read",
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    )


def _build_mcp_app(
    templates: ArtifactRegistry[PromptTemplate],
    skills: ArtifactRegistry[Skill],
    host: str = "127.0.0.1",
) -> FastMCP:
    """Build the FastMCP application with tool registrations.

    Args:
        templates: Registry for the templates directory.
        skills: Registry for the skills directory.
        host: The bind host address, used to configure allowed Host headers.

    Returns:
        A configured FastMCP instance.
    """
    allowed_hosts = ["127.0.0.1:*", "localhost:*", "[::1]:*"]
    if host not in _LOCAL_HOSTS:
        allowed_hosts.append(f"{host}:*")

    transport_security = TransportSecuritySettings(
        enable_dns_rebinding_protection=host in _LOCAL_HOSTS,
        allowed_hosts=allowed_hosts,
        allowed_origins=[f"http://{h}" for h in allowed_hosts],
    )

    mcp = FastMCP(
        SERVER_NAME,
        stateless_http=True,
        json_response=True,
        streamable_http_path=MCP_PATH,
        transport_security=transport_security,
    )

    template_name = Annotated[
        str, Field(min_length=1, description="Template name (without .md extension)")
    ]
    skill_name = Annotated[
        str, Field(min_length=1, description="Skill name (without .md extension)")
    ]

    @mcp.tool(
        name="prompts_list_templates",
        title="List Prompt Templates",
        annotations=_annotations("prompts_list_templates"),
    )
    async def list_templates() -> dict[str, Any]:
        """List all available prompt templates loaded from the templates directory.

        Returns each template's name, description, and the {{variable}}
        placeholders it accepts. Use this first to discover templates before
        calling prompts_render_template.

        Returns:
            {"templates": [{"name", "description", "variables"}], "count"}
        """
        return handle_list_templates(templates)

    @mcp.tool(
        name="prompts_get_template",
        title="Get Prompt Template",
        annotations=_annotations("prompts_get_template"),
    )
    async def get_template(name: template_name) -> dict[str, Any]:
        """Retrieve the raw markdown content of a prompt template by name.

        The content keeps its {{variable}} placeholders intact.

        Args:
            name: Template name (file name without .md, e.g. "code-review").

        Returns:
            {"name", "description", "variables", "content"}; an error listing
            the available templates if the name is unknown.
        """
        return handle_get_template(templates, name)

    @mcp.tool(
        name="prompts_render_template",
        title="Render Prompt Template",
        annotations=_annotations("prompts_render_template"),
    )
    async def render_template(
        name: template_name,
        variables: Annotated[
            dict[str, str] | None,
            Field(description="Variable values to substitute into the template"),
        ] = None,
    ) -> dict[str, Any]:
        """Render a prompt template by substituting {{variable}} placeholders.

        Any {{variable}} not provided stays as-is in the output and is
        listed in "unresolved".

        Args:
            name: Template name (without .md extension).
            variables: Key-value pairs; keys match the {{variable}} names.

        Returns:
            {"name", "rendered", "unresolved"}
        """
        return handle_render_template(templates, name, variables)

    @mcp.tool(
        name="prompts_reload_templates",
        title="Reload Templates",
        annotations=_annotations("prompts_reload_templates"),
    )
    async def reload_templates() -> dict[str, Any]:
        """Reload all prompt templates from the templates directory on disk.

        Use after adding, editing, or removing .md template files. No server
        restart needed. Returns the updated list of templates.
        """
        return handle_reload_templates(templates)

    @mcp.tool(
        name="skills_list_skills",
        title="List Skills",
        annotations=_annotations("skills_list_skills"),
    )
    async def list_skills() -> dict[str, Any]:
        """List all available skills loaded from the skills directory.

        Returns:
            {"skills": [{"name", "description", "triggers"}], "count"}
        """
        return handle_list_skills(skills)

    @mcp.tool(
        name="skills_get_skill",
        title="Get Skill",
        annotations=_annotations("skills_get_skill"),
    )
    async def get_skill(name: skill_name) -> dict[str, Any]:
        """Retrieve the full content of a skill by name.

        Args:
            name: Skill name (file name without .md, e.g. "docx").

        Returns:
            {"name", "description", "triggers", "content"}
        """
        return handle_get_skill(skills, name)

    @mcp.tool(
        name="skills_reload_skills",
        title="Reload Skills",
        annotations=_annotations("skills_reload_skills"),
    )
    async def reload_skills() -> dict[str, Any]:
        """Reload all skills from the skills directory on disk.

        Use after adding, editing, or removing .md skill files. Returns the
        updated list of skills.
        """
        return handle_reload_skills(skills)

    return mcp


def build_http_app(
    templates: ArtifactRegistry[PromptTemplate],
    skills: ArtifactRegistry[Skill],
    host: str = "127.0.0.1",
) -> Starlette:
    """Build the Starlette app serving ``/mcp`` and ``/health``."""
    mcp_app = _build_mcp_app(templates, skills, host)
    http_app = mcp_app.streamable_http_app()
    session_mgr = mcp_app.session_manager

    async def health(_request: Request) -> JSONResponse:
        return JSONResponse(
            {
                "status": "ok",
                "templates_loaded": len(templates.list_all()),
                "templates_dir": str(templates.directory),
                "skills_loaded": len(skills.list_all()),
                "skills_dir": str(skills.directory),
            }
        )

    @asynccontextmanager
    async def _lifespan(app: Starlette) -> AsyncIterator[None]:
        async with session_mgr.run():
            yield

    return Starlette(
        routes=[
            Route("/health", health, methods=["GET"]),
            Mount("/", app=http_app),
        ],
        lifespan=_lifespan,
    )


class PromptsMCPServer:
    """Manages the MCP server lifecycle.

    ``serve`` runs uvicorn in the foreground; ``start``/``stop`` run it in
    a background thread.
    """

    def __init__(self, config: ServerConfig) -> None:
        self.config = config
        self.host = config.host or "127.0.0.1"
        self.templates = template_registry(config.templates_path())
        self.skills = skill_registry(config.skills_path())
        self.port: int | None = None
        self._server: uvicorn.Server | None = None
        self._thread: threading.Thread | None = None

    def _create_server(self, port: int) -> uvicorn.Server:
        app = build_http_app(self.templates, self.skills, self.host)
        config = uvicorn.Config(
            app=app,
            host=self.host,
            port=port,
            log_level="warning",
            log_config=None,
        )
        return uvicorn.Server(config)

    def log_startup(self) -> None:
        """Log the endpoint and the artifacts currently on disk."""
        logger.info(
            "%s running on http://%s:%s%s", SERVER_NAME, self.host, self.port, MCP_PATH
        )
        for label, registry in (("Templates", self.templates), ("Skills", self.skills)):
            names = registry.names()
            logger.info("%s directory: %s", label, registry.directory)
            logger.info(
                "Loaded %d %s(s): %s",
                len(names),
                registry.kind,
                ", ".join(names) or "none",
            )

    def serve(self) -> None:
        """Run the server in the foreground until interrupted."""
        self.port = self.config.port if self.config.port is not None else 3000
        self._server = self._create_server(self.port)
        self.log_startup()
        self._server.run()

    def start(self) -> int:
        """Start the server in a background thread.

        Binds to the configured port, or a free port when it is 0 or unset.
        Returns the bound port number.
        """
        self._server = self._create_server(self.config.port or 0)

        self._thread = threading.Thread(
            target=asyncio.run,
            args=(self._server.serve(),),
            daemon=True,
        )
        self._thread.start()

        # Wait for the server to bind and read the actual port
        self.port = self._wait_for_port()
        self.log_startup()
        return self.port

    def _wait_for_port(self, timeout: float = 10.0) -> int:
        """Wait for the uvicorn server to bind and return the port.

        Raises:
            RuntimeError: If the server fails to start within the timeout.
        """
        deadline = time.monotonic() + timeout
        while time.monotonic() < deadline:
            if self._server and self._server.started:
                servers: Any = getattr(self._server, "servers", [])
                for srv in servers:
                    sockets = getattr(srv, "sockets", None)
                    if sockets:
                        addr: Any = sockets[0].getsockname()
                        return int(addr[1])
            time.sleep(0.05)
        raise RuntimeError("MCP server failed to start within timeout")

    def stop(self) -> None:
        """Stop the server gracefully."""
        if self._server:
            self._server.should_exit = True
        if self._thread:
            self._thread.join(timeout=5)
            self._thread = None
        self._server = None
        self.port = None
        logger.info("MCP server stopped")

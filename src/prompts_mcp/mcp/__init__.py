"""MCP transport for prompts-mcp-server."""

from prompts_mcp.mcp.server import (
    MCP_PATH,
    SERVER_NAME,
    PromptsMCPServer,
    build_http_app,
)
from prompts_mcp.mcp.tools import TOOL_NAMES

__all__ = [
    "MCP_PATH",
    "SERVER_NAME",
    "TOOL_NAMES",
    "PromptsMCPServer",
    "build_http_app",
]

"""prompts-mcp-server - prompt templates and skills over MCP."""

__version__ = "1.0.0"

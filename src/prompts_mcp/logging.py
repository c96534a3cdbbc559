"""Logging configuration for prompts-mcp-server."""

import logging

from rich.logging import RichHandler

from prompts_mcp.console import err_console


def setup_logging(level: str = "INFO") -> None:
    """Configure root logging with a rich handler on stderr.

    Args:
        level: Log level name (e.g. "INFO", "debug"). Unknown names fall
               back to INFO.
    """
    handler = RichHandler(
        console=err_console,
        show_time=True,
        show_path=False,
        rich_tracebacks=True,
    )

    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[handler],
        force=True,
    )

    # uvicorn logs every request at INFO
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)

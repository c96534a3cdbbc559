"""Shared rich consoles for CLI output."""

from rich.console import Console

console = Console()

# Diagnostics and logs go to stderr so stdout stays machine-readable.
err_console = Console(stderr=True)

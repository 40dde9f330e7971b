"""Shared rich consoles."""

from rich.console import Console
from rich.markup import escape

from gomodkit.config import is_verbose_enabled

console = Console()
err_console = Console(stderr=True)


def debug(message: str) -> None:
    """Print a dim message when verbose output is enabled."""
    if is_verbose_enabled():
        console.print(
            f"[dim]{escape(message)}[/dim]", highlight=False, emoji=False, soft_wrap=True
        )

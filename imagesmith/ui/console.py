"""
imagesmith UI - Console implementation.

Rich-based console used as the user-visible output of a build.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from rich.console import Console
from rich.markup import escape
from rich.theme import Theme

IMAGESMITH_THEME = Theme(
    {
        "info": "cyan",
        "error": "red bold",
        "step": "bold magenta",
    }
)


@runtime_checkable
class OutputSink(Protocol):
    """One-way, fire-and-forget user output."""

    def say(self, message: str) -> None:
        """Report build progress."""
        ...

    def error(self, message: str) -> None:
        """Report an error."""
        ...


class ConsoleUI:
    """
    Console user interface.

    Progress lines are prefixed with ``==> `` like a build log. Messages
    are escaped, so API errors containing brackets print verbatim.
    """

    def __init__(self, console: Console | None = None, theme: Theme | None = None) -> None:
        self.console = console or Console(theme=theme or IMAGESMITH_THEME, highlight=False)

    def say(self, message: str) -> None:
        """Display a build progress message."""
        self.console.print(f"[step]==>[/step] {escape(message)}")

    def error(self, message: str) -> None:
        """Display error message."""
        self.console.print(f"[error]{escape(message)}[/error]")

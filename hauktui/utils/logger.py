"""Logging facade — colored user-facing output behind a small fixed interface.

Every command prints through a ``Logger`` rather than a global console so
tests can hand in a ``Console(file=StringIO())`` and read back what was said.
Messages are rich markup; callers escape any untrusted text they interpolate.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

from rich.console import Console


class Logger:
    """Thin wrapper over a rich Console with info/success/warn/error/log."""

    def __init__(self, console: Console | None = None):
        self.console = console or Console(soft_wrap=True, highlight=False)

    def info(self, message: str) -> None:
        self.console.print(f"[blue]ℹ[/] {message}")

    def success(self, message: str) -> None:
        self.console.print(f"[green]✔[/] {message}")

    def warn(self, message: str) -> None:
        self.console.print(f"[yellow]⚠[/] {message}")

    def error(self, message: str) -> None:
        self.console.print(f"[red]✖[/] {message}")

    def log(self, message: str = "") -> None:
        self.console.print(message)

    def raw(self, text: str) -> None:
        """Print text verbatim, without markup parsing."""
        self.console.print(text, markup=False, highlight=False)

    def break_(self) -> None:
        self.console.print()

    @contextmanager
    def status(self, message: str) -> Iterator[None]:
        """Show a spinner while the body runs."""
        with self.console.status(message):
            yield


def highlight(text: str) -> str:
    return f"[cyan]{text}[/]"


def dim(text: str) -> str:
    return f"[dim]{text}[/]"


def bold(text: str) -> str:
    return f"[bold]{text}[/]"

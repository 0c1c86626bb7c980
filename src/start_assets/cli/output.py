"""Output utilities for CLI commands with clear intent.

user_output() is for humans and goes to stderr. machine_output() is for
results a script may consume and goes to stdout. Styling goes through an
explicit Formatter rather than module-level color state.
"""

from typing import Any

import click
from rich.console import Console

from start_assets.core.category import Category


def user_output(message: str = "", nl: bool = True) -> None:
    """Output informational message for human users (stderr)."""
    click.echo(message, err=True, nl=nl)


def machine_output(message: str = "", nl: bool = True) -> None:
    """Output structured data for machine/script consumption (stdout)."""
    click.echo(message, nl=nl)


def table_console() -> Console:
    """Console for rich tables, on stderr like user_output."""
    return Console(stderr=True, width=200, highlight=False)


_CATEGORY_COLORS = {
    Category.AGENT: "blue",
    Category.ROLE: "green",
    Category.CONTEXT: "cyan",
    Category.TASK: "magenta",
}


class Formatter:
    """Styles text with click.style. color=False returns text unchanged."""

    def __init__(self, *, color: bool = True) -> None:
        self._color = color

    def _style(self, text: str, **styles: Any) -> str:
        if not self._color:
            return text
        return click.style(text, **styles)

    def category(self, category: Category, text: str | None = None) -> str:
        label = text if text is not None else category.plural
        return self._style(label, fg=_CATEGORY_COLORS[category])

    def path(self, category: Category, name: str) -> str:
        return f"{self.category(category)}/{name}"

    def dim(self, text: str) -> str:
        return self._style(text, dim=True)

    def success(self, text: str) -> str:
        return self._style(text, fg="green")

    def warning(self, text: str) -> str:
        return self._style(text, fg="yellow")

    def error(self, text: str) -> str:
        return self._style(text, fg="red")

    def accent(self, text: str) -> str:
        return self._style(text, fg="cyan")

    def bold(self, text: str) -> str:
        return self._style(text, bold=True)

    def tags(self, tags: tuple[str, ...]) -> str:
        if not tags:
            return ""
        return self.dim("[" + ", ".join(tags) + "]")

    def warn_line(self, message: str) -> str:
        return self.warning("Warning: ") + message

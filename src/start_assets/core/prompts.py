"""Interactive prompts over explicit input and output streams."""

from typing import TextIO

import click

from start_assets.core.errors import TerminalRequiredError
from start_assets.core.selection import move_up, parse_single_selection, select_names


class Prompter:
    """Request/response prompts reading from stdin and writing to stdout.

    Streams are passed in rather than taken from the process so tests can
    script input with io.StringIO. interactive tells callers whether a user
    is attached; prompting code checks it through require_interactive().
    """

    def __init__(self, stdin: TextIO, stdout: TextIO, *, interactive: bool) -> None:
        self._stdin = stdin
        self._stdout = stdout
        self._interactive = interactive

    @property
    def interactive(self) -> bool:
        return self._interactive

    def require_interactive(self, message: str) -> None:
        """Raise TerminalRequiredError with message when no user is attached."""
        if not self._interactive:
            raise TerminalRequiredError(message)

    def _write(self, text: str, *, nl: bool = True) -> None:
        click.echo(text, file=self._stdout, nl=nl)

    def _read_line(self) -> str:
        # EOF reads as blank input, which every caller treats as cancel
        return self._stdin.readline().strip()

    def ask(self, label: str, default: str = "") -> str:
        """Ask for a line of text. Blank input returns default."""
        suffix = f" [{default}]" if default else ""
        self._write(f"{label}{suffix}: ", nl=False)
        answer = self._read_line()
        return answer if answer else default

    def confirm(self, question: str) -> bool:
        """Ask a y/N question. Anything but y or yes is a no."""
        self._write(f"{question} [y/N] ", nl=False)
        answer = self._read_line().lower()
        if answer in ("y", "yes"):
            return True
        self._write("Cancelled.")
        return False

    def _show_list(self, header: str, names: list[str]) -> None:
        self._write(header)
        self._write("")
        for i, name in enumerate(names, start=1):
            self._write(f"  {i:2d}. {name}")
        self._write("")

    def choose_many(self, names: list[str], kind: str, query: str = "") -> list[str]:
        """Show a numbered list and return the chosen names.

        Accepts numbers, ranges, "all" or a name. Returns [] on cancel.
        """
        if not names:
            return []
        if query:
            header = f"Found {len(names)} {kind}s matching {query!r}:"
        else:
            header = f"{len(names)} {kind}s:"
        self._show_list(header, names)
        self._write(f"Select 1-{len(names)} or all: ", nl=False)

        selected = select_names(self._read_line(), names, kind)
        if not selected:
            self._write("Cancelled.")
        return selected

    def choose_one(self, names: list[str], kind: str) -> str | None:
        """Show a numbered list and return one chosen name, or None on cancel."""
        if not names:
            return None
        self._show_list(f"{len(names)} {kind}s:", names)
        self._write(f"Select 1-{len(names)}: ", nl=False)

        index = parse_single_selection(self._read_line(), len(names))
        if index is None:
            self._write("Cancelled.")
            return None
        return names[index]

    def reorder(self, names: list[str], heading: str) -> list[str] | None:
        """Interactively reorder names by moving one item up at a time.

        A number moves that item up one place and the list is shown again.
        Blank input saves. q, quit, exit or end of input cancels.

        Returns:
            The new order, or None when the user cancelled
        """
        current = list(names)
        self._show_list(heading, current)
        while True:
            self._write("Move up (number), Enter to save, q to cancel: ", nl=False)
            line = self._stdin.readline()
            answer = line.strip()
            if not line or answer.lower() in ("q", "quit", "exit"):
                self._write("Cancelled.")
                return None
            if not answer:
                return current
            if not answer.isdigit():
                self._write(f"Invalid input: {answer}")
                continue
            position = int(answer)
            if position == 1:
                self._write("Already at top.")
                continue
            if position > len(current) or position < 1:
                self._write(f"Invalid number: {position} (must be 1-{len(current)})")
                continue
            current = move_up(current, position)
            self._write("")
            for i, name in enumerate(current, start=1):
                self._write(f"  {i:2d}. {name}")
            self._write("")

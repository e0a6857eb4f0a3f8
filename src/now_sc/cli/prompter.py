"""Console-backed answers for the questions the commands ask."""

from __future__ import annotations

import sys
from typing import Dict

import typer
from rich.console import Console

from .ui import select_with_arrows

MULTILINE_TERMINATOR = "."


class ConsolePrompter:
    """Ask the operator through Typer prompts and the arrow-key selector.

    Arrow-key selection needs a TTY; otherwise choices fall back to a
    numbered list so piped input keeps working.
    """

    def __init__(self, console: Console | None = None, interactive: bool | None = None):
        self.console = console or Console()
        self.interactive = sys.stdin.isatty() if interactive is None else interactive

    def ask_text(
        self,
        message: str,
        *,
        default: str | None = None,
        required_message: str | None = None,
    ) -> str:
        while True:
            value = typer.prompt(
                message,
                default=default if default is not None else "",
                show_default=bool(default),
            ).strip()
            if value or required_message is None:
                return value
            self.console.print(f"[red]{required_message}[/red]")

    def ask_multiline(self, message: str) -> str:
        self.console.print(f"[bold]{message}[/bold]")
        self.console.print(
            f"[dim]Finish with a line containing only '{MULTILINE_TERMINATOR}' (or Ctrl-D)[/dim]"
        )
        stdin = typer.get_text_stream("stdin")
        lines: list[str] = []
        while True:
            line = stdin.readline()
            if not line:
                break
            line = line.rstrip("\r\n")
            if line.strip() == MULTILINE_TERMINATOR:
                break
            lines.append(line)
        text = "\n".join(lines)
        return text if text.strip() else ""

    def confirm(self, message: str, *, default: bool = False) -> bool:
        return typer.confirm(message, default=default)

    def choose(self, message: str, options: Dict[str, str], *, default_key: str | None = None) -> str:
        if self.interactive:
            return select_with_arrows(options, message, default_key, console=self.console)

        keys = list(options)
        self.console.print(f"[bold]{message}[/bold]")
        for index, key in enumerate(keys, start=1):
            self.console.print(f"  {index}. {options[key]}", markup=False)
        default_index = keys.index(default_key) + 1 if default_key in keys else 1
        while True:
            choice = typer.prompt("Enter a number", type=int, default=default_index)
            if 1 <= choice <= len(keys):
                return keys[choice - 1]
            self.console.print(f"[red]Choose a number between 1 and {len(keys)}[/red]")


__all__ = ["ConsolePrompter", "MULTILINE_TERMINATOR"]

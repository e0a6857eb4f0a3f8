"""Uniform failure reporting for CLI commands."""

from __future__ import annotations

import sys
from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from now_sc.errors import PreconditionError


def debug_environment_panel() -> Panel:
    try:
        cwd = str(Path.cwd())
    except OSError:
        cwd = "(unavailable)"
    env_pairs = [
        ("Python", sys.version.split()[0]),
        ("Platform", sys.platform),
        ("CWD", cwd),
    ]
    label_width = max(len(k) for k, _ in env_pairs)
    env_lines = [f"{k.ljust(label_width)} → [bright_black]{v}[/bright_black]" for k, v in env_pairs]
    return Panel("\n".join(env_lines), title="Debug Environment", border_style="magenta")


def report_failure(console: Console, exc: BaseException, *, debug: bool = False) -> None:
    """Print ``Error: <message>`` plus any hint the exception carries."""
    console.print(f"[red]Error:[/red] {escape(str(exc))}", highlight=False)
    if isinstance(exc, PreconditionError) and exc.hint:
        first, *rest = exc.hint.splitlines()
        console.print(f"[yellow]{escape(first)}[/yellow]")
        for line in rest:
            console.print(f"[bright_black]{escape(line)}[/bright_black]")
    if debug:
        console.print(debug_environment_panel())


__all__ = ["debug_environment_panel", "report_failure"]

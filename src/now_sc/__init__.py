"""
Now-SC CLI - bootstrap and work presales projects for solution consultants.

Usage:
    now-sc init --name <project> --customer <customer>
    now-sc prompt
"""

from __future__ import annotations

import typer
from rich.align import Align
from rich.console import Console
from rich.text import Text
from typer.core import TyperGroup

from now_sc.cli.commands import register_init_command, register_prompt_command
from now_sc.core.config import load_env_file

__version__ = "1.0.0"

BANNER = r"""
 _   _                       ____   ____
| \ | | _____      __       / ___| / ___|
|  \| |/ _ \ \ /\ / /_____  \___ \| |
| |\  | (_) \ V  V /_____|  ___) | |___
|_| \_|\___/ \_/\_/        |____/ \____|
"""

TAGLINE = "Now-SC - presales project bootstrapper for solution consultants"

console = Console()


class BannerGroup(TyperGroup):
    """Custom group that shows banner before help."""

    def format_help(self, ctx, formatter):
        show_banner()
        super().format_help(ctx, formatter)


app = typer.Typer(
    name="now-sc",
    help="CLI tool for bootstrapping presales projects for solution consultants",
    add_completion=False,
    invoke_without_command=True,
    cls=BannerGroup,
)


def show_banner():
    """Display the ASCII art banner."""
    banner_lines = BANNER.strip("\n").split("\n")
    colors = ["bright_blue", "blue", "cyan", "bright_cyan", "white"]

    styled_banner = Text()
    for i, line in enumerate(banner_lines):
        styled_banner.append(line + "\n", style=colors[i % len(colors)])

    console.print(Align.center(styled_banner))
    console.print(Align.center(Text(TAGLINE, style="italic bright_yellow")))
    console.print()


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"now-sc {__version__}")
        raise typer.Exit()


@app.callback()
def callback(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        help="Show the version and exit",
        callback=_version_callback,
        is_eager=True,
    ),
):
    """Load ``.env`` and print help when no subcommand is given."""
    load_env_file()
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit(0)


register_init_command(app, console=console, show_banner=show_banner)
register_prompt_command(app, console=console)


def main():
    app()


if __name__ == "__main__":
    main()

"""Prompt command: run a stored template against the chat-completion API."""

from __future__ import annotations

from typing import Callable

import typer
from rich.console import Console

from now_sc.cli.failure import report_failure
from now_sc.cli.prompter import ConsolePrompter
from now_sc.core.config import Settings
from now_sc.errors import ChatCompletionError, NowScError
from now_sc.prompting import ChatClient, PromptRunner
from now_sc.remote.openrouter import OpenRouterClient


def run_prompt(
    *,
    debug: bool,
    console: Console,
    prompter_factory: Callable[[Console], ConsolePrompter] = ConsolePrompter,
    client_factory: Callable[[str], ChatClient] = OpenRouterClient,
) -> None:
    try:
        settings = Settings.from_env()
        runner = PromptRunner(
            settings,
            prompter_factory(console),
            console=console,
            client_factory=client_factory,
        )
        runner.run()
    except ChatCompletionError as exc:
        console.print("[red]✗ Failed to execute prompt[/red]")
        report_failure(console, exc, debug=debug)
        raise typer.Exit(1)
    except (NowScError, OSError, ValueError) as exc:
        report_failure(console, exc, debug=debug)
        raise typer.Exit(1)


def register_prompt_command(
    app: typer.Typer,
    *,
    console: Console,
    prompter_factory: Callable[[Console], ConsolePrompter] | None = None,
    client_factory: Callable[[str], ChatClient] | None = None,
) -> None:
    """Register the prompt command with injected dependencies."""

    @app.command("prompt")
    def prompt(
        debug: bool = typer.Option(False, "--debug", help="Show diagnostic output on failure"),
    ) -> None:
        """Execute a prompt template from the current project."""
        run_prompt(
            debug=debug,
            console=console,
            prompter_factory=prompter_factory or ConsolePrompter,
            client_factory=client_factory or OpenRouterClient,
        )


__all__ = ["register_prompt_command", "run_prompt"]

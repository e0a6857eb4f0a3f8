"""Init command implementation for now-sc."""

from __future__ import annotations

from typing import Callable

import typer
from rich.console import Console
from rich.live import Live
from rich.markup import escape
from rich.panel import Panel
from rich.tree import Tree

from now_sc.bootstrap import (
    BootstrapResult,
    RemoteRepoOutcome,
    RemoteRepoStatus,
    build_project,
    prepare_project_path,
    resolve_init_options,
)
from now_sc.cli.commands.init_help import INIT_COMMAND_DOC
from now_sc.cli.failure import report_failure
from now_sc.cli.prompter import ConsolePrompter
from now_sc.cli.ui import StepTracker
from now_sc.core.config import Settings
from now_sc.core.constants import CUSTOMERS_DIR, GITHUB_TOKEN_ENV, OPENROUTER_KEY_ENV
from now_sc.core.structure import PROJECT_SCHEMA, TOP_LEVEL_DESCRIPTIONS
from now_sc.errors import NowScError
from now_sc.remote.github import GitHubClient
from now_sc.remote.http import build_client

PUSH_HINT = 'git add . && git commit -m "Initial commit" && git push -u origin main'

GitHubFactory = Callable[[Settings, bool], GitHubClient]
PrompterFactory = Callable[[Console], ConsolePrompter]


def default_github_factory(settings: Settings, skip_tls: bool) -> GitHubClient:
    return GitHubClient(settings.github_token, client=build_client(skip_tls=skip_tls))


def _summary_tree(result: BootstrapResult, customer: str) -> Tree:
    tree = Tree(f"[cyan]{escape(str(result.project_path))}/[/cyan]", guide_style="grey50")
    for node in PROJECT_SCHEMA:
        label = f"{node.name}/"
        if node.name == CUSTOMERS_DIR:
            label = f"{node.name}/{escape(customer)}/"
        description = TOP_LEVEL_DESCRIPTIONS.get(node.name, "")
        tree.add(f"[white]{label}[/white] [bright_black]{description}[/bright_black]")
    return tree


def _print_remote_repo(console: Console, outcome: RemoteRepoOutcome) -> None:
    for note in outcome.notes:
        console.print(f"[yellow]Note:[/yellow] {note}")

    if outcome.status is RemoteRepoStatus.CREATED and outcome.repository:
        console.print("[green]GitHub repository created![/green]")
        console.print(f"[cyan]Repository URL:[/cyan] {outcome.repository.html_url}")
        console.print("[bright_black]Git initialized with remote origin set.[/bright_black]")
        console.print(f"[bright_black]To push your code: {PUSH_HINT}[/bright_black]")
    elif outcome.status is RemoteRepoStatus.DISABLED:
        console.print("[bright_black]Skipped GitHub repository creation.[/bright_black]")
    elif outcome.status is RemoteRepoStatus.NO_TOKEN:
        console.print(
            f"[yellow]Note:[/yellow] {GITHUB_TOKEN_ENV} environment variable not set. "
            "Skipping GitHub repository creation."
        )
        console.print(
            "[bright_black]To enable automatic repository creation, "
            "set your GitHub Personal Access Token:[/bright_black]"
        )
        console.print(f"[bright_black]  export {GITHUB_TOKEN_ENV}=your_token_here[/bright_black]")
    else:
        console.print(f"[red]GitHub repository creation failed:[/red] {escape(outcome.message)}")
        console.print("[yellow]You can create the repository manually later.[/yellow]")


def _next_steps_panel(project_name: str, settings: Settings) -> Panel:
    lines = [f"1. Go to the project folder: [cyan]cd {escape(project_name)}[/cyan]"]
    if settings.openrouter_api_key:
        lines.append(f"2. [green]{OPENROUTER_KEY_ENV} detected[/green]")
    else:
        lines.append(f"2. Set your [cyan]{OPENROUTER_KEY_ENV}[/cyan] environment variable")
    lines.append("3. Run [cyan]now-sc prompt[/cyan] to execute prompts")
    return Panel("\n".join(lines), title="Next Steps", border_style="cyan", padding=(1, 2))


def run_init(
    *,
    name: str | None,
    customer: str | None,
    no_github: bool,
    github_token: str | None,
    github_org: str | None,
    skip_tls: bool,
    debug: bool,
    console: Console,
    prompter_factory: PrompterFactory = ConsolePrompter,
    github_factory: GitHubFactory = default_github_factory,
) -> None:
    """Resolve options, confirm the target, then build the project under a live tracker."""
    try:
        settings = Settings.from_env(github_token=github_token, github_org=github_org)
        prompter = prompter_factory(console)
        options = resolve_init_options(name, customer, no_github=no_github, provider=prompter)
        project_path = prepare_project_path(
            options.name,
            confirm_overwrite=lambda existing: prompter.confirm(
                f"Directory {existing} already exists. Overwrite?",
                default=False,
            ),
        )
    except (NowScError, OSError, ValueError) as exc:
        report_failure(console, exc, debug=debug)
        raise typer.Exit(1)

    if project_path is None:
        console.print("[yellow]Project initialization cancelled.[/yellow]")
        return

    setup_lines = [
        "[cyan]Now-SC Project Setup[/cyan]",
        "",
        f"{'Project':<15} [green]{escape(options.name)}[/green]",
        f"{'Customer':<15} [green]{escape(options.customer)}[/green]",
        f"{'Target Path':<15} [dim]{escape(str(project_path))}[/dim]",
    ]
    console.print(Panel("\n".join(setup_lines), border_style="cyan", padding=(1, 2)))

    tracker = StepTracker("Initialize Presales Project")
    for key, label in [
        ("structure", "Create project structure"),
        ("templates", "Fetch base prompts from GitHub"),
        ("files", "Write README, .env.example, .gitignore"),
        ("github", "Create GitHub repository"),
    ]:
        tracker.add(key, label)

    failure: Exception | None = None
    result: BootstrapResult | None = None
    github = github_factory(settings, skip_tls)
    try:
        with Live(tracker.render(), console=console, refresh_per_second=8, transient=True) as live:
            tracker.attach_refresh(lambda: live.update(tracker.render()))
            try:
                result = build_project(project_path, options, settings, github=github, tracker=tracker)
            except (NowScError, OSError) as exc:
                failure = exc
    finally:
        github.close()

    console.print(tracker.render())
    if failure is not None or result is None:
        report_failure(console, failure or NowScError("Initialization failed"), debug=debug)
        raise typer.Exit(1)

    console.print(f'\n[bold green]Project "{escape(options.name)}" created successfully![/bold green]')
    if result.remote_repo is not None:
        _print_remote_repo(console, result.remote_repo)

    console.print()
    console.print("[cyan]Project structure created:[/cyan]")
    console.print(_summary_tree(result, options.customer))
    console.print()
    console.print(_next_steps_panel(options.name, settings))


def register_init_command(
    app: typer.Typer,
    *,
    console: Console,
    show_banner: Callable[[], None] | None = None,
    prompter_factory: PrompterFactory | None = None,
    github_factory: GitHubFactory | None = None,
) -> None:
    """Register the init command with injected dependencies."""

    @app.command("init", help=INIT_COMMAND_DOC)
    def init(
        name: str = typer.Option(None, "--name", "-n", help="Project name"),
        customer: str = typer.Option(None, "--customer", "-c", help="Customer name"),
        no_github: bool = typer.Option(False, "--no-github", help="Skip GitHub repository creation"),
        github_token: str = typer.Option(
            None,
            "--github-token",
            help=f"GitHub token for repository creation (or set {GITHUB_TOKEN_ENV})",
        ),
        github_org: str = typer.Option(
            None,
            "--github-org",
            help="Create the repository in this organization (falls back to your account on 403)",
        ),
        skip_tls: bool = typer.Option(False, "--skip-tls", help="Skip SSL/TLS verification (not recommended)"),
        debug: bool = typer.Option(False, "--debug", help="Show diagnostic output on failure"),
    ) -> None:
        if show_banner:
            show_banner()
        run_init(
            name=name,
            customer=customer,
            no_github=no_github,
            github_token=github_token,
            github_org=github_org,
            skip_tls=skip_tls,
            debug=debug,
            console=console,
            prompter_factory=prompter_factory or ConsolePrompter,
            github_factory=github_factory or default_github_factory,
        )


__all__ = ["default_github_factory", "register_init_command", "run_init"]

"""Interactive execution of a stored prompt template against OpenRouter."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime
from pathlib import Path
from typing import Callable, Protocol

from rich.console import Console
from rich.markup import escape
from rich.rule import Rule

from now_sc.core.config import Settings
from now_sc.core.constants import (
    DEFAULT_CUSTOM_OUTPUT_DIR,
    DEFAULT_MODEL,
    OPENROUTER_KEY_ENV,
    OUTPUT_LOCATIONS,
    PROMPT_TEMPLATES_DIR,
)
from now_sc.core.structure import resolve_within
from now_sc.errors import PreconditionError
from now_sc.remote.openrouter import OpenRouterClient
from now_sc.template.local import display_name, list_local_templates, preview, template_stem

logger = logging.getLogger(__name__)

OTHER_LOCATION = "__other__"


class Prompter(Protocol):
    def ask_text(self, message: str, *, default: str | None = None, required_message: str | None = None) -> str: ...
    def ask_multiline(self, message: str) -> str: ...
    def confirm(self, message: str, *, default: bool = False) -> bool: ...
    def choose(self, message: str, options: dict[str, str], *, default_key: str | None = None) -> str: ...


class ChatClient(Protocol):
    model: str

    def complete(self, system_prompt: str, user_input: str = "") -> str: ...
    def close(self) -> None: ...


@dataclass(frozen=True)
class ExecutionRecord:
    template_name: str
    model: str
    user_input: str
    response: str
    executed_at: datetime


def default_output_filename(template_filename: str, today: date) -> str:
    return f"{template_stem(template_filename)}_{today.isoformat()}"


def render_output_document(filename: str, record: ExecutionRecord) -> str:
    return f"""# {filename.replace("_", " ")}

**Date:** {record.executed_at.strftime("%Y-%m-%d %H:%M:%S")}
**Prompt Template:** {record.template_name}
**Model:** {record.model}

## User Input

{record.user_input}

## Response

{record.response}
"""


def save_execution_record(project_root: Path, relative_dir: str, filename: str, record: ExecutionRecord) -> Path:
    """Write the record under ``project_root/relative_dir``; same-named files are replaced.

    Targets outside *project_root* raise ``PreconditionError``.
    """
    target = resolve_within(project_root, Path(relative_dir) / f"{filename}.md")
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(render_output_document(filename, record), encoding="utf-8")
    return target


def require_api_key(settings: Settings) -> str:
    if not settings.openrouter_api_key:
        raise PreconditionError(
            f"{OPENROUTER_KEY_ENV} environment variable is not set",
            hint=f"Please set your OpenRouter API key:\n  export {OPENROUTER_KEY_ENV}=your_api_key_here",
        )
    return settings.openrouter_api_key


def require_templates(project_root: Path) -> tuple[Path, list[str]]:
    templates_dir = project_root / PROMPT_TEMPLATES_DIR
    if not templates_dir.is_dir():
        raise PreconditionError(
            "No prompt templates directory found in current directory",
            hint='Make sure you are in a project created with "now-sc init"',
        )
    filenames = list_local_templates(templates_dir)
    if not filenames:
        raise PreconditionError("No prompt templates found")
    return templates_dir, filenames


class PromptRunner:
    """Linear prompt flow: pick, preview, ask, execute, show, optionally save."""

    def __init__(
        self,
        settings: Settings,
        prompter: Prompter,
        *,
        console: Console | None = None,
        cwd: Path | None = None,
        client_factory: Callable[[str], ChatClient] = OpenRouterClient,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.settings = settings
        self.prompter = prompter
        self.console = console or Console()
        self.project_root = cwd or Path.cwd()
        self.client_factory = client_factory
        self.clock = clock

    def run(self) -> Path | None:
        """Return the saved document path, or None when the operator does not save."""
        api_key = require_api_key(self.settings)
        templates_dir, filenames = require_templates(self.project_root)

        selected = self.prompter.choose(
            "Select a prompt template:",
            {filename: display_name(filename) for filename in filenames},
        )
        content = (templates_dir / selected).read_text(encoding="utf-8")

        self._show_block("Prompt Preview:", preview(content))

        user_input = self.prompter.ask_multiline("Enter your input for this prompt:")

        client = self.client_factory(api_key)
        logger.debug("Executing template %s", selected)
        try:
            with self.console.status("Executing prompt..."):
                response = client.complete(content, user_input)
        finally:
            client.close()
        self.console.print("[green]✓ Prompt executed successfully![/green]")

        self._show_block("Response:", response)

        record = ExecutionRecord(
            template_name=selected,
            model=getattr(client, "model", DEFAULT_MODEL),
            user_input=user_input,
            response=response,
            executed_at=self.clock(),
        )

        if not self.prompter.confirm("Would you like to save this output?", default=True):
            return None
        return self._save(record)

    def _save(self, record: ExecutionRecord) -> Path:
        choices = {path: f"{label} ({path})" for label, path in OUTPUT_LOCATIONS.items()}
        choices[OTHER_LOCATION] = "Other (specify)"
        while True:
            location, filename = self._ask_destination(record, choices)
            try:
                saved = save_execution_record(self.project_root, location, filename, record)
            except PreconditionError as exc:
                self.console.print(f"[red]{escape(str(exc))}[/red]")
                continue
            break
        self.console.print(f"[green]✓ Output saved to:[/green] {saved}")
        return saved

    def _ask_destination(self, record: ExecutionRecord, choices: dict[str, str]) -> tuple[str, str]:
        location = self.prompter.choose("Where would you like to save the output?", choices)
        if location == OTHER_LOCATION:
            location = self.prompter.ask_text(
                "Enter the path (relative to project root):",
                default=DEFAULT_CUSTOM_OUTPUT_DIR,
            )

        filename = self.prompter.ask_text(
            "Enter filename (without extension):",
            default=default_output_filename(record.template_name, record.executed_at.date()),
            required_message="Filename is required",
        )
        return location, filename

    def _show_block(self, title: str, body: str) -> None:
        self.console.print()
        self.console.print(f"[cyan]{title}[/cyan]")
        self.console.print(Rule(style="bright_black"))
        self.console.print(body, markup=False, highlight=False)
        self.console.print(Rule(style="bright_black"))


__all__ = [
    "ExecutionRecord",
    "OTHER_LOCATION",
    "PromptRunner",
    "default_output_filename",
    "render_output_document",
    "require_api_key",
    "require_templates",
    "save_execution_record",
]

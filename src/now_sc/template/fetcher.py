"""Remote prompt template listing, download and persistence."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from now_sc.core.constants import (
    DEFAULT_TEMPLATE_FOLDER,
    DEFAULT_TEMPLATE_REPO,
    PROMPT_TEMPLATES_DIR,
    TEMPLATE_SUFFIX,
)
from now_sc.core.config import parse_repo_slug
from now_sc.errors import GitHubApiError, TemplateFetchError
from now_sc.remote.github import GitHubClient

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Template:
    """A prompt template: filename (with ``.md``) and raw text."""

    name: str
    content: str


def is_template_entry(entry: dict) -> bool:
    name = entry.get("name")
    return entry.get("type") == "file" and isinstance(name, str) and name.endswith(TEMPLATE_SUFFIX)


def list_templates(
    github: GitHubClient,
    repo: str = DEFAULT_TEMPLATE_REPO,
    folder: str = DEFAULT_TEMPLATE_FOLDER,
) -> list[Template]:
    """Fetch every markdown file in *folder* of *repo*, sorted by name.

    Any failure aborts the whole fetch; no partial list is returned.
    """
    owner, name = parse_repo_slug(repo)
    try:
        entries = github.list_directory(owner, name, folder)
        matching = sorted(
            (entry for entry in entries if is_template_entry(entry)),
            key=lambda entry: entry["name"],
        )
        templates: list[Template] = []
        for entry in matching:
            download_url = entry.get("download_url")
            if not download_url:
                raise GitHubApiError(f"No download URL for {entry['name']}")
            templates.append(Template(name=entry["name"], content=github.download_text(download_url)))
    except GitHubApiError as exc:
        raise TemplateFetchError(
            f"Failed to fetch prompts from GitHub: {exc}",
            status_code=exc.status_code,
        ) from exc

    logger.debug("Fetched %d template(s) from %s/%s", len(templates), repo, folder)
    return templates


def persist_templates(project_path: Path, templates: list[Template]) -> list[Path]:
    """Write each template verbatim into the prompt templates folder, overwriting."""
    target_dir = project_path / PROMPT_TEMPLATES_DIR
    target_dir.mkdir(parents=True, exist_ok=True)
    written: list[Path] = []
    for template in templates:
        target = target_dir / template.name
        # newline="" keeps line endings byte-identical to the source
        with open(target, "w", encoding="utf-8", newline="") as handle:
            handle.write(template.content)
        written.append(target)
    return written


__all__ = ["Template", "is_template_entry", "list_templates", "persist_templates"]

"""Environment-backed settings for now-sc commands."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

from dotenv import load_dotenv

from now_sc.core.constants import (
    DEFAULT_TEMPLATE_FOLDER,
    DEFAULT_TEMPLATE_REPO,
    GITHUB_ORG_ENV,
    GITHUB_TOKEN_ENV,
    OPENROUTER_KEY_ENV,
    TEMPLATE_FOLDER_ENV,
    TEMPLATE_REPO_ENV,
)

logger = logging.getLogger(__name__)


def _clean(value: str | None) -> str | None:
    """Return a stripped value, or None when it is missing or blank."""
    return (value or "").strip() or None


def parse_repo_slug(slug: str) -> tuple[str, str]:
    parts = slug.strip().split("/")
    if len(parts) != 2 or not all(parts):
        raise ValueError(f"Invalid GitHub repo slug '{slug}'. Expected format owner/name")
    return parts[0], parts[1]


def load_env_file(directory: Path | None = None) -> bool:
    """Load ``.env`` from *directory* (default: cwd) without overriding the environment."""
    env_path = (directory or Path.cwd()) / ".env"
    if not env_path.is_file():
        return False
    logger.debug("Loading environment from %s", env_path)
    return load_dotenv(env_path, override=False)


@dataclass(frozen=True)
class Settings:
    """Credentials and remote locations for one command invocation."""

    openrouter_api_key: str | None = None
    github_token: str | None = None
    github_org: str | None = None
    template_repo: str = DEFAULT_TEMPLATE_REPO
    template_folder: str = DEFAULT_TEMPLATE_FOLDER

    @classmethod
    def from_env(
        cls,
        environ: Mapping[str, str] | None = None,
        *,
        github_token: str | None = None,
        github_org: str | None = None,
    ) -> "Settings":
        """Build settings from the environment; explicit arguments take precedence."""
        env = os.environ if environ is None else environ
        template_repo = _clean(env.get(TEMPLATE_REPO_ENV)) or DEFAULT_TEMPLATE_REPO
        parse_repo_slug(template_repo)
        return cls(
            openrouter_api_key=_clean(env.get(OPENROUTER_KEY_ENV)),
            github_token=_clean(github_token) or _clean(env.get(GITHUB_TOKEN_ENV)),
            github_org=_clean(github_org) or _clean(env.get(GITHUB_ORG_ENV)),
            template_repo=template_repo,
            template_folder=(_clean(env.get(TEMPLATE_FOLDER_ENV)) or DEFAULT_TEMPLATE_FOLDER).strip("/"),
        )


__all__ = ["Settings", "load_env_file", "parse_repo_slug"]

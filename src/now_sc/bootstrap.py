"""Project bootstrap: folders, templates, generated files and the optional GitHub repo."""

from __future__ import annotations

import logging
import re
import shutil
from contextlib import contextmanager
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Callable, Iterator, Protocol

from now_sc.core.config import Settings
from now_sc.core.constants import DEFAULT_PROJECT_NAME
from now_sc.core.git import check_git_available, init_repo_with_remote
from now_sc.core.project_files import write_project_files
from now_sc.core.structure import PROJECT_SCHEMA, materialize, resolve_within
from now_sc.errors import GitHubApiError, NowScError, PreconditionError
from now_sc.remote.github import GitHubClient, RemoteRepository
from now_sc.template.fetcher import Template, list_templates, persist_templates

logger = logging.getLogger(__name__)

_REPO_NAME_DISALLOWED = re.compile(r"[^A-Za-z0-9_-]")

__all__ = [
    "BootstrapResult",
    "InitOptions",
    "RemoteRepoOutcome",
    "RemoteRepoStatus",
    "bootstrap",
    "build_project",
    "create_remote_repository",
    "prepare_project_path",
    "repo_description",
    "resolve_init_options",
    "sanitize_repo_name",
]


class ValueProvider(Protocol):
    def ask_text(self, message: str, *, default: str | None = None, required_message: str | None = None) -> str:
        ...


class _Tracker(Protocol):
    def start(self, key: str, detail: str = "") -> None: ...
    def complete(self, key: str, detail: str = "") -> None: ...
    def error(self, key: str, detail: str = "") -> None: ...
    def skip(self, key: str, detail: str = "") -> None: ...


@dataclass(frozen=True)
class InitOptions:
    name: str
    customer: str
    create_remote_repo: bool = True


def resolve_init_options(
    name: str | None,
    customer: str | None,
    *,
    no_github: bool,
    provider: ValueProvider,
) -> InitOptions:
    """Fill in whatever the command line left out by asking *provider*."""
    resolved_name = (name or "").strip() or provider.ask_text(
        "What is the project name?",
        default=DEFAULT_PROJECT_NAME,
    )
    resolved_customer = (customer or "").strip() or provider.ask_text(
        "What is the customer name?",
        required_message="Customer name is required",
    )
    return InitOptions(
        name=resolved_name,
        customer=resolved_customer,
        create_remote_repo=not no_github,
    )


def sanitize_repo_name(project_name: str) -> str:
    """Replace every character GitHub would reject with ``-``."""
    return _REPO_NAME_DISALLOWED.sub("-", project_name)


def repo_description(customer_name: str) -> str:
    return f"Presales project for {customer_name}"


class RemoteRepoStatus(str, Enum):
    CREATED = "created"
    DISABLED = "disabled"
    NO_TOKEN = "no_token"
    FAILED = "failed"


@dataclass
class RemoteRepoOutcome:
    """What happened to the optional GitHub repository step."""

    status: RemoteRepoStatus
    repository: RemoteRepository | None = None
    message: str = ""
    notes: list[str] = field(default_factory=list)

    @property
    def created(self) -> bool:
        return self.status is RemoteRepoStatus.CREATED


@dataclass
class BootstrapResult:
    project_path: Path
    cancelled: bool = False
    templates: list[Template] = field(default_factory=list)
    files: list[Path] = field(default_factory=list)
    remote_repo: RemoteRepoOutcome | None = None


@contextmanager
def _tracked(tracker: _Tracker | None, key: str, detail: str = "") -> Iterator[None]:
    if tracker:
        tracker.start(key, detail)
    try:
        yield
    except Exception as exc:
        if tracker:
            tracker.error(key, str(exc))
        raise


def prepare_project_path(
    name: str,
    *,
    confirm_overwrite: Callable[[str], bool],
    cwd: Path | None = None,
) -> Path | None:
    """Return ``<cwd>/<name>`` ready to be created, or None if the operator declined.

    The project must be a folder strictly inside *cwd*; absolute names and
    ``..`` escapes raise ``PreconditionError`` before anything is touched.
    An existing folder is only removed after *confirm_overwrite* agrees.
    """
    base_path = cwd or Path.cwd()
    try:
        project_path = resolve_within(base_path, name)
    except PreconditionError as exc:
        raise PreconditionError(f"Invalid project name: {exc}") from exc
    if project_path.resolve() == base_path.resolve():
        raise PreconditionError(f'Invalid project name "{name}": it names the current directory')
    if project_path.exists():
        if not confirm_overwrite(name):
            logger.debug("Operator declined to overwrite %s", project_path)
            return None
        logger.debug("Removing existing %s", project_path)
        if project_path.is_dir() and not project_path.is_symlink():
            shutil.rmtree(project_path)
        else:
            project_path.unlink()
    return project_path


def create_remote_repository(
    project_path: Path,
    options: InitOptions,
    settings: Settings,
    *,
    github: GitHubClient | None = None,
    git_init: Callable[[Path, str], None] = init_repo_with_remote,
) -> RemoteRepoOutcome:
    """Create the private GitHub repo and point local git at it.

    Never raises for remote or git failures; those come back as ``FAILED``.
    """
    if not options.create_remote_repo:
        return RemoteRepoOutcome(RemoteRepoStatus.DISABLED)
    if not settings.github_token:
        return RemoteRepoOutcome(RemoteRepoStatus.NO_TOKEN)
    if not check_git_available():
        return RemoteRepoOutcome(RemoteRepoStatus.FAILED, message="git executable not found on PATH")

    client = github or GitHubClient(settings.github_token)
    repo_name = sanitize_repo_name(options.name)
    description = repo_description(options.customer)
    notes: list[str] = []
    try:
        login = client.get_authenticated_user()
        if settings.github_org:
            try:
                repository = client.create_repository(repo_name, description, org=settings.github_org)
            except GitHubApiError as exc:
                if exc.status_code != 403:
                    raise
                notes.append(
                    f"Cannot create in {settings.github_org} organization. "
                    f"Creating in your personal account ({login}) instead..."
                )
                repository = client.create_repository(repo_name, description)
        else:
            repository = client.create_repository(repo_name, description)
        git_init(project_path, repository.clone_url)
    except NowScError as exc:
        logger.warning("GitHub repository creation failed: %s", exc)
        return RemoteRepoOutcome(RemoteRepoStatus.FAILED, message=str(exc), notes=notes)

    return RemoteRepoOutcome(RemoteRepoStatus.CREATED, repository=repository, notes=notes)


def build_project(
    project_path: Path,
    options: InitOptions,
    settings: Settings,
    *,
    github: GitHubClient | None = None,
    tracker: _Tracker | None = None,
    git_init: Callable[[Path, str], None] = init_repo_with_remote,
) -> BootstrapResult:
    """Run every bootstrap step after the target path has been cleared.

    Steps run in order and a failure stops the rest; finished work stays on disk.
    """
    client = github or GitHubClient(settings.github_token)
    result = BootstrapResult(project_path=project_path)

    with _tracked(tracker, "structure"):
        project_path.mkdir(parents=True, exist_ok=True)
        materialize(project_path, PROJECT_SCHEMA, options.customer)
    if tracker:
        tracker.complete("structure", f"customer {options.customer}")

    with _tracked(tracker, "templates", settings.template_repo):
        result.templates = list_templates(client, settings.template_repo, settings.template_folder)
        persist_templates(project_path, result.templates)
    if tracker:
        tracker.complete("templates", f"{len(result.templates)} template(s)")

    with _tracked(tracker, "files"):
        result.files = write_project_files(project_path, options.name, options.customer)
    if tracker:
        tracker.complete("files", ", ".join(path.name for path in result.files))

    if tracker:
        tracker.start("github")
    result.remote_repo = create_remote_repository(
        project_path,
        options,
        settings,
        github=client,
        git_init=git_init,
    )
    if tracker:
        _report_remote_repo(tracker, result.remote_repo)
    return result


def _report_remote_repo(tracker: _Tracker, outcome: RemoteRepoOutcome) -> None:
    if outcome.status is RemoteRepoStatus.CREATED and outcome.repository:
        tracker.complete("github", outcome.repository.name)
    elif outcome.status is RemoteRepoStatus.DISABLED:
        tracker.skip("github", "--no-github flag")
    elif outcome.status is RemoteRepoStatus.NO_TOKEN:
        tracker.skip("github", "no GitHub token")
    else:
        tracker.error("github", outcome.message)


def bootstrap(
    options: InitOptions,
    *,
    settings: Settings,
    confirm_overwrite: Callable[[str], bool],
    cwd: Path | None = None,
    github: GitHubClient | None = None,
    tracker: _Tracker | None = None,
    git_init: Callable[[Path, str], None] = init_repo_with_remote,
) -> BootstrapResult:
    """Create a project end to end; returns a cancelled result if overwrite is declined."""
    project_path = prepare_project_path(options.name, confirm_overwrite=confirm_overwrite, cwd=cwd)
    if project_path is None:
        return BootstrapResult(project_path=(cwd or Path.cwd()) / options.name, cancelled=True)
    return build_project(
        project_path,
        options,
        settings,
        github=github,
        tracker=tracker,
        git_init=git_init,
    )

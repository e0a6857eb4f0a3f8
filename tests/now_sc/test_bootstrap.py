from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock

import pytest

from now_sc import bootstrap as bootstrap_module
from now_sc.bootstrap import (
    InitOptions,
    RemoteRepoStatus,
    bootstrap,
    create_remote_repository,
    prepare_project_path,
    repo_description,
    resolve_init_options,
    sanitize_repo_name,
)
from now_sc.cli.ui import StepTracker
from now_sc.core.config import Settings
from now_sc.errors import GitCommandError, GitHubApiError, PreconditionError, TemplateFetchError
from now_sc.remote.github import RemoteRepository
from now_sc.template.fetcher import Template

REPO = RemoteRepository(
    name="octo/Acme-Demo",
    clone_url="https://github.com/octo/Acme-Demo.git",
    html_url="https://github.com/octo/Acme-Demo",
)


@pytest.fixture(autouse=True)
def git_on_path(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setattr(bootstrap_module, "check_git_available", lambda: True)


@pytest.fixture()
def github() -> MagicMock:
    client = MagicMock()
    client.get_authenticated_user.return_value = "octo"
    client.create_repository.return_value = REPO
    return client


@pytest.fixture()
def templates(monkeypatch: pytest.MonkeyPatch) -> list[Template]:
    fetched = [Template("A.md", "# A\n"), Template("C.md", "# C\n")]
    monkeypatch.setattr(bootstrap_module, "list_templates", lambda client, repo, folder: list(fetched))
    return fetched


def test_sanitize_repo_name_replaces_disallowed_characters():
    assert sanitize_repo_name("Acme Demo!") == "Acme-Demo-"
    assert sanitize_repo_name("ok_name-1") == "ok_name-1"
    assert repo_description("Acme") == "Presales project for Acme"


def test_resolve_init_options_asks_only_for_missing_values(scripted_prompter):
    prompter = scripted_prompter(texts=["Acme"])

    options = resolve_init_options("demo", None, no_github=True, provider=prompter)

    assert options == InitOptions(name="demo", customer="Acme", create_remote_repo=False)
    assert prompter.asked == ["What is the customer name?"]


def test_resolve_init_options_uses_default_project_name(scripted_prompter):
    prompter = scripted_prompter(texts=["", "Acme"])

    options = resolve_init_options(None, None, no_github=False, provider=prompter)

    assert options.name == "presales-project"
    assert options.create_remote_repo is True


def test_prepare_project_path_declined_leaves_folder(tmp_path: Path):
    existing = tmp_path / "demo"
    existing.mkdir()
    (existing / "keep.txt").write_text("x", encoding="utf-8")

    assert prepare_project_path("demo", confirm_overwrite=lambda name: False, cwd=tmp_path) is None
    assert (existing / "keep.txt").exists()


def test_prepare_project_path_confirmed_removes_folder(tmp_path: Path):
    existing = tmp_path / "demo"
    existing.mkdir()
    (existing / "stale.txt").write_text("x", encoding="utf-8")

    path = prepare_project_path("demo", confirm_overwrite=lambda name: True, cwd=tmp_path)

    assert path == existing
    assert not existing.exists()


def test_prepare_project_path_rejects_absolute_name(tmp_path: Path):
    work = tmp_path / "work"
    work.mkdir()
    victim = tmp_path / "victim"
    victim.mkdir()
    (victim / "keep.txt").write_text("x", encoding="utf-8")
    asked: list[str] = []

    with pytest.raises(PreconditionError, match="Invalid project name"):
        prepare_project_path(str(victim), confirm_overwrite=lambda name: asked.append(name) or True, cwd=work)

    assert (victim / "keep.txt").exists()
    assert asked == []


@pytest.mark.parametrize("name", ["../victim", "demo/../../victim", ".", "demo/.."])
def test_prepare_project_path_rejects_names_escaping_cwd(tmp_path: Path, name: str):
    work = tmp_path / "work"
    work.mkdir()
    (tmp_path / "victim").mkdir()

    with pytest.raises(PreconditionError, match="Invalid project name"):
        prepare_project_path(name, confirm_overwrite=lambda _: True, cwd=work)

    assert (tmp_path / "victim").is_dir()
    assert work.is_dir()


def test_bootstrap_without_github_builds_everything(tmp_path: Path, templates, github):
    tracker = StepTracker("Init")
    for key in ["structure", "templates", "files", "github"]:
        tracker.add(key, key)

    result = bootstrap(
        InitOptions("demo", "Acme", create_remote_repo=False),
        settings=Settings(),
        confirm_overwrite=lambda name: True,
        cwd=tmp_path,
        github=github,
        tracker=tracker,
    )

    project = tmp_path / "demo"
    assert result.project_path == project
    assert (project / "01_Customers" / "Acme").is_dir()
    assert sorted(p.name for p in (project / "10_PromptTemplates").iterdir()) == ["A.md", "C.md"]
    assert (project / "README.md").is_file()
    assert not (project / ".git").exists()
    assert result.remote_repo.status is RemoteRepoStatus.DISABLED
    assert tracker.status_of("templates") == "done"
    assert tracker.status_of("github") == "skipped"
    github.create_repository.assert_not_called()


def test_bootstrap_cancelled_when_overwrite_declined(tmp_path: Path, github):
    (tmp_path / "demo").mkdir()

    result = bootstrap(
        InitOptions("demo", "Acme"),
        settings=Settings(github_token="t"),
        confirm_overwrite=lambda name: False,
        cwd=tmp_path,
        github=github,
    )

    assert result.cancelled is True
    assert list((tmp_path / "demo").iterdir()) == []
    github.get_authenticated_user.assert_not_called()


def test_template_failure_stops_later_steps(tmp_path: Path, monkeypatch: pytest.MonkeyPatch, github):
    def failing(client, repo, folder):
        raise TemplateFetchError("Failed to fetch prompts from GitHub: boom")

    monkeypatch.setattr(bootstrap_module, "list_templates", failing)
    tracker = StepTracker("Init")

    with pytest.raises(TemplateFetchError):
        bootstrap(
            InitOptions("demo", "Acme"),
            settings=Settings(github_token="t"),
            confirm_overwrite=lambda name: True,
            cwd=tmp_path,
            github=github,
            tracker=tracker,
        )

    assert (tmp_path / "demo" / "01_Customers" / "Acme").is_dir()
    assert not (tmp_path / "demo" / "README.md").exists()
    assert tracker.status_of("templates") == "error"
    github.create_repository.assert_not_called()


def test_remote_repo_without_token(tmp_path: Path, github):
    outcome = create_remote_repository(tmp_path, InitOptions("demo", "Acme"), Settings(), github=github)

    assert outcome.status is RemoteRepoStatus.NO_TOKEN
    github.get_authenticated_user.assert_not_called()


def test_remote_repo_created_with_sanitized_name(tmp_path: Path, github):
    calls: list[tuple[Path, str]] = []

    outcome = create_remote_repository(
        tmp_path,
        InitOptions("Acme Demo", "Acme Corp"),
        Settings(github_token="t"),
        github=github,
        git_init=lambda path, url: calls.append((path, url)),
    )

    assert outcome.created
    assert outcome.repository == REPO
    github.create_repository.assert_called_once_with("Acme-Demo", "Presales project for Acme Corp")
    assert calls == [(tmp_path, REPO.clone_url)]


def test_remote_repo_org_forbidden_falls_back_to_user(tmp_path: Path, github):
    github.create_repository.side_effect = [GitHubApiError("Forbidden", status_code=403), REPO]

    outcome = create_remote_repository(
        tmp_path,
        InitOptions("demo", "Acme"),
        Settings(github_token="t", github_org="acme"),
        github=github,
        git_init=lambda path, url: None,
    )

    assert outcome.created
    assert github.create_repository.call_args_list[0].kwargs == {"org": "acme"}
    assert github.create_repository.call_args_list[1].kwargs == {}
    assert "personal account (octo)" in outcome.notes[0]


def test_remote_repo_conflict_is_reported_not_raised(tmp_path: Path, github):
    github.create_repository.side_effect = GitHubApiError(
        'Repository "demo" already exists on GitHub', status_code=422
    )

    outcome = create_remote_repository(
        tmp_path,
        InitOptions("demo", "Acme"),
        Settings(github_token="t", github_org="acme"),
        github=github,
        git_init=lambda path, url: None,
    )

    assert outcome.status is RemoteRepoStatus.FAILED
    assert "already exists" in outcome.message
    assert github.create_repository.call_count == 1


def test_remote_repo_git_failure_is_reported(tmp_path: Path, github):
    def failing_git(path, url):
        raise GitCommandError(["init"], 1, "fatal: nope")

    outcome = create_remote_repository(
        tmp_path,
        InitOptions("demo", "Acme"),
        Settings(github_token="t"),
        github=github,
        git_init=failing_git,
    )

    assert outcome.status is RemoteRepoStatus.FAILED
    assert "fatal: nope" in outcome.message


def test_remote_repo_without_git_binary(tmp_path: Path, github, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setattr(bootstrap_module, "check_git_available", lambda: False)

    outcome = create_remote_repository(tmp_path, InitOptions("demo", "Acme"), Settings(github_token="t"), github=github)

    assert outcome.status is RemoteRepoStatus.FAILED
    github.create_repository.assert_not_called()


def test_project_and_customer_names_diverge(tmp_path: Path, templates, github):
    result = bootstrap(
        InitOptions("Acme Demo", "Acme & Co. (EMEA)", create_remote_repo=True),
        settings=Settings(github_token="t"),
        confirm_overwrite=lambda name: True,
        cwd=tmp_path,
        github=github,
        git_init=lambda path, url: None,
    )

    assert result.remote_repo.created
    # Folder names keep the raw input; only the repository name is sanitized.
    assert (tmp_path / "Acme Demo" / "01_Customers" / "Acme & Co. (EMEA)").is_dir()
    github.create_repository.assert_called_once_with("Acme-Demo", "Presales project for Acme & Co. (EMEA)")

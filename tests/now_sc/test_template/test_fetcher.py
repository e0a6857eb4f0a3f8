from __future__ import annotations

from pathlib import Path

import httpx
import pytest

from now_sc.errors import TemplateFetchError
from now_sc.remote.github import GitHubClient
from now_sc.template.fetcher import Template, list_templates, persist_templates

RAW = "https://raw.githubusercontent.com/Now-AI-Foundry/Now-SC-Base-Prompts/main/Prompts"

BODIES = {
    "Discovery_Call.md": "# Discovery\r\nAsk about pain points.\r\n",
    "Account_Plan.md": "# Account plan\n\n- stakeholders\n",
}


def _listing() -> list[dict]:
    entries = [
        {"name": name, "type": "file", "download_url": f"{RAW}/{name}"}
        for name in BODIES
    ]
    entries.append({"name": "notes.txt", "type": "file", "download_url": f"{RAW}/notes.txt"})
    entries.append({"name": "Archive.md", "type": "dir", "download_url": None})
    return entries


def _handler(json_response, downloads: list[str]):
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.host == "api.github.com":
            assert request.url.path == "/repos/Now-AI-Foundry/Now-SC-Base-Prompts/contents/Prompts"
            return json_response(200, _listing())
        name = request.url.path.rsplit("/", 1)[-1]
        downloads.append(name)
        return httpx.Response(200, content=BODIES[name].encode("utf-8"))

    return handler


def test_list_templates_keeps_only_markdown_files_sorted(mock_http, json_response):
    downloads: list[str] = []
    github = GitHubClient(client=mock_http(_handler(json_response, downloads)))

    templates = list_templates(github)

    assert [template.name for template in templates] == ["Account_Plan.md", "Discovery_Call.md"]
    assert sorted(downloads) == ["Account_Plan.md", "Discovery_Call.md"]
    assert templates[1].content == BODIES["Discovery_Call.md"]


def test_persisted_templates_are_byte_identical(tmp_path: Path, mock_http, json_response):
    github = GitHubClient(client=mock_http(_handler(json_response, [])))

    written = persist_templates(tmp_path, list_templates(github))

    assert {path.name for path in written} == set(BODIES)
    for name, body in BODIES.items():
        assert (tmp_path / "10_PromptTemplates" / name).read_bytes() == body.encode("utf-8")
    assert not (tmp_path / "10_PromptTemplates" / "notes.txt").exists()


def test_persist_overwrites_existing_template(tmp_path: Path):
    target = tmp_path / "10_PromptTemplates" / "A.md"
    target.parent.mkdir(parents=True)
    target.write_text("old", encoding="utf-8")

    persist_templates(tmp_path, [Template("A.md", "new")])

    assert target.read_text(encoding="utf-8") == "new"


def test_listing_failure_aborts_fetch(mock_http, json_response):
    github = GitHubClient(client=mock_http(lambda request: json_response(403, {"message": "rate limited"})))

    with pytest.raises(TemplateFetchError, match="Failed to fetch prompts from GitHub") as excinfo:
        list_templates(github)

    assert excinfo.value.status_code == 403


def test_single_download_failure_aborts_everything(mock_http, json_response):
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.host == "api.github.com":
            return json_response(200, _listing())
        if request.url.path.endswith("Discovery_Call.md"):
            return httpx.Response(500)
        return httpx.Response(200, content=b"ok")

    github = GitHubClient(client=mock_http(handler))

    with pytest.raises(TemplateFetchError, match="Download failed with status 500"):
        list_templates(github)


def test_empty_listing_returns_no_templates(mock_http, json_response):
    github = GitHubClient(client=mock_http(lambda request: json_response(200, [])))

    assert list_templates(github) == []

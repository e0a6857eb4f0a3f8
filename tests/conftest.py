from __future__ import annotations

import io
import json
from typing import Callable, Iterator

import httpx
import pytest
from rich.console import Console

from now_sc.core.constants import (
    GITHUB_ORG_ENV,
    GITHUB_TOKEN_ENV,
    OPENROUTER_KEY_ENV,
    TEMPLATE_FOLDER_ENV,
    TEMPLATE_REPO_ENV,
)

_ENV_NAMES = (
    OPENROUTER_KEY_ENV,
    GITHUB_TOKEN_ENV,
    GITHUB_ORG_ENV,
    TEMPLATE_REPO_ENV,
    TEMPLATE_FOLDER_ENV,
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Keep the developer's real credentials out of every test."""
    for name in _ENV_NAMES:
        monkeypatch.delenv(name, raising=False)
    yield


@pytest.fixture()
def console() -> Console:
    return Console(file=io.StringIO(), force_terminal=False, width=200)


class ScriptedPrompter:
    """Answers prompts from queues and records every question asked."""

    def __init__(
        self,
        *,
        texts: list[str] | None = None,
        multiline: list[str] | None = None,
        confirms: list[bool] | None = None,
        choices: list[str] | None = None,
    ) -> None:
        self.texts = list(texts or [])
        self.multiline = list(multiline or [])
        self.confirms = list(confirms or [])
        self.choices = list(choices or [])
        self.asked: list[str] = []
        self.offered: list[dict[str, str]] = []

    def ask_text(self, message, *, default=None, required_message=None):
        self.asked.append(message)
        value = self.texts.pop(0)
        return value or (default or "")

    def ask_multiline(self, message):
        self.asked.append(message)
        return self.multiline.pop(0)

    def confirm(self, message, *, default=False):
        self.asked.append(message)
        return self.confirms.pop(0)

    def choose(self, message, options, *, default_key=None):
        self.asked.append(message)
        self.offered.append(dict(options))
        choice = self.choices.pop(0)
        assert choice in options, f"{choice!r} not offered in {list(options)}"
        return choice


@pytest.fixture()
def scripted_prompter() -> type[ScriptedPrompter]:
    return ScriptedPrompter


def _json_response(status_code: int, payload: object) -> httpx.Response:
    return httpx.Response(
        status_code,
        content=json.dumps(payload).encode("utf-8"),
        headers={"Content-Type": "application/json"},
    )


@pytest.fixture()
def json_response() -> Callable[[int, object], httpx.Response]:
    return _json_response


@pytest.fixture()
def mock_http() -> Callable[[Callable[[httpx.Request], httpx.Response]], httpx.Client]:
    """Build an ``httpx.Client`` whose requests go to *handler*."""

    def factory(handler: Callable[[httpx.Request], httpx.Response]) -> httpx.Client:
        return httpx.Client(transport=httpx.MockTransport(handler))

    return factory

"""OpenRouter chat-completion client."""

from __future__ import annotations

import logging

import httpx

from now_sc.core.constants import (
    APP_REFERER,
    APP_TITLE,
    DEFAULT_MODEL,
    DEFAULT_USER_INPUT,
    OPENROUTER_API_URL,
)
from now_sc.errors import ChatCompletionError
from now_sc.remote.http import build_client, error_detail

logger = logging.getLogger(__name__)

CHAT_TIMEOUT = 120


def build_messages(system_prompt: str, user_input: str) -> list[dict[str, str]]:
    """System message carries the full template; empty input gets a default phrase."""
    return [
        {"role": "system", "content": system_prompt},
        {"role": "user", "content": user_input or DEFAULT_USER_INPUT},
    ]


class OpenRouterClient:
    def __init__(
        self,
        api_key: str,
        *,
        model: str = DEFAULT_MODEL,
        client: httpx.Client | None = None,
        api_url: str = OPENROUTER_API_URL,
    ) -> None:
        self.api_key = api_key
        self.model = model
        self.api_url = api_url
        self._client = client or build_client()

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
            "HTTP-Referer": APP_REFERER,
            "X-Title": APP_TITLE,
        }

    def complete(self, system_prompt: str, user_input: str = "") -> str:
        """Send one system+user exchange and return the first completion text."""
        body = {"model": self.model, "messages": build_messages(system_prompt, user_input)}
        logger.debug("POST %s model=%s", self.api_url, self.model)
        try:
            response = self._client.post(
                self.api_url,
                json=body,
                headers=self._headers(),
                timeout=CHAT_TIMEOUT,
            )
        except httpx.HTTPError as exc:
            raise ChatCompletionError(f"Failed to execute prompt: {exc}") from exc

        if not response.is_success:
            raise ChatCompletionError(
                f"OpenRouter API error: {error_detail(response)}",
                status_code=response.status_code,
            )

        try:
            payload = response.json()
        except ValueError as exc:
            raise ChatCompletionError(f"Failed to execute prompt: invalid JSON response ({exc})") from exc

        choices = payload.get("choices") or []
        if not choices:
            raise ChatCompletionError("No response from API")
        content = (choices[0].get("message") or {}).get("content")
        if content is None:
            raise ChatCompletionError("No response from API")
        return str(content)

    def close(self) -> None:
        self._client.close()


__all__ = ["CHAT_TIMEOUT", "OpenRouterClient", "build_messages"]

"""Minimal GitHub REST client: contents listing, raw downloads, user and repositories."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import httpx

from now_sc.core.constants import GITHUB_API_URL
from now_sc.errors import GitHubApiError
from now_sc.remote.http import build_client, error_detail

logger = logging.getLogger(__name__)

GITHUB_TIMEOUT = 30

__all__ = ["GitHubClient", "RemoteRepository", "GITHUB_TIMEOUT"]


@dataclass(frozen=True)
class RemoteRepository:
    """Subset of the repository payload returned by GitHub."""

    name: str
    clone_url: str
    html_url: str

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "RemoteRepository":
        try:
            return cls(
                name=str(payload.get("full_name") or payload["name"]),
                clone_url=str(payload["clone_url"]),
                html_url=str(payload["html_url"]),
            )
        except KeyError as exc:
            raise GitHubApiError(f"GitHub repository response is missing {exc}") from exc


class GitHubClient:
    """Wraps the handful of GitHub endpoints the CLI needs.

    The token is optional for read-only calls and required for user and
    repository calls.
    """

    def __init__(
        self,
        token: str | None = None,
        *,
        client: httpx.Client | None = None,
        api_url: str = GITHUB_API_URL,
    ) -> None:
        self.token = token
        self.api_url = api_url.rstrip("/")
        self._client = client or build_client()

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/vnd.github+json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def _request(self, method: str, url: str, operation: str, **kwargs: Any) -> httpx.Response:
        logger.debug("GitHub %s %s", method, url)
        try:
            return self._client.request(
                method,
                url,
                headers=self._headers(),
                timeout=GITHUB_TIMEOUT,
                **kwargs,
            )
        except httpx.HTTPError as exc:
            raise GitHubApiError(f"{operation} failed: {exc}") from exc

    def list_directory(self, owner: str, repo: str, path: str) -> list[dict[str, Any]]:
        """Return the contents listing for *path* in ``owner/repo``."""
        url = f"{self.api_url}/repos/{owner}/{repo}/contents/{path}"
        response = self._request("GET", url, "Listing repository contents")
        if response.status_code != 200:
            raise GitHubApiError(
                f"GitHub API returned {response.status_code} for {url}: {error_detail(response)}",
                status_code=response.status_code,
            )
        try:
            payload = response.json()
        except ValueError as exc:
            raise GitHubApiError(f"Failed to parse contents listing: {exc}") from exc
        if not isinstance(payload, list):
            raise GitHubApiError(f"Expected a directory listing at {url}")
        return payload

    def download_text(self, url: str) -> str:
        response = self._request("GET", url, "Downloading file")
        if response.status_code != 200:
            raise GitHubApiError(
                f"Download failed with status {response.status_code} for {url}",
                status_code=response.status_code,
            )
        return response.text

    def get_authenticated_user(self) -> str:
        """Return the login of the token owner."""
        response = self._request("GET", f"{self.api_url}/user", "Resolving GitHub user")
        if response.status_code != 200:
            raise GitHubApiError(
                f"Could not retrieve GitHub username: {error_detail(response)}",
                status_code=response.status_code,
            )
        login = response.json().get("login")
        if not login:
            raise GitHubApiError("Could not retrieve GitHub username: response had no login")
        return str(login)

    def create_repository(
        self,
        name: str,
        description: str,
        *,
        org: str | None = None,
        private: bool = True,
    ) -> RemoteRepository:
        """Create an empty repository for the token owner, or in *org* when given."""
        if org:
            url = f"{self.api_url}/orgs/{org}/repos"
            owner_label = f"the {org} organization"
        else:
            url = f"{self.api_url}/user/repos"
            owner_label = "GitHub"
        response = self._request(
            "POST",
            url,
            "Creating GitHub repository",
            json={
                "name": name,
                "description": description,
                "private": private,
                "auto_init": False,
            },
        )
        if response.status_code == 422:
            raise GitHubApiError(
                f'Repository "{name}" already exists on {owner_label}',
                status_code=422,
            )
        if response.status_code != 201:
            raise GitHubApiError(
                f"Failed to create GitHub repository: {response.status_code} {error_detail(response)}",
                status_code=response.status_code,
            )
        return RemoteRepository.from_payload(response.json())

    def close(self) -> None:
        self._client.close()

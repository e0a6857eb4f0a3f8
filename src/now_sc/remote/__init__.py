"""Clients for the remote services used by now-sc."""

from .github import GitHubClient, RemoteRepository
from .http import build_client
from .openrouter import OpenRouterClient

__all__ = ["GitHubClient", "OpenRouterClient", "RemoteRepository", "build_client"]

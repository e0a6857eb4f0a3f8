"""Exception types surfaced to the CLI layer."""

from __future__ import annotations

__all__ = [
    "NowScError",
    "PreconditionError",
    "RemoteServiceError",
    "TemplateFetchError",
    "ChatCompletionError",
    "GitHubApiError",
    "GitCommandError",
]


class NowScError(RuntimeError):
    """Base class for errors that carry an operator-facing message."""


class PreconditionError(NowScError):
    """Raised when a required credential, folder or template set is missing.

    ``hint`` holds an optional follow-up line the CLI prints below the error.
    """

    def __init__(self, message: str, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint = hint


class RemoteServiceError(NowScError):
    """Raised when a call to a remote HTTP service fails."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class TemplateFetchError(RemoteServiceError):
    """Raised when the remote template listing or a download fails."""


class ChatCompletionError(RemoteServiceError):
    """Raised when the chat-completion request fails."""


class GitHubApiError(RemoteServiceError):
    """Raised when a GitHub user or repository call fails."""


class GitCommandError(NowScError):
    """Raised when a local git command exits non-zero."""

    def __init__(self, args: list[str], returncode: int, stderr: str) -> None:
        detail = stderr.strip() or f"exit code {returncode}"
        super().__init__(f"failed to run git {' '.join(args)}: {detail}")
        self.git_args = args
        self.returncode = returncode
        self.stderr = stderr

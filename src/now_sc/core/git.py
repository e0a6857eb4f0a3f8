"""Local git wiring for a freshly created remote repository."""

from __future__ import annotations

import logging
import shutil
import subprocess
from dataclasses import dataclass
from pathlib import Path

from now_sc.errors import GitCommandError

logger = logging.getLogger(__name__)

DEFAULT_BRANCH = "main"

__all__ = ["DEFAULT_BRANCH", "check_git_available", "init_repo_with_remote"]


@dataclass
class _GitCommandResult:
    returncode: int
    stdout: str
    stderr: str


def _run_git(repo_root: Path, args: list[str], timeout: int = 30) -> _GitCommandResult:
    """Run git command and normalize failure shape for deterministic handling."""
    try:
        completed = subprocess.run(
            ["git", *args],
            cwd=str(repo_root),
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            check=False,
            timeout=timeout,
        )
        return _GitCommandResult(
            returncode=completed.returncode,
            stdout=completed.stdout or "",
            stderr=completed.stderr or "",
        )
    except FileNotFoundError:
        return _GitCommandResult(
            returncode=127,
            stdout="",
            stderr="git executable not found on PATH",
        )
    except subprocess.TimeoutExpired:
        return _GitCommandResult(
            returncode=124,
            stdout="",
            stderr=f"git command timed out: git {' '.join(args)}",
        )


def check_git_available() -> bool:
    return shutil.which("git") is not None


def init_repo_with_remote(project_path: Path, remote_url: str, branch: str = DEFAULT_BRANCH) -> None:
    """Initialize git in *project_path*, add ``origin`` and rename the branch.

    Nothing is committed or pushed.
    """
    steps = [
        ["init"],
        ["remote", "add", "origin", remote_url],
        ["branch", "-M", branch],
    ]
    for args in steps:
        logger.debug("Running git %s in %s", " ".join(args), project_path)
        result = _run_git(project_path, args)
        if result.returncode != 0:
            raise GitCommandError(args, result.returncode, result.stderr)

"""Core utilities and configuration exports."""

from .config import Settings, load_env_file, parse_repo_slug
from .git import check_git_available, init_repo_with_remote
from .project_files import write_project_files
from .structure import PROJECT_SCHEMA, DirectoryNode, expected_directories, materialize, resolve_within

__all__ = [
    "DirectoryNode",
    "PROJECT_SCHEMA",
    "Settings",
    "check_git_available",
    "expected_directories",
    "init_repo_with_remote",
    "load_env_file",
    "materialize",
    "parse_repo_slug",
    "resolve_within",
    "write_project_files",
]

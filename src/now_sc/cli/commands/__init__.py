"""CLI command modules for now-sc."""

from .init import register_init_command
from .prompt import register_prompt_command

__all__ = ["register_init_command", "register_prompt_command"]

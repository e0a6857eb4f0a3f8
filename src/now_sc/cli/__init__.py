"""CLI helpers exposed for other modules."""

from .prompter import ConsolePrompter
from .ui import StepTracker, select_with_arrows

__all__ = ["ConsolePrompter", "StepTracker", "select_with_arrows"]

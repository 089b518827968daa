"""Terminal adapters."""

from .prompter import TerminalPrompter

__all__ = ["TerminalPrompter"]

"""Terminal prompter adapter."""

from __future__ import annotations

from rich.console import Console

from ....application.exceptions import PromptError


class TerminalPrompter:
    """
    Prompter reading from the controlling terminal.

    Implements the Prompter port. Prompts are written to stderr so that
    shell-mode output on stdout stays evaluable.
    """

    def __init__(self, console: Console | None = None) -> None:
        self._console = console or Console(stderr=True)

    def ask(self, label: str) -> str:
        return self._read(label, password=False).strip()

    def ask_secret(self, label: str) -> str:
        return self._read(label, password=True)

    def _read(self, label: str, *, password: bool) -> str:
        try:
            value = self._console.input(label, password=password)
        except (EOFError, KeyboardInterrupt, OSError) as e:
            msg = str(e) or e.__class__.__name__
            raise PromptError(msg) from e
        if not value:
            msg = "no input provided"
            raise PromptError(msg)
        return value

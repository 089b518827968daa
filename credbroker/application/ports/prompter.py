"""Port for interactive input - driven/secondary port."""

from typing import Protocol


class Prompter(Protocol):
    """Port for reading values typed by the user."""

    def ask(self, label: str) -> str:
        """
        Read a visible value.

        Raises:
            PromptError: If input cannot be read.
        """
        ...

    def ask_secret(self, label: str) -> str:
        """
        Read a masked value.

        Raises:
            PromptError: If input cannot be read.
        """
        ...

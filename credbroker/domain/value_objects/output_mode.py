"""Output mode value object."""

from enum import StrEnum, auto


class OutputMode(StrEnum):
    """Where temporary credentials are delivered."""

    SHELL = auto()
    FILE = auto()

    def __str__(self) -> str:
        return self.value

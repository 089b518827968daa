"""Password source value object."""

from enum import StrEnum, auto


class PasswordSource(StrEnum):
    """How the password handed to an identity exchange was obtained."""

    SAVE_REQUESTED = auto()
    STORED = auto()
    PROMPTED = auto()

    def __str__(self) -> str:
        return self.value

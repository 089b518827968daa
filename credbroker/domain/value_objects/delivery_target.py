"""Delivery target value object."""

from dataclasses import dataclass
from typing import Self

from ..exceptions import InvalidDeliveryTargetError
from .output_mode import OutputMode

DEFAULT_CREDENTIALS_PATH = "~/.aws/credentials"


@dataclass(frozen=True, slots=True)
class DeliveryTarget:
    """Destination of a credential: the shell, or a credentials file path."""

    mode: OutputMode
    path: str | None = None

    def __post_init__(self) -> None:
        """Validate the path is set exactly when writing to a file."""
        if self.mode is OutputMode.FILE and not self.path:
            msg = "File delivery requires a credentials file path"
            raise InvalidDeliveryTargetError(msg)
        if self.mode is OutputMode.SHELL and self.path:
            msg = "Shell delivery does not take a file path"
            raise InvalidDeliveryTargetError(msg)

    @classmethod
    def shell(cls) -> Self:
        """Target for shell-evaluable output."""
        return cls(mode=OutputMode.SHELL)

    @classmethod
    def file(cls, path: str) -> Self:
        """Target for a named section in a credentials file."""
        return cls(mode=OutputMode.FILE, path=path)

    @classmethod
    def resolve(
        cls,
        *,
        shell: bool,
        path_override: str | None,
        configured_path: str | None,
    ) -> Self:
        """
        Pick the target by flag precedence.

        The shell flag wins over file delivery entirely; an explicit path wins
        over the configured path, which wins over the AWS default.
        """
        if shell:
            return cls.shell()
        return cls.file(path_override or configured_path or DEFAULT_CREDENTIALS_PATH)

"""Shell credential sink."""

from __future__ import annotations

import shlex
import sys
from typing import TYPE_CHECKING, TextIO

from ....application.exceptions import DeliveryError
from ....application.ports import DeliveryReceipt
from ....domain.value_objects import OutputMode
from .base import BaseCredentialSink

if TYPE_CHECKING:
    from ....domain.entities import Credential
    from ....domain.value_objects import DeliveryTarget


class ShellCredentialSink(BaseCredentialSink):
    """Print credentials as environment variable assignments for the user's shell."""

    def __init__(self, stream: TextIO | None = None, *, windows: bool | None = None) -> None:
        """
        Initialize the shell sink.

        Args:
            stream: Output stream, standard output by default.
            windows: Use ``set`` syntax instead of ``export``; detected from
                the platform when not given.
        """
        super().__init__()
        self._stream = stream
        self._windows = sys.platform == "win32" if windows is None else windows

    def deliver(self, credential: Credential, target: DeliveryTarget) -> DeliveryReceipt:
        """Write one assignment per variable to the stream."""
        if target.mode is not OutputMode.SHELL:
            msg = f"shell sink cannot deliver to '{target.mode}'"
            raise DeliveryError(msg)

        stream = self._stream or sys.stdout
        for line in self.render(credential):
            stream.write(f"{line}\n")
        stream.flush()

        return DeliveryReceipt(mode=OutputMode.SHELL)

    def render(self, credential: Credential) -> list[str]:
        """Render the assignment statements for the current platform."""
        env = credential.as_environment()
        if self._windows:
            return [f"set {name}={value}" for name, value in env.items()]
        return [f"export {name}={shlex.quote(value)}" for name, value in env.items()]

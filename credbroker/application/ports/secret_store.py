"""Port for password persistence - driven/secondary port."""

from typing import Protocol


class SecretStore(Protocol):
    """Port for storing provider passwords in a secure facility."""

    def get(self, key: str) -> str:
        """
        Return the secret stored under ``key``.

        Raises:
            SecretNotFoundError: If nothing is stored under the key.
            SecretStoreError: If the backend fails.
        """
        ...

    def set(self, key: str, secret: str) -> None:
        """
        Store ``secret`` under ``key``, replacing any previous value.

        Raises:
            SecretStoreError: If the backend fails.
        """
        ...

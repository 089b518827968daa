"""OS keychain secret store adapter."""

from __future__ import annotations

import logging

import keyring

from ....application.exceptions import SecretNotFoundError, SecretStoreError

logger = logging.getLogger(__name__)


class KeyringSecretStore:
    """
    Secret store backed by the platform keychain via ``keyring``.

    Implements the SecretStore port. Secrets are stored under a single
    service name with the provider name as the account.
    """

    def __init__(self, service_name: str = "credbroker") -> None:
        self._service_name = service_name

    def get(self, key: str) -> str:
        try:
            value = keyring.get_password(self._service_name, key)
        except Exception as e:  # noqa: BLE001
            msg = f"failed to read keychain secret '{key}': {e}"
            raise SecretStoreError(msg) from e
        if not value:
            msg = f"missing keychain secret '{key}'"
            raise SecretNotFoundError(msg)
        return value

    def set(self, key: str, secret: str) -> None:
        try:
            keyring.set_password(self._service_name, key, secret)
        except Exception as e:  # noqa: BLE001
            msg = f"failed to write keychain secret '{key}': {e}"
            raise SecretStoreError(msg) from e
        logger.debug("Stored keychain secret '%s' in service '%s'", key, self._service_name)

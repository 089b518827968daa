"""Secret store adapters."""

from .keyring_store import KeyringSecretStore

__all__ = ["KeyringSecretStore"]

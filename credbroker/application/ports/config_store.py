"""Port for configuration lookups - driven/secondary port."""

from typing import Protocol

from ...domain.entities import App, Provider
from ...domain.value_objects import ProviderType


class ConfigStore(Protocol):
    """
    Port for reading app and provider configuration.

    Flat lookups return an empty string when the key is not configured;
    typed lookups raise ConfigurationError for missing required attributes.
    """

    def selected_app(self) -> str:
        """Name of the default app, or empty string."""
        ...

    def credentials_path(self) -> str:
        """Configured credentials file path, or empty string."""
        ...

    def provider_for_app(self, app: str) -> str:
        """Name of the provider configured for an app, or empty string."""
        ...

    def type_for_provider(self, provider: str) -> str:
        """Raw type string configured for a provider, or empty string."""
        ...

    def get_app(self, name: str, provider_type: ProviderType) -> App:
        """
        Read the typed configuration of an app.

        Raises:
            ConfigurationError: If required attributes are missing.
        """
        ...

    def get_provider(self, name: str, provider_type: ProviderType) -> Provider:
        """
        Read the typed configuration of a provider.

        Raises:
            ConfigurationError: If required attributes are missing.
        """
        ...

    def list_apps(self) -> dict[str, str]:
        """Map every configured app to its provider name."""
        ...

    def set_selected_app(self, app: str) -> None:
        """Persist the default app."""
        ...

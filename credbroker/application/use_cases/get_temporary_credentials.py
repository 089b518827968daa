"""Use case for obtaining temporary credentials for an app."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING

from ...domain.value_objects import DeliveryTarget, OutputMode, PasswordSource, ProviderType
from ..exceptions import (
    ConfigurationError,
    DeliveryError,
    IdentityExchangeError,
    NoAppSelectedError,
    PromptError,
    SecretStoreError,
    UnsupportedProviderError,
)

if TYPE_CHECKING:
    from ...domain.entities import App, Credential, Provider
    from ..ports import ConfigStore, CredentialSink, DeliveryReceipt, IdentityExchange, Prompter, SecretStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class GetCredentialsRequest:
    """Options of a single ``get`` invocation."""

    app: str | None = None
    shell: bool = False
    write_to_file: str | None = None
    save_password: bool = False


@dataclass(frozen=True, slots=True)
class GetCredentialsResult:
    """Result of the temporary credentials use case."""

    app: str
    provider: str
    password_source: PasswordSource
    receipt: DeliveryReceipt

    @property
    def written_to(self) -> str | None:
        """Resolved credentials file path, if delivered to a file."""
        return self.receipt.path


class GetTemporaryCredentials:
    """
    Use case for retrieving temporary credentials for an app.

    Resolves the app's provider, gathers the user's IdP credentials, runs the
    provider's identity exchange and delivers the resulting credential. Every
    failure is raised as an ApplicationError naming the failing step; nothing
    is delivered unless a complete credential was obtained.
    """

    def __init__(
        self,
        config_store: ConfigStore,
        secret_store: SecretStore,
        prompter: Prompter,
        exchanges: Mapping[ProviderType, IdentityExchange],
        sinks: Mapping[OutputMode, CredentialSink],
    ) -> None:
        """
        Initialize the use case.

        Args:
            config_store: Adapter for app and provider configuration.
            secret_store: Adapter for stored provider passwords.
            prompter: Adapter for interactive input.
            exchanges: Identity exchange per supported provider type.
            sinks: Credential sink per output mode.
        """
        self._config = config_store
        self._secrets = secret_store
        self._prompter = prompter
        self._exchanges = dict(exchanges)
        self._sinks = dict(sinks)

    def execute(self, request: GetCredentialsRequest) -> GetCredentialsResult:
        """
        Execute the use case.

        Returns:
            GetCredentialsResult describing where the credential went.

        Raises:
            ApplicationError: If any step fails.
        """
        app_name = self._resolve_app_name(request.app)
        app, provider = self._resolve_configuration(app_name)
        exchange = self._exchanges[provider.type]
        target = DeliveryTarget.resolve(
            shell=request.shell,
            path_override=request.write_to_file,
            configured_path=self._config.credentials_path(),
        )
        logger.info("Getting credentials for app '%s' via provider '%s' (%s)", app.name, provider.name, provider.type)

        username = self._resolve_username(provider)
        password, source = self._resolve_password(provider, save_password=request.save_password)
        logger.debug("Using password source: %s", source)

        try:
            credential = exchange.exchange(app, provider, username, password)
        except IdentityExchangeError as e:
            msg = f"Could not get temporary credentials: {e}"
            raise IdentityExchangeError(msg) from e
        finally:
            del password

        receipt = self._deliver(credential, target)

        return GetCredentialsResult(
            app=app.name,
            provider=provider.name,
            password_source=source,
            receipt=receipt,
        )

    def _resolve_app_name(self, requested: str | None) -> str:
        """Use the requested app, falling back to the selected app."""
        if requested:
            return requested

        selected = self._config.selected_app()
        if not selected:
            msg = "No app specified and no default app configured"
            raise NoAppSelectedError(msg)

        logger.debug("No app specified, using selected app '%s'", selected)
        return selected

    def _resolve_configuration(self, app_name: str) -> tuple[App, Provider]:
        """Resolve the app, its provider and the provider type."""
        provider_name = self._config.provider_for_app(app_name)
        if not provider_name:
            msg = f"Could not get provider for app '{app_name}'"
            raise ConfigurationError(msg)

        raw_type = self._config.type_for_provider(provider_name)
        if not raw_type:
            msg = f"Could not get provider type for provider '{provider_name}'"
            raise ConfigurationError(msg)

        provider_type = self._supported_type(raw_type)
        if provider_type is None:
            msg = f"Unsupported identity provider type '{raw_type}' for app '{app_name}'"
            raise UnsupportedProviderError(msg)

        try:
            app = self._config.get_app(app_name, provider_type)
        except ConfigurationError as e:
            msg = f"Error reading config for app {app_name}: {e}"
            raise ConfigurationError(msg) from e

        try:
            provider = self._config.get_provider(provider_name, provider_type)
        except ConfigurationError as e:
            msg = f"Error reading provider config: {e}"
            raise ConfigurationError(msg) from e

        return app, provider

    def _supported_type(self, raw_type: str) -> ProviderType | None:
        """Map a configured type string to a provider type with an exchange."""
        try:
            provider_type = ProviderType(raw_type.lower())
        except ValueError:
            return None
        return provider_type if provider_type in self._exchanges else None

    def _resolve_username(self, provider: Provider) -> str:
        """Use the provider's default username or ask for one."""
        if provider.username:
            return provider.username

        try:
            return self._prompter.ask(f"{provider.type.display_name} username: ")
        except PromptError as e:
            msg = f"Error reading username from terminal: {e}"
            raise PromptError(msg) from e

    def _resolve_password(self, provider: Provider, *, save_password: bool) -> tuple[str, PasswordSource]:
        """
        Obtain the provider password.

        An explicit save prompts and stores the password without consulting
        the store; a failed store write only warns. Otherwise the stored
        password is used, falling back to a prompt when it cannot be read.
        """
        if save_password:
            password = self._prompt_password(provider)
            try:
                self._secrets.set(provider.name, password)
            except SecretStoreError as e:
                logger.warning("Could not save password to keychain: %s", e)
            else:
                logger.info("Password for provider '%s' saved to keychain", provider.name)
            return password, PasswordSource.SAVE_REQUESTED

        try:
            return self._secrets.get(provider.name), PasswordSource.STORED
        except SecretStoreError as e:
            # Silent fallback; store failures are never surfaced to the user
            logger.debug("No usable stored password for provider '%s': %s", provider.name, e)

        return self._prompt_password(provider), PasswordSource.PROMPTED

    def _prompt_password(self, provider: Provider) -> str:
        try:
            return self._prompter.ask_secret(f"{provider.type.display_name} password: ")
        except PromptError as e:
            msg = f"Error reading password from terminal: {e}"
            raise PromptError(msg) from e

    def _deliver(self, credential: Credential, target: DeliveryTarget) -> DeliveryReceipt:
        """Route the credential to the sink for the target's mode."""
        sink = self._sinks.get(target.mode)
        if sink is None:
            msg = f"Error processing credentials: no sink for output mode '{target.mode}'"
            raise DeliveryError(msg)

        try:
            return sink.deliver(credential, target)
        except DeliveryError as e:
            msg = f"Error processing credentials: {e}"
            raise DeliveryError(msg) from e

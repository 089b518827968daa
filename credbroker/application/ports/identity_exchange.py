"""Port for identity exchanges - driven/secondary port."""

from typing import Protocol

from ...domain.entities import App, Credential, Provider


class IdentityExchange(Protocol):
    """
    Port for turning IdP credentials into temporary cloud credentials.

    There is one adapter per provider type; each authenticates the user,
    obtains a SAML assertion and exchanges it for a Credential.
    """

    def exchange(self, app: App, provider: Provider, username: str, password: str) -> Credential:
        """
        Authenticate and obtain temporary credentials for an app.

        Args:
            app: Typed app configuration.
            provider: Typed provider configuration.
            username: IdP username.
            password: IdP password. Must never be logged.

        Returns:
            Credential for the app.

        Raises:
            IdentityExchangeError: If authentication or the exchange fails.
        """
        ...

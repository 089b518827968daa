"""Base identity exchange with common functionality."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

import httpx

from ....application.exceptions import IdentityExchangeError
from ....domain.exceptions import InvalidCredentialError
from ..aws import SamlAssertionError, SamlRole, StsClient, parse_roles
from .http import HttpClientConfig

if TYPE_CHECKING:
    from ....application.ports import Prompter
    from ....domain.entities import App, Credential, Provider


class BaseIdentityExchange(ABC):
    """
    Abstract base class for identity exchanges.

    Subclasses obtain a SAML assertion from their identity provider; the base
    class selects the role and trades the assertion for credentials at STS.
    """

    def __init__(
        self,
        http_config: HttpClientConfig,
        sts_client: StsClient,
        prompter: Prompter,
    ) -> None:
        """Initialize the identity exchange."""
        self._http_config = http_config
        self._sts = sts_client
        self._prompter = prompter
        self._logger = logging.getLogger(self.__class__.__name__)

    def exchange(self, app: App, provider: Provider, username: str, password: str) -> Credential:
        """Authenticate at the identity provider and assume the app's role."""
        try:
            with self._http_config.create_client() as client:
                assertion = self.fetch_assertion(client, app, provider, username, password)
            role = self.select_role(app, assertion)
            return self._sts.assume_role_with_saml(
                role_arn=role.role_arn,
                principal_arn=role.principal_arn,
                assertion=assertion,
                duration=provider.session_duration(app.duration),
                app_name=app.name,
            )
        except httpx.HTTPStatusError as e:
            msg = f"{e.request.method} {e.request.url} returned HTTP {e.response.status_code}"
            raise IdentityExchangeError(msg) from e
        except httpx.HTTPError as e:
            msg = f"request to identity provider failed: {e}"
            raise IdentityExchangeError(msg) from e
        except (SamlAssertionError, InvalidCredentialError) as e:
            raise IdentityExchangeError(str(e)) from e

    @abstractmethod
    def fetch_assertion(
        self,
        client: httpx.Client,
        app: App,
        provider: Provider,
        username: str,
        password: str,
    ) -> str:
        """Return the base64-encoded SAML assertion for the app."""
        ...

    def select_role(self, app: App, assertion: str) -> SamlRole:
        """
        Pick the role to assume from the roles listed in the assertion.

        A role ARN configured on the app selects that role; otherwise the
        first role is used.
        """
        roles = parse_roles(assertion)
        if not roles:
            msg = "SAML assertion does not grant any AWS role"
            raise IdentityExchangeError(msg)

        wanted = getattr(app, "role_arn", "")
        if not wanted:
            if len(roles) > 1:
                self._logger.warning("Assertion grants %d roles, using %s", len(roles), roles[0].role_arn)
            return roles[0]

        for role in roles:
            if role.role_arn == wanted:
                return role
        msg = f"SAML assertion does not grant role {wanted}"
        raise IdentityExchangeError(msg)

    def prompt_code(self, label: str) -> str:
        """Ask the user for a one-time MFA code."""
        return self._prompter.ask(label)

    @staticmethod
    def json_body(response: httpx.Response) -> dict[str, Any]:
        """Decode a JSON object body."""
        try:
            data = response.json()
        except ValueError as e:
            msg = f"unexpected non-JSON response from {response.request.url}"
            raise IdentityExchangeError(msg) from e
        if not isinstance(data, dict):
            msg = f"unexpected response from {response.request.url}"
            raise IdentityExchangeError(msg)
        return data

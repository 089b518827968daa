"""OneLogin identity exchange."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ....application.exceptions import IdentityExchangeError
from ....domain.entities import OneLoginApp, OneLoginProvider
from ..aws import SamlRole
from .base import BaseIdentityExchange

if TYPE_CHECKING:
    import httpx

    from ....domain.entities import App, Provider


class OneLoginIdentityExchange(BaseIdentityExchange):
    """
    Obtain AWS credentials through a OneLogin SAML app.

    Uses the OneLogin API: an OAuth2 client-credentials token authorizes the
    SAML assertion request made on behalf of the user. Users enrolled in MFA
    are asked for a one-time code from their first registered device.
    """

    def fetch_assertion(
        self,
        client: httpx.Client,
        app: App,
        provider: Provider,
        username: str,
        password: str,
    ) -> str:
        if not isinstance(app, OneLoginApp) or not isinstance(provider, OneLoginProvider):
            msg = "OneLogin exchange requires OneLogin app and provider configuration"
            raise IdentityExchangeError(msg)

        token = self._access_token(client, provider)
        headers = {"Authorization": f"bearer:{token}"}

        self._logger.info("Requesting SAML assertion for %s from %s", username, provider.subdomain)
        response = client.post(
            f"{provider.api_base_url}/api/1/saml_assertion",
            headers=headers,
            json={
                "username_or_email": username,
                "password": password,
                "app_id": app.app_id,
                "subdomain": provider.subdomain,
            },
        )
        result = self._checked(response, "SAML assertion request")

        data = result.get("data")
        if isinstance(data, str) and data:
            return data
        if isinstance(data, list) and data:
            return self._verify_mfa(client, headers, app, provider, data[0])

        msg = "OneLogin returned no SAML assertion"
        raise IdentityExchangeError(msg)

    def select_role(self, app: App, assertion: str) -> SamlRole:
        """OneLogin apps name their role and SAML provider in configuration."""
        if not isinstance(app, OneLoginApp):
            return super().select_role(app, assertion)
        return SamlRole(role_arn=app.role_arn, principal_arn=app.principal_arn)

    def _access_token(self, client: httpx.Client, provider: OneLoginProvider) -> str:
        """Generate an API access token with the provider's client credentials."""
        response = client.post(
            f"{provider.api_base_url}/auth/oauth2/v2/token",
            auth=(provider.client_id, provider.client_secret),
            json={"grant_type": "client_credentials"},
        )
        if response.status_code in (400, 401):
            msg = "OneLogin rejected the API client credentials"
            raise IdentityExchangeError(msg)
        response.raise_for_status()

        token = self.json_body(response).get("access_token")
        if not token:
            msg = "OneLogin token response has no access token"
            raise IdentityExchangeError(msg)
        return str(token)

    def _verify_mfa(
        self,
        client: httpx.Client,
        headers: dict[str, str],
        app: OneLoginApp,
        provider: OneLoginProvider,
        challenge: dict[str, Any],
    ) -> str:
        """Answer the MFA challenge attached to an assertion response."""
        devices = challenge.get("devices") or []
        if not devices:
            msg = "OneLogin requires MFA but no device is registered"
            raise IdentityExchangeError(msg)

        device = devices[0]
        self._logger.info("Verifying MFA with device type %s", device.get("device_type", "unknown"))
        code = self.prompt_code(f"OneLogin MFA code ({device.get('device_type', 'device')}): ")

        response = client.post(
            f"{provider.api_base_url}/api/1/saml_assertion/verify_factor",
            headers=headers,
            json={
                "app_id": app.app_id,
                "device_id": str(device.get("device_id", "")),
                "state_token": challenge.get("state_token", ""),
                "otp_token": code,
            },
        )
        result = self._checked(response, "MFA verification")

        data = result.get("data")
        if not isinstance(data, str) or not data:
            msg = "OneLogin MFA verification returned no SAML assertion"
            raise IdentityExchangeError(msg)
        return data

    def _checked(self, response: httpx.Response, step: str) -> dict[str, Any]:
        """Decode a OneLogin v1 response, raising on an error status block."""
        if response.is_error:
            try:
                status = response.json().get("status") or {}
            except (ValueError, AttributeError):
                status = {}
            message = status.get("message") or f"HTTP {response.status_code}"
            msg = f"OneLogin {step} failed: {message}"
            raise IdentityExchangeError(msg)

        result = self.json_body(response)
        status = result.get("status") or {}
        if status.get("error"):
            msg = f"OneLogin {step} failed: {status.get('message', 'unknown error')}"
            raise IdentityExchangeError(msg)
        return result

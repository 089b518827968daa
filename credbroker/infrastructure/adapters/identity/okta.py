"""Okta identity exchange."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, ClassVar

from bs4 import BeautifulSoup

from ....application.exceptions import IdentityExchangeError
from ....domain.entities import OktaApp, OktaProvider
from .base import BaseIdentityExchange

if TYPE_CHECKING:
    import httpx

    from ....domain.entities import App, Provider


class OktaIdentityExchange(BaseIdentityExchange):
    """
    Obtain AWS credentials through an Okta SAML app.

    Authenticates with the Okta authentication API, answers a one-time code
    MFA challenge when required, then opens the app's embed link with the
    session token to receive the SAML assertion form.
    """

    OTP_FACTOR_TYPES: ClassVar[tuple[str, ...]] = ("token:software:totp", "token:hotp", "token")

    def fetch_assertion(
        self,
        client: httpx.Client,
        app: App,
        provider: Provider,
        username: str,
        password: str,
    ) -> str:
        if not isinstance(app, OktaApp) or not isinstance(provider, OktaProvider):
            msg = "Okta exchange requires Okta app and provider configuration"
            raise IdentityExchangeError(msg)

        session_token = self._authenticate(client, provider, username, password)
        return self._get_assertion(client, app, session_token)

    def _authenticate(self, client: httpx.Client, provider: OktaProvider, username: str, password: str) -> str:
        """Run primary authentication and return the session token."""
        self._logger.info("Authenticating %s at %s", username, provider.base_url)
        response = client.post(
            f"{provider.base_url}/api/v1/authn",
            json={"username": username, "password": password},
        )
        if response.status_code == 401:
            msg = "Okta authentication failed: invalid username or password"
            raise IdentityExchangeError(msg)
        response.raise_for_status()
        result = self.json_body(response)

        match result.get("status"):
            case "SUCCESS":
                return self._session_token(result)
            case "MFA_REQUIRED":
                return self._session_token(self._verify_mfa(client, provider, result))
            case status:
                msg = f"Okta authentication returned unsupported status '{status}'"
                raise IdentityExchangeError(msg)

    def _verify_mfa(self, client: httpx.Client, provider: OktaProvider, result: dict[str, Any]) -> dict[str, Any]:
        """Answer an MFA challenge with a one-time code."""
        factors = (result.get("_embedded") or {}).get("factors") or []
        factor = next((f for f in factors if f.get("factorType") in self.OTP_FACTOR_TYPES), None)
        if factor is None:
            types = ", ".join(str(f.get("factorType")) for f in factors) or "none"
            msg = f"Okta requires MFA but no one-time code factor is enrolled (available: {types})"
            raise IdentityExchangeError(msg)

        verify_url = ((factor.get("_links") or {}).get("verify") or {}).get("href")
        if not verify_url:
            factor_id = factor.get("id")
            if not factor_id:
                msg = f"Okta MFA factor '{factor['factorType']}' has neither an id nor a verify link"
                raise IdentityExchangeError(msg)
            verify_url = f"{provider.base_url}/api/v1/authn/factors/{factor_id}/verify"

        passcode = self.prompt_code("Okta MFA code: ")
        response = client.post(
            verify_url,
            json={"stateToken": result.get("stateToken"), "passCode": passcode},
        )
        if response.status_code == 403:
            msg = "Okta MFA verification failed: invalid code"
            raise IdentityExchangeError(msg)
        response.raise_for_status()

        verified = self.json_body(response)
        if verified.get("status") != "SUCCESS":
            msg = f"Okta MFA verification returned status '{verified.get('status')}'"
            raise IdentityExchangeError(msg)
        return verified

    @staticmethod
    def _session_token(result: dict[str, Any]) -> str:
        token = result.get("sessionToken")
        if not token:
            msg = "Okta authentication response has no session token"
            raise IdentityExchangeError(msg)
        return str(token)

    def _get_assertion(self, client: httpx.Client, app: OktaApp, session_token: str) -> str:
        """Open the app embed link and read the SAMLResponse form field."""
        response = client.get(app.url, params={"onetimetoken": session_token}, headers={"Accept": "text/html"})
        response.raise_for_status()

        soup = BeautifulSoup(response.text, "html.parser")
        field = soup.find("input", attrs={"name": "SAMLResponse"})
        assertion = field.get("value") if field else None
        if not assertion:
            msg = f"could not find SAMLResponse in response from {app.url}; check the app's embed link"
            raise IdentityExchangeError(msg)
        return str(assertion)

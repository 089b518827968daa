"""Tests for the OneLogin identity exchange."""

from __future__ import annotations

import json

import httpx
import pytest
import respx

from credbroker.application.exceptions import IdentityExchangeError
from credbroker.domain.entities import OneLoginApp, OneLoginProvider
from credbroker.infrastructure.adapters import HttpClientConfig, OneLoginIdentityExchange
from tests.fakes import FakePrompter, FakeStsClient

API = "https://api.us.onelogin.com"
TOKEN_URL = f"{API}/auth/oauth2/v2/token"
ASSERTION_URL = f"{API}/api/1/saml_assertion"
VERIFY_URL = f"{API}/api/1/saml_assertion/verify_factor"
SUCCESS = {"error": False, "code": 200, "type": "success", "message": "Success"}


@pytest.fixture
def sts() -> FakeStsClient:
    return FakeStsClient()


def make_exchange(sts: FakeStsClient, prompter: FakePrompter | None = None) -> OneLoginIdentityExchange:
    return OneLoginIdentityExchange(HttpClientConfig(timeout=5.0), sts, prompter or FakePrompter())  # type: ignore[arg-type]


class TestOneLoginIdentityExchange:
    """Tests for OneLoginIdentityExchange."""

    def test_assertion_exchanged_with_configured_role(
        self, onelogin_app: OneLoginApp, onelogin_provider: OneLoginProvider, sts: FakeStsClient
    ) -> None:
        """The configured role and principal are used with the returned assertion."""
        with respx.mock(assert_all_called=True) as router:
            token = router.post(TOKEN_URL).mock(return_value=httpx.Response(200, json={"access_token": "api-token"}))
            assertion = router.post(ASSERTION_URL).mock(
                return_value=httpx.Response(200, json={"status": SUCCESS, "data": "PHNhbWw+"})
            )

            credential = make_exchange(sts).exchange(onelogin_app, onelogin_provider, "alice@example.com", "pw")

        assert token.calls.last.request.headers["Authorization"].startswith("Basic ")
        request = assertion.calls.last.request
        assert request.headers["Authorization"] == "bearer:api-token"
        assert json.loads(request.content) == {
            "username_or_email": "alice@example.com",
            "password": "pw",
            "app_id": "123456",
            "subdomain": "corp",
        }
        assert sts.calls == [
            {
                "role_arn": "arn:aws:iam::111122223333:role/Developer",
                "principal_arn": "arn:aws:iam::111122223333:saml-provider/onelogin",
                "assertion": "PHNhbWw+",
                "duration": 3600,
                "app_name": "staging",
            }
        ]
        assert credential.app_name == "staging"

    def test_mfa_verified_with_first_device(
        self, onelogin_app: OneLoginApp, onelogin_provider: OneLoginProvider, sts: FakeStsClient
    ) -> None:
        """An MFA challenge is answered with a code for the first device."""
        prompter = FakePrompter("654321")
        with respx.mock(assert_all_called=True) as router:
            router.post(TOKEN_URL).mock(return_value=httpx.Response(200, json={"access_token": "api-token"}))
            router.post(ASSERTION_URL).mock(
                return_value=httpx.Response(
                    200,
                    json={
                        "status": {**SUCCESS, "message": "MFA is required for this user"},
                        "data": [
                            {
                                "state_token": "state-1",
                                "devices": [{"device_id": 444, "device_type": "Google Authenticator"}],
                                "callback_url": VERIFY_URL,
                            }
                        ],
                    },
                )
            )
            verify = router.post(VERIFY_URL).mock(
                return_value=httpx.Response(200, json={"status": SUCCESS, "data": "UEhOaGJXdz0="})
            )

            make_exchange(sts, prompter).exchange(onelogin_app, onelogin_provider, "alice@example.com", "pw")

        assert json.loads(verify.calls.last.request.content) == {
            "app_id": "123456",
            "device_id": "444",
            "state_token": "state-1",
            "otp_token": "654321",
        }
        assert prompter.prompts == [("OneLogin MFA code (Google Authenticator): ", False)]
        assert sts.calls[0]["assertion"] == "UEhOaGJXdz0="

    def test_invalid_user_credentials(
        self, onelogin_app: OneLoginApp, onelogin_provider: OneLoginProvider, sts: FakeStsClient
    ) -> None:
        """OneLogin's error message is reported."""
        with respx.mock() as router:
            router.post(TOKEN_URL).mock(return_value=httpx.Response(200, json={"access_token": "api-token"}))
            router.post(ASSERTION_URL).mock(
                return_value=httpx.Response(
                    401,
                    json={
                        "status": {
                            "error": True,
                            "code": 401,
                            "type": "Unauthorized",
                            "message": "Authentication Failed: Invalid user credentials",
                        }
                    },
                )
            )

            with pytest.raises(IdentityExchangeError, match="Invalid user credentials"):
                make_exchange(sts).exchange(onelogin_app, onelogin_provider, "alice@example.com", "wrong")

        assert sts.calls == []

    def test_rejected_client_credentials(
        self, onelogin_app: OneLoginApp, onelogin_provider: OneLoginProvider, sts: FakeStsClient
    ) -> None:
        with respx.mock() as router:
            router.post(TOKEN_URL).mock(return_value=httpx.Response(401, json={"message": "Unauthorized"}))

            with pytest.raises(IdentityExchangeError, match="rejected the API client credentials"):
                make_exchange(sts).exchange(onelogin_app, onelogin_provider, "alice@example.com", "pw")

    def test_mfa_without_devices(
        self, onelogin_app: OneLoginApp, onelogin_provider: OneLoginProvider, sts: FakeStsClient
    ) -> None:
        with respx.mock() as router:
            router.post(TOKEN_URL).mock(return_value=httpx.Response(200, json={"access_token": "api-token"}))
            router.post(ASSERTION_URL).mock(
                return_value=httpx.Response(200, json={"status": SUCCESS, "data": [{"state_token": "s", "devices": []}]})
            )

            with pytest.raises(IdentityExchangeError, match="no device is registered"):
                make_exchange(sts).exchange(onelogin_app, onelogin_provider, "alice@example.com", "pw")

    def test_connection_error(
        self, onelogin_app: OneLoginApp, onelogin_provider: OneLoginProvider, sts: FakeStsClient
    ) -> None:
        with respx.mock() as router:
            router.post(TOKEN_URL).mock(side_effect=httpx.ConnectError("connection refused"))

            with pytest.raises(IdentityExchangeError, match="request to identity provider failed"):
                make_exchange(sts).exchange(onelogin_app, onelogin_provider, "alice@example.com", "pw")

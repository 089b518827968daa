"""Pytest configuration and shared fixtures."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest

from credbroker.domain.entities import Credential, OktaApp, OktaProvider, OneLoginApp, OneLoginProvider
from credbroker.domain.value_objects import OutputMode, ProviderType
from tests.fakes import RecordingSink


@pytest.fixture
def credential() -> Credential:
    """A valid credential for the 'prod' app."""
    return Credential(
        access_key_id="ASIAEXAMPLE",
        secret_access_key="wJalrXUtnFEMI/K7MDENG",
        session_token="FwoGZXIvYXdzEXAMPLE",
        expiration=datetime.now(UTC) + timedelta(hours=1),
        app_name="prod",
    )


@pytest.fixture
def okta_provider() -> OktaProvider:
    """Okta provider without a default username."""
    return OktaProvider(name="acme", type=ProviderType.OKTA, base_url="https://acme.okta.com")


@pytest.fixture
def okta_app() -> OktaApp:
    """The 'prod' app behind the 'acme' Okta provider."""
    return OktaApp(name="prod", provider="acme", url="https://acme.okta.com/home/amazon_aws/0oa1/272")


@pytest.fixture
def onelogin_provider() -> OneLoginProvider:
    """OneLogin provider with a default username."""
    return OneLoginProvider(
        name="corp",
        type=ProviderType.ONELOGIN,
        username="alice@example.com",
        client_id="cid",
        client_secret="csecret",
        subdomain="corp",
    )


@pytest.fixture
def onelogin_app() -> OneLoginApp:
    """The 'staging' app behind the 'corp' OneLogin provider."""
    return OneLoginApp(
        name="staging",
        provider="corp",
        app_id="123456",
        principal_arn="arn:aws:iam::111122223333:saml-provider/onelogin",
        role_arn="arn:aws:iam::111122223333:role/Developer",
    )


@pytest.fixture
def sinks() -> dict[OutputMode, RecordingSink]:
    """Recording sinks for both output modes."""
    return {OutputMode.SHELL: RecordingSink(), OutputMode.FILE: RecordingSink()}

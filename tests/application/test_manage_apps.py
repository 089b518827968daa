"""Tests for the ListApps and SelectApp use cases."""

from __future__ import annotations

import pytest

from credbroker.application.exceptions import ConfigurationError
from credbroker.application.use_cases import AppSummary, ListApps, SelectApp
from credbroker.domain.entities import OktaApp, OneLoginApp
from tests.fakes import FakeConfigStore


class TestListApps:
    """Tests for ListApps use case."""

    def test_lists_apps_sorted_with_selection(self, okta_app: OktaApp, onelogin_app: OneLoginApp) -> None:
        config = FakeConfigStore(apps=[okta_app, onelogin_app], selected_app="staging")

        assert ListApps(config).execute() == [
            AppSummary(name="prod", provider="acme", selected=False),
            AppSummary(name="staging", provider="corp", selected=True),
        ]

    def test_no_apps(self) -> None:
        assert ListApps(FakeConfigStore()).execute() == []


class TestSelectApp:
    """Tests for SelectApp use case."""

    def test_selects_configured_app(self, okta_app: OktaApp) -> None:
        config = FakeConfigStore(apps=[okta_app])

        SelectApp(config).execute("prod")

        assert config.selected == "prod"

    def test_unknown_app_is_rejected(self, okta_app: OktaApp) -> None:
        config = FakeConfigStore(apps=[okta_app], selected_app="prod")

        with pytest.raises(ConfigurationError, match="App 'qa' does not exist"):
            SelectApp(config).execute("qa")

        assert config.selected == "prod"

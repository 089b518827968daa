"""Provider entities - identity provider configurations."""

from dataclasses import dataclass

from ..value_objects import ProviderType

DEFAULT_SESSION_DURATION = 3600


@dataclass(frozen=True, slots=True)
class Provider:
    """An identity provider the user authenticates against."""

    name: str
    type: ProviderType
    username: str = ""
    duration: int | None = None

    def session_duration(self, app_duration: int | None) -> int:
        """Resolve the STS session duration, app settings first."""
        return app_duration or self.duration or DEFAULT_SESSION_DURATION


@dataclass(frozen=True, slots=True)
class OneLoginProvider(Provider):
    """OneLogin tenant with API client credentials."""

    client_id: str = ""
    client_secret: str = ""
    subdomain: str = ""
    region: str = "us"

    @property
    def api_base_url(self) -> str:
        """Regional OneLogin API endpoint."""
        return f"https://api.{self.region}.onelogin.com"


@dataclass(frozen=True, slots=True)
class OktaProvider(Provider):
    """Okta organization."""

    base_url: str = ""

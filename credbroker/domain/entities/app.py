"""App entities - cloud targets reachable through an identity provider."""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class App:
    """An app configured for temporary credential retrieval."""

    name: str
    provider: str
    duration: int | None = None


@dataclass(frozen=True, slots=True)
class OneLoginApp(App):
    """An AWS app published through OneLogin."""

    app_id: str = ""
    principal_arn: str = ""
    role_arn: str = ""


@dataclass(frozen=True, slots=True)
class OktaApp(App):
    """An AWS app published through Okta, addressed by its embed link."""

    url: str = ""
    role_arn: str = ""

"""Domain entities - Objects with identity and lifecycle."""

from .app import App, OktaApp, OneLoginApp
from .credential import Credential
from .provider import DEFAULT_SESSION_DURATION, OktaProvider, OneLoginProvider, Provider

__all__ = [
    "DEFAULT_SESSION_DURATION",
    "App",
    "Credential",
    "OktaApp",
    "OktaProvider",
    "OneLoginApp",
    "OneLoginProvider",
    "Provider",
]

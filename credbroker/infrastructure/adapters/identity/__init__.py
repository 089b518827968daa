"""Identity exchange adapters, one per provider type."""

from .base import BaseIdentityExchange
from .http import HttpClientConfig
from .okta import OktaIdentityExchange
from .onelogin import OneLoginIdentityExchange

__all__ = [
    "BaseIdentityExchange",
    "HttpClientConfig",
    "OktaIdentityExchange",
    "OneLoginIdentityExchange",
]

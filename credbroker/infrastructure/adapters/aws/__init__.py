"""AWS adapters."""

from .saml import SamlAssertionError, SamlRole, parse_roles
from .sts import StsClient, StsClientConfig

__all__ = ["SamlAssertionError", "SamlRole", "StsClient", "StsClientConfig", "parse_roles"]

"""Application ports - Interfaces for external adapters."""

from .config_store import ConfigStore
from .credential_sink import CredentialSink, DeliveryReceipt
from .identity_exchange import IdentityExchange
from .prompter import Prompter
from .secret_store import SecretStore

__all__ = [
    "ConfigStore",
    "CredentialSink",
    "DeliveryReceipt",
    "IdentityExchange",
    "Prompter",
    "SecretStore",
]

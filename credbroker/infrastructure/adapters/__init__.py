"""Infrastructure adapters - Implementations of application ports."""

from .aws import StsClient, StsClientConfig
from .config_store import YamlConfigStore
from .identity import HttpClientConfig, OktaIdentityExchange, OneLoginIdentityExchange
from .secrets import KeyringSecretStore
from .sinks import ProfileFileCredentialSink, ShellCredentialSink
from .terminal import TerminalPrompter

__all__ = [
    "HttpClientConfig",
    "KeyringSecretStore",
    "OktaIdentityExchange",
    "OneLoginIdentityExchange",
    "ProfileFileCredentialSink",
    "ShellCredentialSink",
    "StsClient",
    "StsClientConfig",
    "TerminalPrompter",
    "YamlConfigStore",
]

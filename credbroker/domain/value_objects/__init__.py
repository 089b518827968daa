"""Domain value objects - Immutable objects defined by their attributes."""

from .delivery_target import DEFAULT_CREDENTIALS_PATH, DeliveryTarget
from .output_mode import OutputMode
from .password_source import PasswordSource
from .provider_type import ProviderType

__all__ = [
    "DEFAULT_CREDENTIALS_PATH",
    "DeliveryTarget",
    "OutputMode",
    "PasswordSource",
    "ProviderType",
]

"""Application layer exceptions."""


class ApplicationError(Exception):
    """Base exception for application errors."""


class ConfigurationError(ApplicationError):
    """Raised when configuration is missing or invalid."""


class NoAppSelectedError(ConfigurationError):
    """Raised when no app is given and no default app is configured."""


class UnsupportedProviderError(ConfigurationError):
    """Raised when a provider type has no identity exchange."""


class SecretStoreError(ApplicationError):
    """Raised when the secret store cannot be read or written."""


class SecretNotFoundError(SecretStoreError):
    """Raised when no secret is stored for the requested key."""


class PromptError(ApplicationError):
    """Raised when reading input from the terminal fails."""


class IdentityExchangeError(ApplicationError):
    """Raised when temporary credentials cannot be obtained from the identity provider."""


class DeliveryError(ApplicationError):
    """Raised when credentials cannot be delivered to their target."""

"""Domain exceptions."""


class DomainError(Exception):
    """Base exception for domain errors."""


class InvalidCredentialError(DomainError):
    """Raised when a credential is created without complete key material."""


class InvalidDeliveryTargetError(DomainError):
    """Raised when a delivery target is inconsistent with its mode."""

"""Provider type value object."""

from enum import StrEnum


class ProviderType(StrEnum):
    """Identity provider protocol family."""

    ONELOGIN = "onelogin"
    OKTA = "okta"

    def __str__(self) -> str:
        return self.value

    @property
    def display_name(self) -> str:
        """Human-readable display name."""
        match self:
            case ProviderType.ONELOGIN:
                return "OneLogin"
            case ProviderType.OKTA:
                return "Okta"

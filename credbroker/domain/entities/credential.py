"""Credential entity representing a short-lived AWS access grant."""

from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Self

from ..exceptions import InvalidCredentialError


@dataclass(frozen=True, slots=True)
class Credential:
    """Temporary credentials issued by STS for a single app."""

    access_key_id: str
    secret_access_key: str
    session_token: str
    expiration: datetime
    app_name: str

    def __post_init__(self) -> None:
        """Reject incomplete key material and normalize the expiration."""
        missing = [
            name
            for name in ("access_key_id", "secret_access_key", "session_token", "app_name")
            if not getattr(self, name)
        ]
        if missing:
            msg = f"Credential is missing required fields: {', '.join(missing)}"
            raise InvalidCredentialError(msg)

        if self.expiration.tzinfo is None:
            # Frozen dataclass, so bypass __setattr__
            object.__setattr__(self, "expiration", self.expiration.replace(tzinfo=UTC))

    @property
    def is_expired(self) -> bool:
        """Check if the credential has already expired."""
        return datetime.now(UTC) >= self.expiration

    def as_environment(self) -> dict[str, str]:
        """Environment variables understood by AWS SDKs and the AWS CLI."""
        return {
            "AWS_ACCESS_KEY_ID": self.access_key_id,
            "AWS_SECRET_ACCESS_KEY": self.secret_access_key,
            "AWS_SESSION_TOKEN": self.session_token,
        }

    def as_profile(self) -> dict[str, str]:
        """Keys written to a section of an AWS credentials file."""
        return {
            "aws_access_key_id": self.access_key_id,
            "aws_secret_access_key": self.secret_access_key,
            "aws_session_token": self.session_token,
            "aws_expiration": self.expiration.astimezone(UTC).strftime("%Y-%m-%dT%H:%M:%SZ"),
        }

    @classmethod
    def from_sts(cls, raw: dict, *, app_name: str) -> Self:
        """Factory method to create a Credential from an STS ``Credentials`` block."""
        return cls(
            access_key_id=raw.get("AccessKeyId", ""),
            secret_access_key=raw.get("SecretAccessKey", ""),
            session_token=raw.get("SessionToken", ""),
            expiration=raw["Expiration"],
            app_name=app_name,
        )

"""AWS STS client exchanging SAML assertions for temporary credentials."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from ....application.exceptions import IdentityExchangeError
from ....domain.entities import Credential

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class StsClientConfig:
    """Configuration for the STS client."""

    region: str = "us-east-1"


class StsClient:
    """Calls ``AssumeRoleWithSAML``; the call is unsigned, so no AWS credentials are needed."""

    def __init__(self, config: StsClientConfig | None = None, *, client: Any = None) -> None:
        self._config = config or StsClientConfig()
        self._client = client

    def _get_client(self) -> Any:
        """Get or create the boto3 STS client."""
        if self._client is None:
            self._client = boto3.client("sts", region_name=self._config.region)
        return self._client

    def assume_role_with_saml(
        self,
        *,
        role_arn: str,
        principal_arn: str,
        assertion: str,
        duration: int,
        app_name: str,
    ) -> Credential:
        """
        Exchange a SAML assertion for temporary credentials.

        Raises:
            IdentityExchangeError: If STS rejects the assertion.
        """
        logger.info("Assuming role %s for %d seconds", role_arn, duration)
        try:
            response = self._get_client().assume_role_with_saml(
                RoleArn=role_arn,
                PrincipalArn=principal_arn,
                SAMLAssertion=assertion,
                DurationSeconds=duration,
            )
        except (BotoCoreError, ClientError) as e:
            msg = f"assuming role {role_arn}: {e}"
            raise IdentityExchangeError(msg) from e

        return Credential.from_sts(response["Credentials"], app_name=app_name)

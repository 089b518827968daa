"""Port for credential delivery - driven/secondary port."""

from dataclasses import dataclass
from typing import Protocol

from ...domain.entities import Credential
from ...domain.value_objects import DeliveryTarget, OutputMode


@dataclass(frozen=True, slots=True)
class DeliveryReceipt:
    """Outcome of a successful delivery."""

    mode: OutputMode
    path: str | None = None


class CredentialSink(Protocol):
    """Port for handing a credential to its consumer."""

    def deliver(self, credential: Credential, target: DeliveryTarget) -> DeliveryReceipt:
        """
        Deliver a credential.

        Raises:
            DeliveryError: If the credential cannot be written.
        """
        ...

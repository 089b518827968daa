"""Base credential sink with common functionality."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ....application.ports import DeliveryReceipt
    from ....domain.entities import Credential
    from ....domain.value_objects import DeliveryTarget


class BaseCredentialSink(ABC):
    """Abstract base class for credential sinks."""

    def __init__(self) -> None:
        """Initialize the credential sink."""
        self._logger = logging.getLogger(self.__class__.__name__)

    @abstractmethod
    def deliver(self, credential: Credential, target: DeliveryTarget) -> DeliveryReceipt:
        """Deliver the credential to the target."""
        ...

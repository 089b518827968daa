"""HTTP client configuration shared by identity provider adapters."""

from dataclasses import dataclass

import httpx


@dataclass(frozen=True, slots=True)
class HttpClientConfig:
    """Configuration for identity provider HTTP clients."""

    timeout: float = 30.0
    verify: bool = True

    def create_client(self) -> httpx.Client:
        """Create a synchronous client; callers close it with ``with``."""
        return httpx.Client(
            timeout=self.timeout,
            verify=self.verify,
            follow_redirects=True,
            headers={"Accept": "application/json"},
        )

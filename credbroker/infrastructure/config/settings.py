"""Application settings loaded from environment variables."""

import os
from dataclasses import dataclass, field
from functools import cached_property

from ..adapters.aws.sts import StsClientConfig
from ..adapters.identity.http import HttpClientConfig

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _env_bool(key: str, default: bool = False) -> bool:
    """Get boolean from environment variable."""
    return os.environ.get(key, str(default)).lower() in ("true", "1", "yes")


def _env_float(key: str, default: float) -> float:
    """Get float from environment variable."""
    return float(os.environ.get(key, str(default)))


def _env_str(key: str, default: str = "") -> str:
    """Get string from environment variable."""
    return os.environ.get(key, default)


@dataclass
class Settings:
    """Application settings container."""

    # Configuration file
    config_path: str = field(default_factory=lambda: _env_str("CREDBROKER_CONFIG", "~/.credbroker.yaml"))

    # Secret store
    keychain_service: str = field(default_factory=lambda: _env_str("CREDBROKER_KEYCHAIN_SERVICE", "credbroker"))

    # Identity providers
    http_timeout: float = field(default_factory=lambda: _env_float("CREDBROKER_HTTP_TIMEOUT", 30.0))
    http_verify_tls: bool = field(default_factory=lambda: _env_bool("CREDBROKER_HTTP_VERIFY_TLS", default=True))

    # AWS
    sts_region: str = field(default_factory=lambda: _env_str("CREDBROKER_STS_REGION", "us-east-1"))

    # Logging
    log_level: str = field(default_factory=lambda: _env_str("LOG_LEVEL", "WARNING"))

    def validate(self) -> None:
        """Validate settings."""
        errors: list[str] = []

        if not self.config_path:
            errors.append("CREDBROKER_CONFIG must not be empty")
        if not self.keychain_service:
            errors.append("CREDBROKER_KEYCHAIN_SERVICE must not be empty")
        if not self.sts_region:
            errors.append("CREDBROKER_STS_REGION must not be empty")
        if self.http_timeout <= 0:
            errors.append("CREDBROKER_HTTP_TIMEOUT must be positive")
        if self.log_level.upper() not in LOG_LEVELS:
            errors.append(f"LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}")

        if errors:
            msg = f"Invalid settings: {'; '.join(errors)}"
            raise ValueError(msg)

    @cached_property
    def http_config(self) -> HttpClientConfig:
        """Get HTTP client configuration shared by identity exchanges."""
        return HttpClientConfig(
            timeout=self.http_timeout,
            verify=self.http_verify_tls,
        )

    @cached_property
    def sts_config(self) -> StsClientConfig:
        """Get STS client configuration."""
        return StsClientConfig(region=self.sts_region)


def load_settings(**overrides: str) -> Settings:
    """Load and validate settings from environment, applying non-empty overrides."""
    settings = Settings(**{k: v for k, v in overrides.items() if v})
    settings.validate()
    return settings

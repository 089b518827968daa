"""YAML file configuration store."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from ....application.exceptions import ConfigurationError
from ....domain.entities import App, OktaApp, OneLoginApp, OktaProvider, OneLoginProvider, Provider
from ....domain.value_objects import ProviderType

logger = logging.getLogger(__name__)

ONELOGIN_REGIONS = ("us", "eu")


class YamlConfigStore:
    """
    Configuration store backed by a YAML file.

    Implements the ConfigStore port. The file has three top-level mappings:
    ``global``, ``providers`` and ``apps``. A missing file is treated as an
    empty configuration.
    """

    def __init__(self, path: str | Path) -> None:
        """
        Initialize the store.

        Args:
            path: Location of the YAML file; ``~`` is expanded.
        """
        self._path = Path(path).expanduser()
        self._data: dict[str, Any] | None = None

    @property
    def path(self) -> Path:
        """Resolved configuration file path."""
        return self._path

    def selected_app(self) -> str:
        return self._lookup("global", "selected-app")

    def credentials_path(self) -> str:
        return self._lookup("global", "credentials-path")

    def provider_for_app(self, app: str) -> str:
        return self._lookup("apps", app, "provider")

    def type_for_provider(self, provider: str) -> str:
        return self._lookup("providers", provider, "type")

    def list_apps(self) -> dict[str, str]:
        apps = self._section("apps")
        return {
            str(name): str(values.get("provider", "")) if isinstance(values, dict) else ""
            for name, values in apps.items()
        }

    def get_app(self, name: str, provider_type: ProviderType) -> App:
        """Read the typed configuration of an app."""
        raw = self._entry("apps", name)
        common = {
            "name": name,
            "provider": self._required(raw, "provider", f"app '{name}'"),
            "duration": self._duration(raw, f"app '{name}'"),
        }

        match provider_type:
            case ProviderType.ONELOGIN:
                return OneLoginApp(
                    **common,
                    app_id=self._required(raw, "app-id", f"app '{name}'"),
                    principal_arn=self._required(raw, "principal-arn", f"app '{name}'"),
                    role_arn=self._required(raw, "role-arn", f"app '{name}'"),
                )
            case ProviderType.OKTA:
                return OktaApp(
                    **common,
                    url=self._required(raw, "url", f"app '{name}'"),
                    role_arn=str(raw.get("role-arn", "")),
                )

    def get_provider(self, name: str, provider_type: ProviderType) -> Provider:
        """Read the typed configuration of a provider."""
        raw = self._entry("providers", name)
        context = f"provider '{name}'"
        common = {
            "name": name,
            "type": provider_type,
            "username": str(raw.get("username") or ""),
            "duration": self._duration(raw, context),
        }

        match provider_type:
            case ProviderType.ONELOGIN:
                region = str(raw.get("region") or "us").lower()
                if region not in ONELOGIN_REGIONS:
                    msg = f"{context}: region must be one of {', '.join(ONELOGIN_REGIONS)}, got '{region}'"
                    raise ConfigurationError(msg)
                return OneLoginProvider(
                    **common,
                    client_id=self._required(raw, "client-id", context),
                    client_secret=self._required(raw, "client-secret", context),
                    subdomain=self._required(raw, "subdomain", context),
                    region=region,
                )
            case ProviderType.OKTA:
                return OktaProvider(
                    **common,
                    base_url=self._required(raw, "base-url", context).rstrip("/"),
                )

    def set_selected_app(self, app: str) -> None:
        """Persist the selected app, keeping the rest of the file."""
        data = self._load()
        section = data.get("global")
        if not isinstance(section, dict):
            section = {}
            data["global"] = section
        section["selected-app"] = app
        self._save(data)

    def _load(self) -> dict[str, Any]:
        """Read and cache the configuration file."""
        if self._data is not None:
            return self._data

        if not self._path.exists():
            logger.debug("Config file %s not found, using empty configuration", self._path)
            self._data = {}
            return self._data

        try:
            with self._path.open(encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            msg = f"Failed to read config file {self._path}: {e}"
            raise ConfigurationError(msg) from e

        if not isinstance(data, dict):
            msg = f"Config file {self._path} must contain a mapping"
            raise ConfigurationError(msg)

        self._data = data
        return self._data

    def _save(self, data: dict[str, Any]) -> None:
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with self._path.open("w", encoding="utf-8") as f:
                yaml.safe_dump(data, f, default_flow_style=False, sort_keys=False)
        except OSError as e:
            msg = f"Failed to write config file {self._path}: {e}"
            raise ConfigurationError(msg) from e
        self._data = data

    def _section(self, key: str) -> dict[str, Any]:
        """Return a top-level mapping keyed by string; YAML may load names like 2024 as ints."""
        section = self._load().get(key) or {}
        if not isinstance(section, dict):
            return {}
        return {str(name): value for name, value in section.items()}

    def _entry(self, section: str, name: str) -> dict[str, Any]:
        entry = self._section(section).get(name)
        if not isinstance(entry, dict):
            msg = f"'{name}' is not configured under '{section}'"
            raise ConfigurationError(msg)
        return entry

    def _lookup(self, section: str, *keys: str) -> str:
        """Flat lookup returning an empty string for anything missing."""
        value: Any = self._section(section)
        for key in keys:
            if not isinstance(value, dict):
                return ""
            value = value.get(key)
        return "" if value is None or isinstance(value, dict) else str(value)

    @staticmethod
    def _required(raw: dict[str, Any], key: str, context: str) -> str:
        value = raw.get(key)
        if value is None or value == "":
            msg = f"{context} is missing required attribute '{key}'"
            raise ConfigurationError(msg)
        return str(value)

    @staticmethod
    def _duration(raw: dict[str, Any], context: str) -> int | None:
        value = raw.get("duration")
        if value is None or value == "":
            return None
        try:
            duration = int(value)
        except (TypeError, ValueError) as e:
            msg = f"{context}: duration must be an integer number of seconds"
            raise ConfigurationError(msg) from e
        if duration <= 0:
            msg = f"{context}: duration must be positive"
            raise ConfigurationError(msg)
        return duration

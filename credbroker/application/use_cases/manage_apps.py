"""Use cases for listing and selecting configured apps."""

import logging
from dataclasses import dataclass

from ..exceptions import ConfigurationError
from ..ports import ConfigStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class AppSummary:
    """A configured app as shown to the user."""

    name: str
    provider: str
    selected: bool


class ListApps:
    """Use case for listing configured apps."""

    def __init__(self, config_store: ConfigStore) -> None:
        self._config = config_store

    def execute(self) -> list[AppSummary]:
        """Return all configured apps sorted by name."""
        selected = self._config.selected_app()
        return [
            AppSummary(name=name, provider=provider, selected=name == selected)
            for name, provider in sorted(self._config.list_apps().items())
        ]


class SelectApp:
    """Use case for choosing the app used when ``get`` is called without one."""

    def __init__(self, config_store: ConfigStore) -> None:
        self._config = config_store

    def execute(self, app: str) -> None:
        """
        Persist ``app`` as the selected app.

        Raises:
            ConfigurationError: If the app is not configured.
        """
        if app not in self._config.list_apps():
            msg = f"App '{app}' does not exist"
            raise ConfigurationError(msg)

        self._config.set_selected_app(app)
        logger.info("Selected app '%s'", app)

"""
credbroker

Composition root and command-line entry point.
Wires together all layers and performs the single report-and-exit.
"""

from __future__ import annotations

import logging
import sys
from functools import cached_property
from typing import TYPE_CHECKING, NoReturn

import typer
from rich.console import Console
from rich.text import Text

from . import __version__
from .application.exceptions import ApplicationError
from .application.use_cases import GetCredentialsRequest, GetTemporaryCredentials, ListApps, SelectApp
from .domain.value_objects import OutputMode, ProviderType
from .infrastructure.adapters import (
    KeyringSecretStore,
    OktaIdentityExchange,
    OneLoginIdentityExchange,
    ProfileFileCredentialSink,
    ShellCredentialSink,
    StsClient,
    TerminalPrompter,
    YamlConfigStore,
)
from .infrastructure.config import Settings, load_settings

if TYPE_CHECKING:
    from .application.ports import ConfigStore, CredentialSink, IdentityExchange, Prompter, SecretStore

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: str) -> None:
    """Send log records to stderr; stdout is reserved for shell output."""
    logging.basicConfig(
        level=level.upper(),
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stderr)],
        force=True,
    )


class ApplicationContainer:
    """
    Dependency injection container.

    Responsible for creating and wiring all application components.
    """

    def __init__(self, settings: Settings, console: Console) -> None:
        """Initialize container with settings and the stderr console."""
        self._settings = settings
        self.console = console

    @cached_property
    def config_store(self) -> ConfigStore:
        """The configuration store, shared by all use cases."""
        return YamlConfigStore(self._settings.config_path)

    def create_secret_store(self) -> SecretStore:
        """Create the keychain adapter."""
        return KeyringSecretStore(self._settings.keychain_service)

    def create_prompter(self) -> Prompter:
        """Create the terminal prompter."""
        return TerminalPrompter(self.console)

    def create_identity_exchanges(self, prompter: Prompter) -> dict[ProviderType, IdentityExchange]:
        """Create one identity exchange per supported provider type."""
        sts = StsClient(self._settings.sts_config)
        return {
            ProviderType.ONELOGIN: OneLoginIdentityExchange(self._settings.http_config, sts, prompter),
            ProviderType.OKTA: OktaIdentityExchange(self._settings.http_config, sts, prompter),
        }

    def create_credential_sinks(self) -> dict[OutputMode, CredentialSink]:
        """Create one credential sink per output mode."""
        return {
            OutputMode.SHELL: ShellCredentialSink(),
            OutputMode.FILE: ProfileFileCredentialSink(),
        }

    def create_get_use_case(self) -> GetTemporaryCredentials:
        """Create the main use case with all dependencies."""
        prompter = self.create_prompter()
        return GetTemporaryCredentials(
            config_store=self.config_store,
            secret_store=self.create_secret_store(),
            prompter=prompter,
            exchanges=self.create_identity_exchanges(prompter),
            sinks=self.create_credential_sinks(),
        )

    def create_list_apps_use_case(self) -> ListApps:
        return ListApps(self.config_store)

    def create_select_app_use_case(self) -> SelectApp:
        return SelectApp(self.config_store)


app = typer.Typer(
    help="Obtain temporary AWS credentials through a SAML identity provider.",
    no_args_is_help=True,
)
apps_app = typer.Typer(help="Manage configured apps.", no_args_is_help=True)
app.add_typer(apps_app, name="apps")


def abort_with_error(console: Console, error: Exception) -> NoReturn:
    """Print one red error line and exit with a failure status."""
    console.print(Text(str(error), style="red"), soft_wrap=True)
    raise typer.Exit(code=1)


def get_container(ctx: typer.Context) -> ApplicationContainer:
    """Return the container created by the root callback."""
    return ctx.find_root().obj


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"credbroker {__version__}")
        raise typer.Exit


@app.callback()
def main_callback(
    ctx: typer.Context,
    config: str | None = typer.Option(
        None, "--config", "-c", help="Configuration file (default $CREDBROKER_CONFIG or ~/.credbroker.yaml)."
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
    version: bool = typer.Option(
        False, "--version", callback=_version_callback, is_eager=True, help="Show the version and exit."
    ),
) -> None:
    """Obtain temporary AWS credentials through a SAML identity provider."""
    console = Console(stderr=True)
    try:
        settings = load_settings(config_path=config or "")
    except ValueError as e:
        abort_with_error(console, e)

    configure_logging("DEBUG" if verbose else settings.log_level)
    ctx.obj = ApplicationContainer(settings, console)


@app.command("get")
def get_credentials(
    ctx: typer.Context,
    app_name: str | None = typer.Argument(
        None, metavar="[APP]", help="App to get credentials for (default: the selected app)."
    ),
    shell: bool = typer.Option(False, "--shell", "-s", help="Print credentials to shell."),
    write_to_file: str | None = typer.Option(
        None,
        "--write-to-file",
        "-w",
        help="Write credentials to this file instead of the default ($HOME/.aws/credentials).",
    ),
    save_password: bool = typer.Option(False, "--save-password", "-K", help="Save password in keychain."),
) -> None:
    """
    Get temporary credentials for an app.

    Obtains a SAML assertion from the app's identity provider and uses it to
    retrieve temporary credentials from AWS. If no app is given, the selected
    app is assumed.
    """
    container = get_container(ctx)
    request = GetCredentialsRequest(
        app=app_name,
        shell=shell,
        write_to_file=write_to_file,
        save_password=save_password,
    )

    try:
        result = container.create_get_use_case().execute(request)
    except ApplicationError as e:
        abort_with_error(container.console, e)

    if result.written_to:
        container.console.print(
            Text(f"Credentials written successfully to '{result.written_to}'", style="green"),
            soft_wrap=True,
        )


@apps_app.command("ls")
def list_apps(ctx: typer.Context) -> None:
    """List configured apps; the selected app is marked with '*'."""
    container = get_container(ctx)
    try:
        apps = container.create_list_apps_use_case().execute()
    except ApplicationError as e:
        abort_with_error(container.console, e)

    if not apps:
        container.console.print(Text("No apps configured.", style="yellow"))
        return

    for summary in apps:
        marker = "*" if summary.selected else " "
        typer.echo(f"{marker} {summary.name} ({summary.provider})")


@apps_app.command("select")
def select_app(
    ctx: typer.Context,
    app_name: str = typer.Argument(..., metavar="APP", help="App to use when 'get' is called without one."),
) -> None:
    """Select the default app."""
    container = get_container(ctx)
    try:
        container.create_select_app_use_case().execute(app_name)
    except ApplicationError as e:
        abort_with_error(container.console, e)

    container.console.print(Text(f"Selected app '{app_name}'", style="green"))


def main() -> None:
    """Main entry point."""
    app(prog_name="credbroker")


if __name__ == "__main__":
    main()

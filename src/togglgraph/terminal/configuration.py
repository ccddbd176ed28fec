# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import pendulum
import typer
from rich.console import Console
from rich.table import Table

from togglgraph import configuration
from togglgraph.repository.configuration import CONFIGURATION_REPO
from togglgraph.terminal.custom_typer import AliasedTyperGroup

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)


def mask_token(token: Optional[str]) -> str:
    if token is None:
        return "None"
    if len(token) <= 4:
        return "****"
    return "*" * (len(token) - 4) + token[-4:]


@app.command("view, v")
def view() -> None:
    """Display current configuration settings."""
    config = CONFIGURATION_REPO.get_config()

    console = Console()
    table = Table()
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="magenta")

    table.add_row("api_token", mask_token(config["api_token"]))
    table.add_row("workspace_id", str(config["workspace_id"]))
    table.add_row("workspace_name", str(config["workspace_name"]))
    table.add_row("cache_timeout", f"{config['cache_timeout']} min")
    table.add_row("timezone", config["timezone"])
    table.add_row("log_level", config["log_level"])
    table.add_row("config_path", str(configuration.APP_CONFIG_PATH))

    console.print(table)


@app.command("set, s", no_args_is_help=True)
def set_config(
    token: Annotated[
        Optional[str], typer.Option("--token", "-t", help="Toggl Track API token")
    ] = None,
    remove_token: Annotated[
        bool, typer.Option("--remove-token", help="Forget the stored API token")
    ] = False,
    workspace: Annotated[
        Optional[str], typer.Option("--workspace", "-w", help="Workspace id")
    ] = None,
    cache_timeout: Annotated[
        Optional[int],
        typer.Option(
            "--cache-timeout",
            "-c",
            help="Minutes before refreshing data from Toggl (minimum: 1)",
        ),
    ] = None,
    timezone: Annotated[
        Optional[str],
        typer.Option("--timezone", "-z", help='IANA timezone name or "local"'),
    ] = None,
    log_level: Annotated[
        Optional[str], typer.Option("--log-level", "-l", help="DEBUG, INFO, WARNING")
    ] = None,
) -> None:
    """Update configuration settings."""
    if timezone is not None and timezone != "local":
        try:
            pendulum.timezone(timezone)
        except (KeyError, ValueError):
            raise typer.BadParameter(f"Unknown timezone: {timezone}")

    if workspace is not None and not workspace.isdigit():
        raise typer.BadParameter(f"Workspace id must be numeric, got {workspace}")

    CONFIGURATION_REPO.update_config(
        api_token=token,
        remove_api_token=remove_token,
        workspace_id=workspace,
        cache_timeout=cache_timeout,
        timezone=timezone,
        log_level=log_level,
    )
    typer.echo("Configuration updated")

# SPDX-License-Identifier: MIT

import logging
from pathlib import Path
from typing import Annotated, Any, Optional

import pendulum
import requests
import typer
from rich.console import Console
from rich.table import Table

from togglgraph import state as app_state
from togglgraph.api.toggl import TogglApiService
from togglgraph.cache import TimedCache
from togglgraph.configuration import Configuration
from togglgraph.errors import ParseError
from togglgraph.logging_config import setup_logging
from togglgraph.model.day_bucket import DayBucket
from togglgraph.model.project import Project
from togglgraph.repository.configuration import CONFIGURATION_REPO
from togglgraph.service.aggregate import aggregate_daily
from togglgraph.service.fetch import (
    TimeEntrySource,
    get_projects_with_cache,
    get_time_entries_with_cache,
)
from togglgraph.service.filter import filter_by_project, get_project_ids
from togglgraph.terminal import configuration
from togglgraph.terminal.custom_typer import AliasedTyperGroup
from togglgraph.terminal.parse import parse_date, parse_graph_block
from togglgraph.time import SystemClock, today_local
from togglgraph.view.calendar import calendar_view, day_view, get_project_name

logger = logging.getLogger(__name__)

DEFAULT_WEEKS = 52

app = typer.Typer(
    cls=AliasedTyperGroup,
    help="togglgraph - Toggl Track activity calendar in the terminal",
    no_args_is_help=True,
)
app.add_typer(configuration.app, name="config, c", help="View or change settings")


@app.callback()
def main_callback(
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-V", help="Enable debug logging"),
    ] = False,
) -> None:
    """
    togglgraph - Toggl Track activity calendar in the terminal

    Global options that apply to all commands.
    """
    if verbose:
        setup_logging(logging.DEBUG)


def get_api_service(config: Configuration) -> TogglApiService:
    if not config["api_token"] or not config["workspace_id"]:
        typer.echo(
            "Please configure the Toggl API token and workspace: "
            "togglgraph config set --token <token> --workspace <id>"
        )
        raise typer.Exit(1)
    return TogglApiService(config["api_token"])


def load_graph_data(
    source: TimeEntrySource,
    cache: TimedCache[Any],
    workspace_id: str,
    start_date: pendulum.Date,
    end_date: pendulum.Date,
    tz: str,
    refresh: bool = False,
) -> tuple[list[DayBucket], list[Project]]:
    entries = get_time_entries_with_cache(
        source, cache, workspace_id, start_date, end_date, tz, refresh=refresh
    )
    projects = get_projects_with_cache(source, cache, workspace_id, refresh=refresh)
    buckets = aggregate_daily(entries, start_date, end_date, SystemClock(), tz)
    return buckets, projects


def render_graph(
    buckets: list[DayBucket],
    projects: list[Project],
    workspace_name: Optional[str],
) -> None:
    project_id = app_state.get_project_filter()
    calendar_view(
        filter_by_project(buckets, project_id),
        projects,
        project_id=project_id,
        workspace_name=workspace_name,
    )


def interactive_loop(
    source: TimeEntrySource,
    cache: TimedCache[Any],
    config: Configuration,
    start_date: pendulum.Date,
    end_date: pendulum.Date,
    buckets: list[DayBucket],
    projects: list[Project],
) -> None:
    workspace_id = str(config["workspace_id"])
    tracked = ", ".join(
        f"{project_id} {get_project_name(projects, project_id)}"
        for project_id in get_project_ids(buckets)
    )
    if tracked:
        typer.echo(f"Projects in range: {tracked}")
    while True:
        answer = typer.prompt(
            "Project id (blank for all, r to reload, q to quit)",
            default="",
            show_default=False,
        ).strip()

        if answer == "q":
            return
        if answer == "r":
            try:
                buckets, projects = load_graph_data(
                    source,
                    cache,
                    workspace_id,
                    start_date,
                    end_date,
                    config["timezone"],
                    refresh=True,
                )
            except requests.RequestException as e:
                typer.echo(f"Error fetching data from Toggl: {e}", err=True)
                continue
        elif answer == "":
            app_state.reset_project_filter()
        elif answer.isdigit():
            app_state.set_project_filter(int(answer))
        else:
            typer.echo(f"Unknown project id: {answer}")
            continue

        render_graph(buckets, projects, config["workspace_name"])


@app.command("graph, g")
def graph(
    start: Annotated[
        Optional[str],
        typer.Option("--start", "-s", help="YYYY-MM-DD, day offset, today or yesterday"),
    ] = None,
    end: Annotated[
        Optional[str],
        typer.Option("--end", "-e", help="YYYY-MM-DD, day offset, today or yesterday"),
    ] = None,
    project: Annotated[
        Optional[int], typer.Option("--project", "-p", help="Only show this project")
    ] = None,
    block: Annotated[
        Optional[Path],
        typer.Option(
            "--block",
            "-b",
            help="File with start:/end:/project: lines",
            exists=True,
            dir_okay=False,
        ),
    ] = None,
    interactive: Annotated[
        bool,
        typer.Option("--interactive", "-i", help="Change the project filter in a loop"),
    ] = False,
) -> None:
    """Show a calendar heatmap of tracked time per day."""
    config = CONFIGURATION_REPO.get_config()
    source = get_api_service(config)
    tz = config["timezone"]

    start_date = parse_date(start, tz)
    end_date = parse_date(end, tz)
    project_id = project
    # Explicit options win over the block
    if block is not None:
        try:
            graph_block = parse_graph_block(block.read_text(), tz)
        except ParseError as e:
            raise typer.BadParameter(str(e))
        start_date = start_date or graph_block["start"]
        end_date = end_date or graph_block["end"]
        if project_id is None:
            project_id = graph_block["project_id"]
    end_date = end_date or today_local(tz)
    start_date = start_date or end_date.subtract(weeks=DEFAULT_WEEKS)

    if start_date > end_date:
        raise typer.BadParameter(f"Start date {start_date} is after end date {end_date}")

    app_state.reset_project_filter()
    if project_id is not None:
        app_state.set_project_filter(project_id)

    cache: TimedCache[Any] = TimedCache(config["cache_timeout"])
    try:
        buckets, projects = load_graph_data(
            source, cache, str(config["workspace_id"]), start_date, end_date, tz
        )
    except requests.RequestException as e:
        logger.debug("Fetching graph data failed", exc_info=True)
        typer.echo(f"Error fetching data from Toggl: {e}", err=True)
        raise typer.Exit(1)

    render_graph(buckets, projects, config["workspace_name"])

    if interactive:
        interactive_loop(
            source, cache, config, start_date, end_date, buckets, projects
        )


@app.command("day, d")
def day(
    date: Annotated[
        Optional[str],
        typer.Argument(help="YYYY-MM-DD, day offset, today or yesterday"),
    ] = None,
    project: Annotated[
        Optional[int], typer.Option("--project", "-p", help="Only show this project")
    ] = None,
) -> None:
    """List the entries tracked on a single day."""
    config = CONFIGURATION_REPO.get_config()
    source = get_api_service(config)
    tz = config["timezone"]
    day_date = parse_date(date, tz) or today_local(tz)

    cache: TimedCache[Any] = TimedCache(config["cache_timeout"])
    try:
        buckets, projects = load_graph_data(
            source, cache, str(config["workspace_id"]), day_date, day_date, tz
        )
    except requests.RequestException as e:
        typer.echo(f"Error fetching data from Toggl: {e}", err=True)
        raise typer.Exit(1)

    day_view(filter_by_project(buckets, project)[0], projects)


@app.command("projects, p")
def projects() -> None:
    """List the projects of the configured workspace."""
    config = CONFIGURATION_REPO.get_config()
    source = get_api_service(config)

    try:
        workspace_projects = source.get_projects(str(config["workspace_id"]))
    except requests.RequestException as e:
        typer.echo(f"Error fetching projects from Toggl: {e}", err=True)
        raise typer.Exit(1)

    table = Table()
    table.add_column("id", style="cyan")
    table.add_column("name")
    table.add_column("active")
    for workspace_project in workspace_projects:
        table.add_row(
            str(workspace_project["id"]),
            workspace_project["name"],
            "✓" if workspace_project.get("active", True) else "✗",
        )
    Console().print(table)


@app.command("workspaces, w")
def workspaces(
    select: Annotated[
        Optional[int],
        typer.Option("--select", "-s", help="Store this workspace in the settings"),
    ] = None,
) -> None:
    """List available workspaces, optionally selecting one."""
    config = CONFIGURATION_REPO.get_config()
    if not config["api_token"]:
        typer.echo("Please configure the Toggl API token: togglgraph config set --token <token>")
        raise typer.Exit(1)
    source = TogglApiService(config["api_token"])

    try:
        available = source.fetch_workspaces()
    except requests.RequestException as e:
        typer.echo(f"Failed to load workspaces. Please check your API token. ({e})", err=True)
        raise typer.Exit(1)

    if select is not None:
        selected = next((w for w in available if w["id"] == select), None)
        if selected is None:
            typer.echo(f"Unknown workspace id: {select}")
            raise typer.Exit(1)
        CONFIGURATION_REPO.update_config(
            workspace_id=str(selected["id"]), workspace_name=selected["name"]
        )
        typer.echo(f"Selected workspace {selected['name']}")
        return

    table = Table()
    table.add_column("id", style="cyan")
    table.add_column("name")
    table.add_column("selected")
    for workspace in available:
        table.add_row(
            str(workspace["id"]),
            workspace["name"],
            "✓" if str(workspace["id"]) == config["workspace_id"] else "",
        )
    Console().print(table)


def run() -> None:
    app()

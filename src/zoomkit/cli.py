"""
zoomkit – command line entrypoint (Click group)

Subcommands:
- whoami: show the authenticated Zoom user
- users: list account users
- meetings: list a user's meetings
- participants: participants report for a past meeting
- registrants: list registrants of a meeting
"""

import logging
import os
import sys
from collections.abc import Callable
from typing import Any

import rich_click as click

from zoomkit import __version__
from zoomkit.client import ZoomClient
from zoomkit.config import Config
from zoomkit.exceptions import ConfigError, ZoomkitError
from zoomkit.logger import setup_logging
from zoomkit.output import OutputFormatter

click.rich_click.TEXT_MARKUP = "rich"
click.rich_click.SHOW_ARGUMENTS = True
click.rich_click.GROUP_ARGUMENTS_OPTIONS = True

logger = logging.getLogger(__name__)

AUTH_MODE_LABELS = {
    "server_to_server": "Server-to-Server OAuth",
    "bearer": "Access token",
    "none": "None",
}


def _autoload_dotenv() -> None:
    """Load a local .env file for CLI usage.

    Skipped when ZOOMKIT_NO_DOTENV is set. Existing environment variables win.
    """
    if os.getenv("ZOOMKIT_NO_DOTENV"):
        return
    from dotenv import find_dotenv, load_dotenv

    try:
        dotenv_path = find_dotenv(usecwd=True)
        if dotenv_path:
            load_dotenv(dotenv_path, override=False)
    except OSError as e:
        logger.debug("Could not load .env file: %s", e)


def common_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Output, logging and config options shared by every subcommand"""
    func = click.option("--config", type=click.Path(exists=True), help="Path to config file")(func)
    func = click.option("--debug", "-d", is_flag=True, help="Debug output")(func)
    func = click.option("--verbose", "-v", is_flag=True, help="Verbose output")(func)
    func = click.option("--json", "-j", "json_mode", is_flag=True, help="JSON output mode")(func)
    return func


def paging_options(func: Callable[..., Any]) -> Callable[..., Any]:
    func = click.option("--next-page-token", help="Continue from a previous page")(func)
    func = click.option(
        "--page-size",
        type=click.IntRange(1, 300),
        default=30,
        show_default=True,
        help="Records per page",
    )(func)
    return func


def _page_query(page_size: int, next_page_token: str | None) -> dict[str, Any]:
    query: dict[str, Any] = {"page_size": page_size}
    if next_page_token:
        query["next_page_token"] = next_page_token
    return query


def _run(
    json_mode: bool,
    verbose: bool,
    debug: bool,
    config_path: str | None,
    action: Callable[[ZoomClient, OutputFormatter], None],
) -> None:
    """Build config and client, run ``action`` and report errors uniformly"""
    formatter = OutputFormatter("json" if json_mode else "human")

    try:
        cfg = Config(env_file=config_path)
        log_level = "DEBUG" if debug else ("INFO" if verbose else cfg.log_level)
        setup_logging(level=log_level, verbose=debug)

        cfg.validate()
        client = ZoomClient.from_config(cfg)
        logger.debug("Using %r", client)
        action(client, formatter)

    except ConfigError as e:
        formatter.output_exception(e)
        formatter.output_info(
            "Set ZOOM_ACCOUNT_ID/ZOOM_CLIENT_ID/ZOOM_CLIENT_SECRET or ZOOM_ACCESS_TOKEN, "
            "or pass --config"
        )
        if debug:
            raise
        sys.exit(1)
    except ZoomkitError as e:
        formatter.output_exception(e)
        if debug:
            raise
        sys.exit(1)


@click.group(help="zoomkit – Query the Zoom REST API")
@click.version_option(version=__version__)
def cli() -> None:
    """Top-level Click group."""
    _autoload_dotenv()


@cli.command(name="whoami", help="Show the authenticated Zoom user")
@common_options
def whoami(json_mode: bool, verbose: bool, debug: bool, config: str | None) -> None:
    def _action(client: ZoomClient, formatter: OutputFormatter) -> None:
        user = client.users().get("me")
        formatter.output_user(user, AUTH_MODE_LABELS[client.auth_mode])

    _run(json_mode, verbose, debug, config, _action)


@cli.command(name="users", help="List users on the account")
@click.option(
    "--status",
    type=click.Choice(["active", "inactive", "pending"]),
    help="Filter by user status",
)
@paging_options
@common_options
def users(
    status: str | None,
    page_size: int,
    next_page_token: str | None,
    json_mode: bool,
    verbose: bool,
    debug: bool,
    config: str | None,
) -> None:
    query = _page_query(page_size, next_page_token)
    if status:
        query["status"] = status

    def _action(client: ZoomClient, formatter: OutputFormatter) -> None:
        formatter.output_collection(client.users().list(query))

    _run(json_mode, verbose, debug, config, _action)


@cli.command(name="meetings", help="List meetings hosted by a user")
@click.argument("user_id", default="me")
@click.option(
    "--type",
    "meeting_type",
    type=click.Choice(["scheduled", "live", "upcoming", "upcoming_meetings", "previous_meetings"]),
    help="Which meetings to list",
)
@paging_options
@common_options
def meetings(
    user_id: str,
    meeting_type: str | None,
    page_size: int,
    next_page_token: str | None,
    json_mode: bool,
    verbose: bool,
    debug: bool,
    config: str | None,
) -> None:
    query = _page_query(page_size, next_page_token)
    if meeting_type:
        query["type"] = meeting_type

    def _action(client: ZoomClient, formatter: OutputFormatter) -> None:
        formatter.output_collection(client.meetings().list(user_id, query))

    _run(json_mode, verbose, debug, config, _action)


@cli.command(name="participants", help="Participants report for a past meeting (ID or UUID)")
@click.argument("meeting_id")
@paging_options
@common_options
def participants(
    meeting_id: str,
    page_size: int,
    next_page_token: str | None,
    json_mode: bool,
    verbose: bool,
    debug: bool,
    config: str | None,
) -> None:
    query = _page_query(page_size, next_page_token)

    def _action(client: ZoomClient, formatter: OutputFormatter) -> None:
        formatter.output_collection(client.reports().meeting_participants(meeting_id, query))

    _run(json_mode, verbose, debug, config, _action)


@cli.command(name="registrants", help="List registrants of a meeting")
@click.argument("meeting_id")
@click.option(
    "--status",
    type=click.Choice(["pending", "approved", "denied"]),
    help="Registrant status (Zoom defaults to approved)",
)
@paging_options
@common_options
def registrants(
    meeting_id: str,
    status: str | None,
    page_size: int,
    next_page_token: str | None,
    json_mode: bool,
    verbose: bool,
    debug: bool,
    config: str | None,
) -> None:
    query = _page_query(page_size, next_page_token)
    if status:
        query["status"] = status

    def _action(client: ZoomClient, formatter: OutputFormatter) -> None:
        formatter.output_collection(client.meetings().list_registrants(meeting_id, query))

    _run(json_mode, verbose, debug, config, _action)


def main() -> None:
    cli()


if __name__ == "__main__":
    main()

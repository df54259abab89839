"""
Output formatters for the CLI (JSON and human-readable tables)
"""

import json
from typing import Any

from rich.console import Console
from rich.table import Table

from zoomkit.exceptions import ZoomAPIError, ZoomkitError
from zoomkit.models import User
from zoomkit.paged import (
    MeetingCollection,
    PagedCollection,
    ParticipantCollection,
    RegistrantCollection,
    UserCollection,
)


def _fmt(value: Any) -> str:
    if value is None:
        return "N/A"
    if hasattr(value, "isoformat"):
        return str(value.isoformat())
    return str(value)


class OutputFormatter:
    """Format output in different modes"""

    def __init__(self, mode: str = "human"):
        """
        Initialize formatter

        Args:
            mode: Output mode (human, json)
        """
        self.mode = mode.lower()
        self.console = Console()

    def output_user(self, user: User, auth_mode: str) -> None:
        if self.mode == "json":
            self._output_json({"status": "success", "mode": auth_mode, "user": user.to_dict()})
            return
        self.console.print(f"[bold]Auth:[/bold] {auth_mode}")
        self.console.print(f"[bold]Name:[/bold] {user.full_name}")
        self.console.print(f"[bold]Email:[/bold] {user.email or 'N/A'}")
        self.console.print(f"[bold]User ID:[/bold] {user.id or 'N/A'}")
        self.console.print(f"[bold]Type:[/bold] {user.type_name}")
        if user.account_id:
            self.console.print(f"[bold]Account ID (API):[/bold] {user.account_id}")

    def output_collection(self, collection: PagedCollection[Any]) -> None:
        """Output one page of records followed by a continuation hint"""
        if self.mode == "json":
            self._output_json(collection.to_dict())
            return

        if isinstance(collection, MeetingCollection):
            table = self._meetings_table(collection)
        elif isinstance(collection, UserCollection):
            table = self._users_table(collection)
        elif isinstance(collection, ParticipantCollection):
            table = self._participants_table(collection)
        elif isinstance(collection, RegistrantCollection):
            table = self._registrants_table(collection)
        else:
            raise TypeError(f"Unsupported collection type: {type(collection).__name__}")

        if collection.is_empty():
            self.console.print(f"[yellow]No {collection.items_key} found[/yellow]")
        else:
            self.console.print(table)

        total = collection.pagination.total_records if collection.pagination else None
        if total is not None:
            self.console.print(f"[dim]Total records: {total}[/dim]")
        if collection.has_more_pages():
            self.console.print(
                f"[dim]More results available: --next-page-token {collection.next_page_token}[/dim]"
            )

    def _meetings_table(self, meetings: MeetingCollection) -> Table:
        table = Table(title="Zoom Meetings")
        table.add_column("Meeting ID", style="cyan")
        table.add_column("Topic", style="green")
        table.add_column("Type", style="magenta")
        table.add_column("Start Time", style="blue")
        table.add_column("Duration (min)", style="yellow")
        for meeting in meetings:
            table.add_row(
                str(meeting.id),
                meeting.topic or "N/A",
                meeting.type_name,
                _fmt(meeting.start_time),
                _fmt(meeting.duration),
            )
        return table

    def _users_table(self, users: UserCollection) -> Table:
        table = Table(title="Zoom Users")
        table.add_column("User ID", style="cyan")
        table.add_column("Name", style="green")
        table.add_column("Email", style="blue")
        table.add_column("Type", style="magenta")
        table.add_column("Status", style="yellow")
        for user in users:
            table.add_row(user.id, user.full_name, user.email, user.type_name, _fmt(user.status))
        return table

    def _participants_table(self, participants: ParticipantCollection) -> Table:
        table = Table(title="Meeting Participants")
        table.add_column("Name", style="cyan")
        table.add_column("Email", style="green")
        table.add_column("Joined", style="blue")
        table.add_column("Left", style="blue")
        table.add_column("Minutes", style="yellow")
        for participant in participants:
            table.add_row(
                participant.name or "N/A",
                _fmt(participant.user_email),
                _fmt(participant.join_time),
                _fmt(participant.leave_time),
                _fmt(participant.duration_minutes),
            )
        return table

    def _registrants_table(self, registrants: RegistrantCollection) -> Table:
        table = Table(title="Meeting Registrants")
        table.add_column("Name", style="cyan")
        table.add_column("Email", style="green")
        table.add_column("Status", style="magenta")
        table.add_column("Registered", style="blue")
        for registrant in registrants:
            table.add_row(
                registrant.full_name,
                registrant.email,
                _fmt(registrant.status),
                _fmt(registrant.create_time),
            )
        return table

    def output_error(self, message: str) -> None:
        """Output error message"""
        if self.mode == "json":
            self._output_json({"status": "error", "error": {"message": message}})
        else:
            self.console.print(f"[bold red]Error:[/bold red] {message}")

    def output_exception(self, error: ZoomkitError) -> None:
        """Output a zoomkit error with its code, details and field errors"""
        if self.mode == "json":
            self._output_json({"status": "error", "error": error.to_dict()})
            return

        if isinstance(error, ZoomAPIError) and error.status_code:
            self.output_error(f"Zoom API error ({error.status_code}): {error.message}")
        else:
            self.output_error(error.message)
        if error.details:
            self.output_info(error.details)
        if isinstance(error, ZoomAPIError) and error.field_errors:
            for field_name, messages in error.field_errors.items():
                self.output_info(f"  {field_name}: {'; '.join(messages)}")

    def output_info(self, message: str) -> None:
        """Output info message (human mode only)"""
        if self.mode != "json":
            self.console.print(message)

    def _output_json(self, data: Any) -> None:
        """Output as JSON"""
        print(json.dumps(data, indent=2, default=str))

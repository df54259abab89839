"""
Endpoint groups that call ZoomClient.request and map results to records
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from zoomkit.models import Meeting, Registrant, User, UserSettings
from zoomkit.paged import (
    MeetingCollection,
    ParticipantCollection,
    RegistrantCollection,
    UserCollection,
)

if TYPE_CHECKING:
    from zoomkit.client import ApiResponse, ZoomClient

Query = dict[str, Any] | None


class Resource:
    def __init__(self, client: ZoomClient):
        self.client = client


class Meetings(Resource):
    def create(self, user_id: str, data: dict[str, Any]) -> Meeting:
        response = self.client.request("POST", f"users/{user_id}/meetings", body=data)
        return Meeting.from_api(response.body or {})

    def list(self, user_id: str = "me", query: Query = None) -> MeetingCollection:
        response = self.client.request("GET", f"users/{user_id}/meetings", query=query)
        return MeetingCollection.from_api(response.body, response.pagination)

    def get(self, meeting_id: int | str, query: Query = None) -> Meeting:
        path_id = self.client.meeting_path_id(meeting_id)
        response = self.client.request("GET", f"meetings/{path_id}", query=query)
        return Meeting.from_api(response.body or {})

    def update(self, meeting_id: int | str, data: dict[str, Any]) -> None:
        path_id = self.client.meeting_path_id(meeting_id)
        self.client.request("PATCH", f"meetings/{path_id}", body=data)

    def delete(self, meeting_id: int | str, query: Query = None) -> None:
        path_id = self.client.meeting_path_id(meeting_id)
        self.client.request("DELETE", f"meetings/{path_id}", query=query)

    def add_registrant(self, meeting_id: int | str, data: dict[str, Any]) -> Registrant:
        path_id = self.client.meeting_path_id(meeting_id)
        response = self.client.request("POST", f"meetings/{path_id}/registrants", body=data)
        return Registrant.from_api(response.body or {})

    def list_registrants(self, meeting_id: int | str, query: Query = None) -> RegistrantCollection:
        path_id = self.client.meeting_path_id(meeting_id)
        response = self.client.request("GET", f"meetings/{path_id}/registrants", query=query)
        return RegistrantCollection.from_api(response.body, response.pagination)


class Users(Resource):
    def list(self, query: Query = None) -> UserCollection:
        response = self.client.request("GET", "users", query=query)
        return UserCollection.from_api(response.body, response.pagination)

    def get(self, user_id: str = "me", query: Query = None) -> User:
        response = self.client.request("GET", f"users/{user_id}", query=query)
        return User.from_api(response.body or {})

    def create(self, data: dict[str, Any]) -> User:
        response = self.client.request("POST", "users", body=data)
        return User.from_api(response.body or {})

    def update(self, user_id: str, data: dict[str, Any]) -> None:
        self.client.request("PATCH", f"users/{user_id}", body=data)

    def delete(self, user_id: str, query: Query = None) -> None:
        self.client.request("DELETE", f"users/{user_id}", query=query)

    def get_settings(self, user_id: str = "me", query: Query = None) -> UserSettings:
        response = self.client.request("GET", f"users/{user_id}/settings", query=query)
        return UserSettings.from_api(response.body or {})

    def update_settings(self, user_id: str, data: dict[str, Any]) -> None:
        self.client.request("PATCH", f"users/{user_id}/settings", body=data)


class Webinars(Resource):
    """Webinar endpoints; responses are returned unmapped"""

    def create(self, user_id: str, data: dict[str, Any]) -> ApiResponse:
        return self.client.request("POST", f"users/{user_id}/webinars", body=data)

    def list(self, user_id: str = "me", query: Query = None) -> ApiResponse:
        return self.client.request("GET", f"users/{user_id}/webinars", query=query)

    def get(self, webinar_id: int | str, query: Query = None) -> ApiResponse:
        return self.client.request("GET", f"webinars/{webinar_id}", query=query)

    def update(self, webinar_id: int | str, data: dict[str, Any]) -> ApiResponse:
        return self.client.request("PATCH", f"webinars/{webinar_id}", body=data)

    def delete(self, webinar_id: int | str, query: Query = None) -> None:
        self.client.request("DELETE", f"webinars/{webinar_id}", query=query)

    def add_registrant(self, webinar_id: int | str, data: dict[str, Any]) -> ApiResponse:
        return self.client.request("POST", f"webinars/{webinar_id}/registrants", body=data)

    def list_registrants(self, webinar_id: int | str, query: Query = None) -> ApiResponse:
        return self.client.request("GET", f"webinars/{webinar_id}/registrants", query=query)


class Reports(Resource):
    def meeting_participants(
        self, meeting_id: int | str, query: Query = None
    ) -> ParticipantCollection:
        """Participants report for a past meeting (ID or instance UUID)"""
        path_id = self.client.meeting_path_id(meeting_id)
        response = self.client.request(
            "GET", f"report/meetings/{path_id}/participants", query=query
        )
        return ParticipantCollection.from_api(response.body, response.pagination)

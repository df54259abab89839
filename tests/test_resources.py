"""
Tests for endpoint groups built on ZoomClient.request
"""

from unittest.mock import Mock

import pytest

from zoomkit.client import ApiResponse, ZoomClient
from zoomkit.models import Meeting, User, UserSettings
from zoomkit.paged import MeetingCollection, ParticipantCollection, RegistrantCollection
from zoomkit.pagination import PaginationEnvelope


@pytest.fixture
def client():
    client = ZoomClient().set_token("t")
    client.request = Mock(return_value=ApiResponse(body=None))
    return client


def _returns(client, body):
    client.request.return_value = ApiResponse(body, PaginationEnvelope.from_body(body))


class TestMeetings:
    def test_list(self, client):
        _returns(
            client,
            {"meetings": [{"id": 1, "topic": "A"}], "total_records": 1, "next_page_token": ""},
        )

        meetings = client.meetings().list("me", {"page_size": 30})

        client.request.assert_called_once_with(
            "GET", "users/me/meetings", query={"page_size": 30}
        )
        assert isinstance(meetings, MeetingCollection)
        assert meetings.first().topic == "A"
        assert meetings.pagination.total_records == 1
        assert not meetings.has_more_pages()

    def test_get_numeric_id(self, client):
        _returns(client, {"id": 123, "topic": "A"})

        meeting = client.meetings().get(123)

        assert client.request.call_args.args == ("GET", "meetings/123")
        assert isinstance(meeting, Meeting)

    def test_get_uuid_is_double_encoded(self, client):
        _returns(client, {"id": 123})

        client.meetings().get("/ab==")

        assert client.request.call_args.args == ("GET", "meetings/%252Fab%253D%253D")

    def test_create(self, client):
        _returns(client, {"id": 9, "topic": "New", "type": 2})

        meeting = client.meetings().create("me", {"topic": "New", "type": 2})

        client.request.assert_called_once_with(
            "POST", "users/me/meetings", body={"topic": "New", "type": 2}
        )
        assert meeting.id == 9

    def test_update_and_delete(self, client):
        client.meetings().update(9, {"topic": "Renamed"})
        client.meetings().delete(9)

        assert client.request.call_args_list[0].args == ("PATCH", "meetings/9")
        assert client.request.call_args_list[1].args == ("DELETE", "meetings/9")

    def test_registrants(self, client):
        _returns(client, {"registrants": [{"id": "r", "email": "r@example.com"}]})

        registrants = client.meetings().list_registrants(9, {"status": "pending"})

        assert client.request.call_args.args == ("GET", "meetings/9/registrants")
        assert isinstance(registrants, RegistrantCollection)
        assert registrants.count() == 1

    def test_add_registrant(self, client):
        _returns(client, {"id": "r", "registrant_id": "r", "join_url": "https://zoom.us/w/1"})

        registrant = client.meetings().add_registrant(9, {"email": "r@example.com"})

        assert registrant.join_url == "https://zoom.us/w/1"

    def test_uuid_is_double_encoded_for_every_meeting_path(self, client):
        _returns(client, {"registrants": []})
        meetings = client.meetings()

        meetings.update("/ab==", {"topic": "Renamed"})
        meetings.delete("/ab==")
        meetings.add_registrant("/ab==", {"email": "r@example.com"})
        meetings.list_registrants("/ab==")

        paths = [c.args[1] for c in client.request.call_args_list]
        assert paths == [
            "meetings/%252Fab%253D%253D",
            "meetings/%252Fab%253D%253D",
            "meetings/%252Fab%253D%253D/registrants",
            "meetings/%252Fab%253D%253D/registrants",
        ]


class TestUsers:
    def test_get_defaults_to_me(self, client):
        _returns(client, {"id": "u1", "email": "u@example.com"})

        user = client.users().get()

        assert client.request.call_args.args == ("GET", "users/me")
        assert isinstance(user, User)

    def test_list(self, client):
        _returns(client, {"users": [{"id": "u1", "email": "a@example.com"}], "page_count": 1})

        users = client.users().list({"status": "active"})

        assert users.count() == 1
        assert users.pagination.page_count == 1

    def test_settings(self, client):
        _returns(client, {"recording": {"cloud_recording": True}})

        settings = client.users().get_settings("u1")

        assert client.request.call_args.args == ("GET", "users/u1/settings")
        assert isinstance(settings, UserSettings)
        assert settings.cloud_recording_enabled is True

    def test_update_settings(self, client):
        client.users().update_settings("u1", {"recording": {"cloud_recording": False}})

        client.request.assert_called_once_with(
            "PATCH", "users/u1/settings", body={"recording": {"cloud_recording": False}}
        )


class TestWebinars:
    def test_responses_are_unmapped(self, client):
        _returns(client, {"webinars": [{"id": 1}], "page_size": 30})

        response = client.webinars().list()

        assert response.body == {"webinars": [{"id": 1}], "page_size": 30}
        assert response.pagination.page_size == 30


class TestReports:
    def test_meeting_participants(self, client):
        _returns(
            client,
            {"participants": [{"id": "p", "duration": 60}], "next_page_token": "tok"},
        )

        participants = client.reports().meeting_participants("abc/def==")

        assert client.request.call_args.args == (
            "GET",
            "report/meetings/abc%252Fdef%253D%253D/participants",
        )
        assert isinstance(participants, ParticipantCollection)
        assert participants.next_page_token == "tok"

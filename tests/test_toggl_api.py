"""
Unit tests for the Toggl API client.
"""
from unittest.mock import MagicMock

import pendulum
import pytest
import requests

from togglgraph.api.toggl import BASE_URL, TogglApiService


def make_response(status_code=200, payload=None):
    response = MagicMock()
    response.status_code = status_code
    response.ok = 200 <= status_code < 300
    response.json.return_value = payload
    response.text = "error body"
    if not response.ok:
        response.raise_for_status.side_effect = requests.HTTPError(
            f"{status_code} Client Error"
        )
    return response


@pytest.fixture
def session():
    session = MagicMock(spec=requests.Session)
    session.headers = {}
    return session


class TestTogglApiService:
    """Test suite for TogglApiService."""

    def test_uses_token_basic_auth(self, session):
        TogglApiService("secret", session=session)

        assert session.auth == ("secret", "api_token")
        assert session.headers["Content-Type"] == "application/json"

    def test_time_entries_filtered_by_workspace(self, session):
        session.get.return_value = make_response(
            payload=[
                {"id": 1, "workspace_id": 42, "start": "2024-01-01T09:00:00Z", "duration": 60},
                {"id": 2, "workspace_id": 7, "start": "2024-01-01T10:00:00Z", "duration": 60},
            ]
        )
        service = TogglApiService("secret", session=session)

        entries = service.get_time_entries(
            "42",
            pendulum.datetime(2024, 1, 1, tz="Asia/Tokyo"),
            pendulum.datetime(2024, 1, 2, tz="Asia/Tokyo"),
        )

        assert [e["id"] for e in entries] == [1]
        args, kwargs = session.get.call_args
        assert args[0] == f"{BASE_URL}/me/time_entries"
        assert kwargs["params"] == {
            "start_date": "2023-12-31T15:00:00+00:00",
            "end_date": "2024-01-01T15:00:00+00:00",
        }

    def test_projects_url(self, session):
        session.get.return_value = make_response(payload=[{"id": 1, "name": "Writing"}])
        service = TogglApiService("secret", session=session)

        projects = service.get_projects(42)

        assert projects == [{"id": 1, "name": "Writing"}]
        assert session.get.call_args[0][0] == f"{BASE_URL}/workspaces/42/projects"

    def test_clients_url(self, session):
        session.get.return_value = make_response(payload=[])
        service = TogglApiService("secret", session=session)

        service.get_clients(42)

        assert session.get.call_args[0][0] == f"{BASE_URL}/workspaces/42/clients"

    def test_http_error_propagates(self, session):
        session.get.return_value = make_response(status_code=403)
        service = TogglApiService("secret", session=session)

        with pytest.raises(requests.HTTPError):
            service.fetch_workspaces()

    def test_validate_token(self, session):
        service = TogglApiService("secret", session=session)

        session.get.return_value = make_response(payload={"id": 1})
        assert service.validate_token() is True

        session.get.return_value = make_response(status_code=401)
        assert service.validate_token() is False

    def test_validate_token_on_connection_error(self, session):
        session.get.side_effect = requests.ConnectionError("offline")
        service = TogglApiService("secret", session=session)

        assert service.validate_token() is False

    def test_null_body_reads_as_empty_list(self, session):
        session.get.return_value = make_response(payload=None)
        service = TogglApiService("secret", session=session)

        assert service.get_projects(42) == []
        assert service.get_clients(42) == []
        assert service.fetch_workspaces() == []
        assert (
            service.get_time_entries(
                42,
                pendulum.datetime(2024, 1, 1, tz="UTC"),
                pendulum.datetime(2024, 1, 2, tz="UTC"),
            )
            == []
        )

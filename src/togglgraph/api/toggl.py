# SPDX-License-Identifier: MIT

import logging
from typing import Any, Optional, Union

import pendulum
import requests

from togglgraph.model.project import Client, Project, Workspace
from togglgraph.model.time_entry import TimeEntry
from togglgraph.time import datetime_to_iso_str

logger = logging.getLogger(__name__)

BASE_URL = "https://api.track.toggl.com/api/v9"
REQUEST_TIMEOUT_SECONDS = 30


class TogglApiService:
    """Read-only client for the Toggl Track v9 API."""

    def __init__(
        self, api_token: str, session: Optional[requests.Session] = None
    ) -> None:
        self._session = session if session is not None else requests.Session()
        self._session.auth = (api_token, "api_token")
        self._session.headers.update({"Content-Type": "application/json"})

    def _get(self, path: str, params: Optional[dict[str, str]] = None) -> Any:
        url = f"{BASE_URL}{path}"
        logger.debug("GET %s params=%s", url, params)
        response = self._session.get(url, params=params, timeout=REQUEST_TIMEOUT_SECONDS)
        if not response.ok:
            logger.error("Toggl API error %s: %s", response.status_code, response.text)
        response.raise_for_status()
        return response.json()

    def _get_list(
        self, path: str, params: Optional[dict[str, str]] = None
    ) -> list[Any]:
        # The API answers `null` instead of `[]` for empty collections
        return self._get(path, params) or []

    def fetch_workspaces(self) -> list[Workspace]:
        return self._get_list("/workspaces")

    def validate_token(self) -> bool:
        try:
            self._get("/me")
        except requests.RequestException:
            return False
        return True

    def get_time_entries(
        self,
        workspace_id: Union[str, int],
        start: pendulum.DateTime,
        end: pendulum.DateTime,
    ) -> list[TimeEntry]:
        """
        Time entries of the current user between two instants, restricted
        to one workspace.
        """
        time_entries: list[TimeEntry] = self._get_list(
            "/me/time_entries",
            params={
                "start_date": datetime_to_iso_str(start),
                "end_date": datetime_to_iso_str(end),
            },
        )

        workspace = int(workspace_id)
        filtered = [e for e in time_entries if e["workspace_id"] == workspace]
        logger.info(
            "Fetched %d time entries (%d in workspace %s)",
            len(time_entries),
            len(filtered),
            workspace,
        )
        return filtered

    def get_projects(self, workspace_id: Union[str, int]) -> list[Project]:
        return self._get_list(f"/workspaces/{workspace_id}/projects")

    def get_clients(self, workspace_id: Union[str, int]) -> list[Client]:
        return self._get_list(f"/workspaces/{workspace_id}/clients")

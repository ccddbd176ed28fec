"""
Pytest configuration and fixtures.
"""
from typing import Any, Callable, Optional

import pendulum
import pytest

from togglgraph import configuration
from togglgraph.model.time_entry import TimeEntry
from togglgraph.repository.configuration import CONFIGURATION_REPO
from togglgraph.time import FixedClock

WORKSPACE_ID = 1234


@pytest.fixture
def make_entry() -> Callable[..., TimeEntry]:
    """Factory for provider-shaped time entries."""
    counter = {"id": 0}

    def _make_entry(
        start: str,
        duration: int,
        project_id: Optional[int] = None,
        description: Optional[str] = None,
        workspace_id: int = WORKSPACE_ID,
    ) -> TimeEntry:
        counter["id"] += 1
        return {
            "id": counter["id"],
            "workspace_id": workspace_id,
            "project_id": project_id,
            "description": description,
            "start": start,
            "duration": duration,
        }

    return _make_entry


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock(pendulum.datetime(2024, 6, 1, 12, 0, 0, tz="UTC"))


@pytest.fixture
def config_file(tmp_path: Any, monkeypatch: pytest.MonkeyPatch) -> Any:
    """Point the configuration repository at a throwaway config file."""
    config_path = tmp_path / "config.yaml"
    monkeypatch.setattr(configuration, "CONFIG_PATH", tmp_path)
    monkeypatch.setattr(configuration, "APP_CONFIG_PATH", config_path)
    CONFIGURATION_REPO.reset()
    yield config_path
    CONFIGURATION_REPO.reset()

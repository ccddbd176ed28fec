"""
Integration tests for the command line interface.
"""
import pytest
import requests
from typer.testing import CliRunner

from togglgraph import state as app_state
from togglgraph.initialize import initialize
from togglgraph.repository.configuration import CONFIGURATION_REPO
from togglgraph.terminal import app as app_module

runner = CliRunner()


class FakeTogglApiService:
    entries = []
    projects = []
    workspaces = []
    error = None
    entry_calls = 0

    def __init__(self, api_token, session=None):
        self.api_token = api_token

    def get_time_entries(self, workspace_id, start, end):
        FakeTogglApiService.entry_calls += 1
        if FakeTogglApiService.error is not None:
            raise FakeTogglApiService.error
        return FakeTogglApiService.entries

    def get_projects(self, workspace_id):
        return FakeTogglApiService.projects

    def fetch_workspaces(self):
        if FakeTogglApiService.error is not None:
            raise FakeTogglApiService.error
        return FakeTogglApiService.workspaces


@pytest.fixture
def fake_api(monkeypatch):
    FakeTogglApiService.entries = []
    FakeTogglApiService.projects = [{"id": 1, "workspace_id": 42, "name": "Writing"}]
    FakeTogglApiService.workspaces = [{"id": 42, "name": "Home"}, {"id": 7, "name": "Work"}]
    FakeTogglApiService.error = None
    FakeTogglApiService.entry_calls = 0
    monkeypatch.setattr(app_module, "TogglApiService", FakeTogglApiService)
    return FakeTogglApiService


@pytest.fixture
def configured(config_file, fake_api):
    initialize()
    CONFIGURATION_REPO.update_config(
        api_token="secret", workspace_id="42", workspace_name="Home", timezone="UTC"
    )
    return config_file


class TestGraphCommand:
    """Test suite for the graph command."""

    def test_requires_configuration(self, config_file, fake_api):
        initialize()

        result = runner.invoke(app_module.app, ["graph"])

        assert result.exit_code == 1
        assert "configure" in result.output

    def test_renders_calendar(self, configured, fake_api, make_entry):
        fake_api.entries = [make_entry("2024-05-02T09:00:00Z", 3600, project_id=1)]

        result = runner.invoke(
            app_module.app, ["graph", "--start", "2024-05-01", "--end", "2024-05-07"]
        )

        assert result.exit_code == 0, result.output
        assert "Total: 1h 0m" in result.output
        assert "Active days: 1/7" in result.output

    def test_alias_and_project_filter(self, configured, fake_api, make_entry):
        fake_api.entries = [
            make_entry("2024-05-02T09:00:00Z", 3600, project_id=1),
            make_entry("2024-05-03T09:00:00Z", 600, project_id=2),
        ]

        result = runner.invoke(
            app_module.app, ["g", "-s", "2024-05-01", "-e", "2024-05-07", "-p", "2"]
        )

        assert result.exit_code == 0, result.output
        assert "Total: 0h 10m" in result.output

    def test_block_file(self, configured, fake_api, make_entry, tmp_path):
        fake_api.entries = [make_entry("2024-05-02T09:00:00Z", 1200, project_id=1)]
        block = tmp_path / "graph.txt"
        block.write_text("start: 2024-05-01\nend: 2024-05-03\nproject: 1\n")

        result = runner.invoke(app_module.app, ["graph", "--block", str(block)])

        assert result.exit_code == 0, result.output
        assert "Writing" in result.output
        assert "Active days: 1/3" in result.output

    def test_options_override_block_file(
        self, configured, fake_api, make_entry, tmp_path
    ):
        fake_api.entries = [
            make_entry("2024-05-02T09:00:00Z", 1200, project_id=1),
            make_entry("2024-05-03T09:00:00Z", 600, project_id=2),
        ]
        block = tmp_path / "graph.txt"
        block.write_text("start: 2024-05-01\nend: 2024-05-03\nproject: 1\n")

        result = runner.invoke(
            app_module.app,
            ["graph", "--block", str(block), "--end", "2024-05-07", "--project", "2"],
        )

        assert result.exit_code == 0, result.output
        assert "Active days: 1/7" in result.output
        assert "Total: 0h 10m" in result.output

    def test_inverted_range(self, configured):
        result = runner.invoke(
            app_module.app, ["graph", "--start", "2024-05-07", "--end", "2024-05-01"]
        )

        assert result.exit_code != 0

    def test_fetch_error_exits_without_calendar(self, configured, fake_api):
        fake_api.error = requests.ConnectionError("offline")

        result = runner.invoke(
            app_module.app, ["graph", "--start", "2024-05-01", "--end", "2024-05-07"]
        )

        assert result.exit_code == 1
        assert "Error fetching data from Toggl" in result.output
        assert "Total:" not in result.output

    def test_interactive_filtering_and_reload(
        self, configured, fake_api, make_entry
    ):
        fake_api.entries = [
            make_entry("2024-05-02T09:00:00Z", 3600, project_id=1),
            make_entry("2024-05-03T09:00:00Z", 600, project_id=2),
        ]

        result = runner.invoke(
            app_module.app,
            ["graph", "-s", "2024-05-01", "-e", "2024-05-07", "-i"],
            input="2\n\nr\nq\n",
        )

        assert result.exit_code == 0, result.output
        assert "Total: 0h 10m" in result.output
        assert result.output.count("Total: 1h 10m") == 3
        # Filtering reuses the fetched entries; only "r" asks the API again
        assert fake_api.entry_calls == 2
        assert app_state.get_project_filter() is None


class TestDayCommand:
    """Test suite for the day command."""

    def test_lists_entries(self, configured, fake_api, make_entry):
        fake_api.entries = [
            make_entry("2024-05-02T09:00:00Z", 1500, project_id=1, description="Draft")
        ]

        result = runner.invoke(app_module.app, ["day", "2024-05-02"])

        assert result.exit_code == 0, result.output
        assert "Draft" in result.output
        assert "25m" in result.output


class TestWorkspacesCommand:
    """Test suite for the workspaces command."""

    def test_lists_workspaces(self, configured):
        result = runner.invoke(app_module.app, ["workspaces"])

        assert result.exit_code == 0, result.output
        assert "Home" in result.output
        assert "Work" in result.output

    def test_select_workspace(self, configured):
        result = runner.invoke(app_module.app, ["w", "--select", "7"])

        assert result.exit_code == 0, result.output
        config = CONFIGURATION_REPO.get_config()
        assert config["workspace_id"] == "7"
        assert config["workspace_name"] == "Work"

    def test_select_unknown_workspace(self, configured):
        result = runner.invoke(app_module.app, ["w", "--select", "999"])

        assert result.exit_code == 1


class TestConfigCommand:
    """Test suite for the config commands."""

    def test_set_and_view(self, config_file):
        initialize()

        result = runner.invoke(
            app_module.app, ["config", "set", "--token", "abcdef123456", "-c", "0"]
        )
        assert result.exit_code == 0, result.output

        result = runner.invoke(app_module.app, ["c", "v"])
        assert result.exit_code == 0, result.output
        assert "********3456" in result.output
        assert "1 min" in result.output

    def test_rejects_unknown_timezone(self, config_file):
        initialize()

        result = runner.invoke(app_module.app, ["config", "set", "-z", "Mars/Olympus"])

        assert result.exit_code != 0

"""Tests for the CLI interface."""

import json

import pytest
from typer.testing import CliRunner

from tartil.cli import app


@pytest.fixture(autouse=True)
def setup_test_db(env_db):
    """Use a temporary database for each test."""
    yield


@pytest.fixture
def runner():
    """Create a CLI test runner."""
    return CliRunner()


class TestCLIBasics:
    """Tests for basic CLI functionality."""

    def test_help(self, runner: CliRunner):
        """Test that help command works."""
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "604 pages" in result.stdout

    def test_version(self, runner: CliRunner):
        """Test version command."""
        result = runner.invoke(app, ["version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.stdout

    def test_invalid_log_level(self, runner: CliRunner, monkeypatch):
        """Test that a bad log level is reported instead of crashing."""
        monkeypatch.setenv("TARTIL_LOG_LEVEL", "LOUD")
        result = runner.invoke(app, ["status"])
        assert result.exit_code == 1
        assert "Unknown log level: LOUD" in result.stdout


class TestShowCommand:
    """Tests for the schedule view."""

    def test_show_default_plan(self, runner: CliRunner):
        """Test showing the default 30-day plan."""
        result = runner.invoke(app, ["show"])
        assert result.exit_code == 0
        assert "Reading Schedule" in result.stdout
        assert "1-21" in result.stdout
        assert "30 days scheduled" in result.stdout

    def test_show_pending_hides_recited(self, runner: CliRunner):
        """Test the pending filter."""
        runner.invoke(app, ["set", "target_days", "2"])
        runner.invoke(app, ["done", "1"])

        result = runner.invoke(app, ["show", "--pending"])
        assert result.exit_code == 0
        assert "303-604" in result.stdout
        assert "1-302" not in result.stdout

    def test_show_at_end_of_calendar(self, runner: CliRunner):
        """Test that a start date near the last calendar day still renders."""
        result = runner.invoke(app, ["set", "start_date", "9999-12-20"])
        assert result.exit_code == 0

        result = runner.invoke(app, ["show"])
        assert result.exit_code == 0
        assert "12 days scheduled" in result.stdout

        result = runner.invoke(app, ["status"])
        assert result.exit_code == 0
        assert "Dec 31, 9999" in result.stdout

    def test_show_completed(self, runner: CliRunner):
        """Test the finished state."""
        runner.invoke(app, ["set", "pages_already_read", "604"])
        result = runner.invoke(app, ["show"])
        assert result.exit_code == 0
        assert "Mubarak" in result.stdout


class TestSetCommands:
    """Tests for changing settings."""

    def test_set_daily_goal(self, runner: CliRunner):
        """Test setting a value."""
        result = runner.invoke(app, ["set", "daily_goal", "30"])
        assert result.exit_code == 0
        assert "Success" in result.stdout

    def test_set_unknown_field(self, runner: CliRunner):
        """Test that unknown settings fail."""
        result = runner.invoke(app, ["set", "bogus", "1"])
        assert result.exit_code == 1
        assert "Unknown setting" in result.stdout

    def test_set_invalid_date(self, runner: CliRunner):
        """Test that bad dates fail."""
        result = runner.invoke(app, ["set", "start_date", "someday"])
        assert result.exit_code == 1
        assert "Invalid date" in result.stdout

    def test_mode_pace(self, runner: CliRunner):
        """Test switching to pace mode."""
        runner.invoke(app, ["set", "daily_goal", "100"])
        result = runner.invoke(app, ["mode", "pace"])
        assert result.exit_code == 0
        assert "PACE" in result.stdout

        result = runner.invoke(app, ["show"])
        assert "7 days scheduled" in result.stdout

    def test_mode_invalid(self, runner: CliRunner):
        """Test that an unknown mode fails."""
        result = runner.invoke(app, ["mode", "weekly"])
        assert result.exit_code == 1

    def test_settings_table(self, runner: CliRunner):
        """Test listing settings."""
        result = runner.invoke(app, ["settings"])
        assert result.exit_code == 0
        assert "daily_goal" in result.stdout
        assert "theme" in result.stdout


class TestProgressCommands:
    """Tests for marking progress."""

    def test_status_fresh(self, runner: CliRunner):
        """Test status with nothing read."""
        result = runner.invoke(app, ["status"])
        assert result.exit_code == 0
        assert "Pages: 0 / 604" in result.stdout

    def test_toggle_updates_status(self, runner: CliRunner):
        """Test that toggling a day counts its pages."""
        result = runner.invoke(app, ["toggle", "1"])
        assert result.exit_code == 0
        assert "Day 1 marked recited" in result.stdout

        result = runner.invoke(app, ["status"])
        assert "Pages: 21 / 604" in result.stdout

    def test_toggle_twice(self, runner: CliRunner):
        """Test toggling the same day back."""
        result = runner.invoke(app, ["toggle", "2", "2"])
        assert "Day 2 marked recited" in result.stdout
        assert "Day 2 marked pending" in result.stdout

    def test_undo(self, runner: CliRunner):
        """Test unmarking a day."""
        runner.invoke(app, ["done", "1"])
        result = runner.invoke(app, ["undo", "1"])
        assert result.exit_code == 0

        result = runner.invoke(app, ["status"])
        assert "Pages: 0 / 604" in result.stdout

    def test_done_unscheduled_day_warns(self, runner: CliRunner):
        """Test marking a day beyond the schedule."""
        result = runner.invoke(app, ["done", "999"])
        assert result.exit_code == 0
        assert "Day 999 marked recited" in result.stdout
        assert "not in the current 30-day schedule" in result.stdout

    def test_toggle_scheduled_day_no_warning(self, runner: CliRunner):
        """Test that days inside the schedule do not warn."""
        result = runner.invoke(app, ["toggle", "30"])
        assert "Warning" not in result.stdout

    def test_done_invalid_day(self, runner: CliRunner):
        """Test that day zero is rejected."""
        result = runner.invoke(app, ["done", "0"])
        assert result.exit_code == 1

    def test_reset_confirmed(self, runner: CliRunner):
        """Test resetting with --yes."""
        runner.invoke(app, ["done", "1"])
        result = runner.invoke(app, ["reset", "--yes"])
        assert result.exit_code == 0

        result = runner.invoke(app, ["status"])
        assert "Pages: 0 / 604" in result.stdout

    def test_reset_cancelled(self, runner: CliRunner):
        """Test declining the reset prompt."""
        runner.invoke(app, ["done", "1"])
        result = runner.invoke(app, ["reset"], input="n\n")
        assert result.exit_code == 0
        assert "Cancelled" in result.stdout

        result = runner.invoke(app, ["status"])
        assert "Pages: 21 / 604" in result.stdout

    def test_status_completed(self, runner: CliRunner):
        """Test status once everything is read."""
        runner.invoke(app, ["set", "pages_already_read", "604"])
        result = runner.invoke(app, ["status"])
        assert "100%" in result.stdout
        assert "Completed" in result.stdout

    def test_restart(self, runner: CliRunner):
        """Test starting a new khatm."""
        runner.invoke(app, ["set", "pages_already_read", "604"])
        result = runner.invoke(app, ["restart", "--yes"])
        assert result.exit_code == 0

        result = runner.invoke(app, ["status"])
        assert "Pages: 0 / 604" in result.stdout


class TestThemeCommand:
    """Tests for theme switching."""

    def test_set_theme(self, runner: CliRunner):
        """Test setting a theme explicitly."""
        result = runner.invoke(app, ["theme", "light"])
        assert result.exit_code == 0
        assert "light" in result.stdout

    def test_toggle_theme(self, runner: CliRunner):
        """Test toggling from the default dark theme."""
        result = runner.invoke(app, ["theme"])
        assert "light" in result.stdout


class TestExportImport:
    """Tests for export and import commands."""

    def test_export_import_file(self, runner: CliRunner, tmp_path):
        """Test exporting to a file and importing it back."""
        runner.invoke(app, ["set", "daily_goal", "42"])
        out = tmp_path / "planner.json"

        result = runner.invoke(app, ["export", str(out)])
        assert result.exit_code == 0
        assert json.loads(out.read_text())["settings"]["dailyGoal"] == 42

        runner.invoke(app, ["set", "daily_goal", "10"])
        result = runner.invoke(app, ["import", str(out)])
        assert result.exit_code == 0

        result = runner.invoke(app, ["status"])
        assert "42 pages/day" in result.stdout

    def test_import_missing_file(self, runner: CliRunner, tmp_path):
        """Test importing a file that does not exist."""
        result = runner.invoke(app, ["import", str(tmp_path / "nope.json")])
        assert result.exit_code == 1
        assert "File not found" in result.stdout

    def test_import_invalid_json(self, runner: CliRunner, tmp_path):
        """Test importing a malformed file."""
        bad = tmp_path / "bad.json"
        bad.write_text("{oops")
        result = runner.invoke(app, ["import", str(bad)])
        assert result.exit_code == 1

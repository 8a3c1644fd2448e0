"""
End-to-end tests of the terminal commands against a temporary data directory.
"""
import json

import pytest
from typer.testing import CliRunner

from yizhi import configuration
from yizhi.repository.configuration import CONFIGURATION_REPO
from yizhi.terminal.app import app
from yizhi.view import state as view_state

runner = CliRunner()


@pytest.fixture(autouse=True)
def data_path(tmp_path, monkeypatch):
    monkeypatch.setattr(configuration, "APP_CONFIG_PATH", tmp_path / "config.yaml")
    monkeypatch.setattr(configuration, "DATA_PATH", tmp_path / "data")
    monkeypatch.setattr(CONFIGURATION_REPO, "_config", None)
    monkeypatch.setattr(CONFIGURATION_REPO, "is_dirty", False)
    return tmp_path / "data"


def invoke(*args: str):
    result = runner.invoke(app, ["--no-header", *args])
    assert result.exit_code == 0, result.output
    return result


def test_add_and_list(data_path):
    invoke("task", "add", "water")

    result = invoke("task", "list")

    assert "water" in result.output
    stored = json.loads((data_path / "tasks.json").read_text())
    assert [task["name"] for task in stored.values()] == ["water"]


def test_toggle_writes_todays_snapshot(data_path):
    invoke("task", "add", "water")

    invoke("t", "x", "1")

    stored = json.loads((data_path / "data.json").read_text())
    [snapshot] = stored["dictionary"].values()
    [record] = snapshot.values()
    assert record["completed"] is True


def test_delete_hides_task_from_today(data_path):
    invoke("task", "add", "water", "--day", "-1")
    invoke("task", "delete", "1")

    assert "water" not in invoke("task", "list").output
    assert "water" in invoke("task", "list", "--day", "yesterday").output


def test_rename(data_path):
    invoke("task", "add", "water")

    invoke("task", "rename", "1", "tea")

    assert "tea" in invoke("task", "list").output


def test_unknown_position_is_an_error():
    result = runner.invoke(app, ["--no-header", "task", "toggle", "4"])

    assert result.exit_code != 0


def test_contribution_summary():
    invoke("task", "add", "water")
    invoke("task", "toggle", "1")

    result = invoke("contribution")

    assert "full days: 1" in result.output


def test_clear(data_path):
    invoke("task", "add", "water")

    invoke("clear", "--yes")

    assert not (data_path / "tasks.json").exists()
    assert "water" not in invoke("task", "list").output


def test_config_set_writes_yaml(tmp_path):
    invoke("config", "set", "--no-track-contribution", "--log-level", "debug")

    text = (tmp_path / "config.yaml").read_text()
    assert "track_contribution: false" in text
    assert "log_level: DEBUG" in text


def test_names_with_markup_are_shown_literally():
    view_state.set_show_header(True)

    added = runner.invoke(app, ["task", "add", "read [/b]"])
    toggled = runner.invoke(app, ["task", "toggle", "1"])
    deleted = runner.invoke(app, ["task", "delete", "1"])

    assert added.exit_code == 0, added.output
    assert "read [/b]" in added.output
    assert toggled.exit_code == 0, toggled.output
    assert "read [/b]" in toggled.output
    assert deleted.exit_code == 0, deleted.output
    assert "read [/b]" in deleted.output


def test_changes_report_the_days_completion():
    invoke("task", "add", "water")
    invoke("task", "add", "tea")

    result = invoke("task", "toggle", "1")

    assert "50% done" in result.output


def test_no_completion_line_when_tracking_is_off():
    invoke("config", "set", "--no-track-contribution")
    invoke("task", "add", "water")

    result = invoke("task", "toggle", "1")

    assert "% done" not in result.output

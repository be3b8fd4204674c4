"""Tests for the task commands."""

from __future__ import annotations

import json

from typer.testing import CliRunner

from conftest import make_task, make_workspace
from motion_cli.main import app

runner = CliRunner()


def created_body(fake_motion) -> dict:
    (request,) = fake_motion.requests_to("POST", "/tasks")
    return fake_motion.body(request)


class TestList:
    def test_table(self, fake_motion):
        fake_motion.tasks = [
            make_task("t1", "Low thing", priority="LOW"),
            make_task("t2", "Urgent thing", priority="ASAP", assignees=[{"id": "u", "name": "Bob"}]),
        ]

        result = runner.invoke(app, ["tasks", "list"])

        assert result.exit_code == 0, result.output
        assert result.output.index("Urgent thing") < result.output.index("Low thing")
        assert "Bob" in result.output
        assert "2 tasks" in result.output

    def test_json(self, fake_motion):
        fake_motion.tasks = [make_task("t1", "Write report", priority="HIGH")]

        result = runner.invoke(app, ["tasks", "list", "--output", "json"])

        assert result.exit_code == 0
        (item,) = json.loads(result.output)
        assert item["id"] == "t1"
        assert item["priority"] == "HIGH"
        assert item["url"] == "https://app.usemotion.com/tasks/t1"

    def test_filters_are_sent(self, fake_motion):
        runner.invoke(app, ["tasks", "list", "-w", "ws-1", "-q", "report"])

        params = fake_motion.requests_to("GET", "/tasks")[0].url.params
        assert params["workspaceId"] == "ws-1"
        assert params["name"] == "report"

    def test_empty(self, fake_motion):
        result = runner.invoke(app, ["tasks", "list"])
        assert "No tasks found" in result.output

    def test_auth_failure(self, fake_motion):
        fake_motion.fail("GET", "/tasks", 401)

        result = runner.invoke(app, ["tasks", "list"])

        assert result.exit_code == 3
        assert "Failed to load tasks: Motion API error: 401 Unauthorized" in result.output
        assert "💡 Tip: Check your Motion API key" in result.output


class TestCapture:
    def test_minimal(self, fake_motion):
        result = runner.invoke(app, ["tasks", "capture", "Buy milk"])

        assert result.exit_code == 0, result.output
        assert created_body(fake_motion) == {
            "name": "Buy milk",
            "priority": "MEDIUM",
            "workspaceId": "ws-1",
        }
        assert '"Buy milk" has been added to Motion' in result.output
        assert "task-new-1" in result.output

    def test_all_options(self, fake_motion):
        result = runner.invoke(
            app,
            [
                "tasks",
                "capture",
                "Ship release",
                "-d",
                "Notes",
                "-p",
                "HIGH",
                "--due",
                "2030-02-01",
                "--deadline-type",
                "HARD",
                "--duration",
                "90",
                "--project",
                "proj-1",
                "-w",
                "ws-2",
            ],
        )

        assert result.exit_code == 0, result.output
        body = created_body(fake_motion)
        assert body["description"] == "Notes"
        assert body["priority"] == "HIGH"
        assert body["dueDate"].startswith("2030-02-01T00:00:00")
        assert body["deadlineType"] == "HARD"
        assert body["duration"] == 90
        assert body["projectId"] == "proj-1"
        assert body["workspaceId"] == "ws-2"
        assert fake_motion.requests_to("GET", "/workspaces") == []

    def test_default_workspace_from_config(self, fake_motion, config_service):
        config_service.set("defaults.workspace_id", "ws-9")

        runner.invoke(app, ["tasks", "capture", "Thing"])

        assert created_body(fake_motion)["workspaceId"] == "ws-9"

    def test_bad_due_date(self, fake_motion):
        result = runner.invoke(app, ["tasks", "capture", "Thing", "--due", "qwerty"])

        assert result.exit_code == 2
        assert "Could not understand due date: qwerty" in result.output
        assert fake_motion.requests == []

    def test_blank_name(self, fake_motion):
        result = runner.invoke(app, ["tasks", "capture", "   "])

        assert result.exit_code == 2
        assert "Task name is required" in result.output

    def test_no_workspace(self, fake_motion):
        fake_motion.workspaces = []

        result = runner.invoke(app, ["tasks", "capture", "Thing"])

        assert result.exit_code == 1
        assert "Failed to create task" in result.output
        assert "access to at least one workspace" in result.output


def test_test_task(fake_motion):
    fake_motion.workspaces = [make_workspace("ws-7", "Work")]

    result = runner.invoke(app, ["tasks", "test"])

    assert result.exit_code == 0, result.output
    assert created_body(fake_motion) == {
        "name": "Test Task from motion-cli",
        "priority": "MEDIUM",
        "workspaceId": "ws-7",
    }
    assert "Test task" in result.output


def test_unknown_output_format(fake_motion):
    result = runner.invoke(app, ["tasks", "list", "-o", "xml"])

    assert result.exit_code == 2
    assert "Unknown output format: xml" in result.output

"""Tests for the workspace commands."""

from __future__ import annotations

import json

import httpx
from typer.testing import CliRunner

from conftest import make_project, make_workspace
from motion_cli.main import app

runner = CliRunner()


def test_tree(fake_motion):
    fake_motion.workspaces.append(make_workspace("ws-2", "Acme", type="TEAM"))
    fake_motion.projects = [make_project("p1", "Website")]

    result = runner.invoke(app, ["workspaces", "list"])

    assert result.exit_code == 0, result.output
    assert "Personal" in result.output
    assert "(Individual, ws-1)" in result.output
    assert "(Team, ws-2)" in result.output
    assert "Website" in result.output
    assert "No projects" in result.output


def test_partial_failure_is_shown(fake_motion):
    fake_motion.workspaces.append(make_workspace("ws-2", "Acme"))
    fake_motion.projects = [make_project("p2", "Hiring", workspace_id="ws-2")]
    original = fake_motion.handler

    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.params.get("workspaceId") == "ws-1" and request.url.path.endswith(
            "/projects"
        ):
            return httpx.Response(500)
        return original(request)

    fake_motion.handler = handler

    result = runner.invoke(app, ["workspaces", "list"])

    assert result.exit_code == 0, result.output
    assert "Could not load projects: Motion API error: 500" in result.output
    assert "Warning: Projects of 1 workspace(s) could not be loaded" in result.output
    assert "Hiring" in result.output


def test_json_output(fake_motion):
    fake_motion.projects = [make_project("p1", "Website")]

    result = runner.invoke(app, ["workspaces", "list", "-o", "json"])

    (entry,) = json.loads(result.output)
    assert entry["name"] == "Personal"
    assert entry["projects"] == [{"id": "p1", "name": "Website"}]
    assert entry["error"] is None


def test_workspace_list_failure(fake_motion):
    fake_motion.fail("GET", "/workspaces", 500)

    result = runner.invoke(app, ["workspaces", "list"])

    assert result.exit_code == 4
    assert "Failed to load workspaces" in result.output

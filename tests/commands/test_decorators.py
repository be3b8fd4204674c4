"""Tests for the command wrapper."""

from __future__ import annotations

import httpx
import typer
from typer.testing import CliRunner

from motion_cli.commands.decorators import command_wrapper
from motion_cli.utils.errors import (
    PROJECT_HINTS,
    AppError,
    ConfigError,
    MotionAPIError,
    ToolError,
)

runner = CliRunner()


def make_app(func) -> typer.Typer:
    app = typer.Typer()
    app.command("run")(func)
    # A second command keeps typer from collapsing into a single-command app
    app.command("noop")(lambda: None)
    return app


def test_runs_async_command():
    @command_wrapper
    async def run(name: str = typer.Argument("world")) -> None:
        print(f"hello {name}")

    result = runner.invoke(make_app(run), ["run", "motion"])

    assert result.exit_code == 0
    assert "hello motion" in result.output


def test_runs_sync_command():
    @command_wrapper(auth_required=False)
    def run() -> None:
        print("sync ok")

    result = runner.invoke(make_app(run), ["run"])
    assert result.exit_code == 0
    assert "sync ok" in result.output


def test_missing_api_key(monkeypatch):
    monkeypatch.delenv("MOTION_API_KEY")
    called = []

    @command_wrapper
    async def run() -> None:
        called.append(True)

    result = runner.invoke(make_app(run), ["run"])

    assert result.exit_code == 3
    assert "Motion API key is not configured" in result.output
    assert called == []


def test_auth_not_required(monkeypatch):
    monkeypatch.delenv("MOTION_API_KEY")

    @command_wrapper(auth_required=False)
    def run() -> None:
        print("ran")

    assert runner.invoke(make_app(run), ["run"]).exit_code == 0


def test_action_prefix_and_tip():
    @command_wrapper(action="load projects", hints=PROJECT_HINTS)
    async def run() -> None:
        raise MotionAPIError(403, "Forbidden")

    result = runner.invoke(make_app(run), ["run"])

    assert result.exit_code == 3
    assert "Error: Failed to load projects: Motion API error: 403 Forbidden" in result.output
    assert "💡 Tip: Check your Motion API key" in result.output


def test_no_prefix_without_action():
    @command_wrapper
    async def run() -> None:
        raise ValueError("bad input")

    result = runner.invoke(make_app(run), ["run"])

    assert result.exit_code == 2
    assert "Error: bad input" in result.output
    assert "Failed to" not in result.output


def test_app_error_keeps_exit_code():
    @command_wrapper
    def run() -> None:
        raise AppError("custom failure", exit_code=7)

    result = runner.invoke(make_app(run), ["run"])
    assert result.exit_code == 7
    assert "custom failure" in result.output


def test_tool_error_exit_code_follows_cause():
    @command_wrapper
    async def run() -> None:
        try:
            raise MotionAPIError(404, "Not Found")
        except MotionAPIError as e:
            raise ToolError("Failed to update task status: Motion API error: 404 Not Found") from e

    result = runner.invoke(make_app(run), ["run"])

    assert result.exit_code == 5
    assert "Error: Failed to update task status" in result.output
    # Not prefixed a second time
    assert result.output.count("Failed to") == 1


def test_network_error_exit_code():
    @command_wrapper(action="load tasks")
    async def run() -> None:
        raise httpx.ConnectError("connection refused")

    result = runner.invoke(make_app(run), ["run"])
    assert result.exit_code == 4
    assert "Failed to load tasks: connection refused" in result.output


def test_config_error_exit_code():
    @command_wrapper(action="create task")
    async def run() -> None:
        raise ConfigError("No workspaces found; cannot determine a workspaceId")

    result = runner.invoke(make_app(run), ["run"])
    assert result.exit_code == 1
    assert "at least one workspace" in result.output


def test_explicit_exit_passes_through():
    @command_wrapper
    def run() -> None:
        raise typer.Exit(code=0)

    assert runner.invoke(make_app(run), ["run"]).exit_code == 0

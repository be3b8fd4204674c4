"""Shared test fixtures and configuration.

Provides infrastructure to isolate tests from real filesystem/API state:
config and log directories live in *tmp_path*, and a fake Motion server
backed by ``httpx.MockTransport`` stands in for the real API.
"""

from __future__ import annotations

import json
import logging
from contextlib import ExitStack
from unittest.mock import patch

import httpx
import pytest

from motion_cli.api.client import APIClient

# Modules that open their own API client.
CLIENT_MODULES = (
    "motion_cli.tools.search_tasks",
    "motion_cli.tools.create_task",
    "motion_cli.tools.update_task",
    "motion_cli.tools.task_summary",
    "motion_cli.tools.search_projects",
    "motion_cli.commands.tasks",
    "motion_cli.commands.projects",
    "motion_cli.commands.workspaces",
    "motion_cli.main",
)


# ---------------------------------------------------------------------------
# JSON factories (wire format, camelCase)
# ---------------------------------------------------------------------------


def make_workspace(id="ws-1", name="Personal", type="INDIVIDUAL", **overrides) -> dict:
    data = {"id": id, "name": name, "teamId": "team-1", "type": type}
    data.update(overrides)
    return data


def make_status(name="Todo", default=False, resolved=False) -> dict:
    return {"name": name, "isDefaultStatus": default, "isResolvedStatus": resolved}


def make_project(id="proj-1", name="Launch", workspace_id="ws-1", **overrides) -> dict:
    data = {
        "id": id,
        "name": name,
        "description": "",
        "workspaceId": workspace_id,
        "status": make_status("In Progress"),
        "createdTime": "2024-01-01T00:00:00.000Z",
        "updatedTime": "2024-01-10T00:00:00.000Z",
    }
    data.update(overrides)
    return data


def make_task(id="task-1", name="Write report", **overrides) -> dict:
    data = {
        "id": id,
        "name": name,
        "description": "",
        "priority": "MEDIUM",
        "completed": False,
        "dueDate": None,
        "deadlineType": "SOFT",
        "createdTime": "2024-01-01T09:00:00.000Z",
        "schedulingIssue": False,
        "project": None,
        "workspace": make_workspace(),
        "status": make_status(),
        "assignees": [],
        "labels": [],
        "statuses": [],
    }
    data.update(overrides)
    return data


# ---------------------------------------------------------------------------
# Fake Motion server
# ---------------------------------------------------------------------------


class FakeMotion:
    """In-memory Motion API served through ``httpx.MockTransport``.

    Records every request in ``requests``. ``fail(method, path, status)``
    makes matching requests answer with that status.
    """

    def __init__(self):
        self.user = {"id": "user-1", "name": "Alice", "email": "alice@example.com"}
        self.workspaces: list[dict] = [make_workspace()]
        self.projects: list[dict] = []
        self.tasks: list[dict] = []
        self.requests: list[httpx.Request] = []
        self.failures: dict[tuple[str, str], int] = {}
        self._created = 0

    def fail(self, method: str, path: str, status: int) -> None:
        self.failures[(method, path)] = status

    def requests_to(self, method: str, path: str) -> list[httpx.Request]:
        return [
            r for r in self.requests if r.method == method and self._path(r) == path
        ]

    @staticmethod
    def _path(request: httpx.Request) -> str:
        path = request.url.path
        return path[len("/v1"):] if path.startswith("/v1") else path

    def body(self, request: httpx.Request) -> dict:
        return json.loads(request.content) if request.content else {}

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = self._path(request)
        params = request.url.params

        status = self.failures.get((request.method, path))
        if status is not None:
            return httpx.Response(status, json={"message": "failure"})

        if request.method == "GET" and path == "/users/me":
            return httpx.Response(200, json=self.user)
        if request.method == "GET" and path == "/users":
            return httpx.Response(200, json={"users": [self.user]})
        if request.method == "GET" and path == "/workspaces":
            return httpx.Response(200, json={"workspaces": self.workspaces})
        if request.method == "GET" and path == "/projects":
            projects = [
                p
                for p in self.projects
                if "workspaceId" not in params or p["workspaceId"] == params["workspaceId"]
            ]
            return httpx.Response(200, json={"projects": projects, "meta": {}})
        if request.method == "GET" and path.startswith("/projects/"):
            return self._find(self.projects, path.split("/")[-1])
        if request.method == "GET" and path == "/tasks":
            return httpx.Response(200, json=self._list_tasks(params))
        if request.method == "GET" and path.startswith("/tasks/"):
            return self._find(self.tasks, path.split("/")[-1])
        if request.method == "POST" and path == "/tasks":
            return httpx.Response(201, json=self._create_task(self.body(request)))
        if request.method == "PATCH" and path.startswith("/tasks/"):
            return self._update_task(path.split("/")[-1], self.body(request))
        return httpx.Response(404)

    def _find(self, items: list[dict], item_id: str) -> httpx.Response:
        for item in items:
            if item["id"] == item_id:
                return httpx.Response(200, json=item)
        return httpx.Response(404)

    def _list_tasks(self, params: httpx.QueryParams) -> dict:
        tasks = self.tasks
        if "name" in params:
            needle = params["name"].lower()
            tasks = [t for t in tasks if needle in t["name"].lower()]
        if "projectId" in params:
            tasks = [t for t in tasks if (t.get("project") or {}).get("id") == params["projectId"]]
        if "workspaceId" in params:
            tasks = [
                t for t in tasks if (t.get("workspace") or {}).get("id") == params["workspaceId"]
            ]
        return {"tasks": tasks, "meta": {"pageSize": len(tasks)}}

    def _create_task(self, body: dict) -> dict:
        self._created += 1
        workspace = next(
            (w for w in self.workspaces if w["id"] == body.get("workspaceId")), None
        )
        project = next((p for p in self.projects if p["id"] == body.get("projectId")), None)
        task = make_task(
            id=f"task-new-{self._created}",
            name=body["name"],
            description=body.get("description", ""),
            priority=body.get("priority", "MEDIUM"),
            dueDate=body.get("dueDate"),
            deadlineType=body.get("deadlineType", "SOFT"),
            duration=body.get("duration"),
            workspace=workspace,
            project=project and {"id": project["id"], "Name": project["name"]},
        )
        self.tasks.append(task)
        return task

    def _update_task(self, task_id: str, body: dict) -> httpx.Response:
        for task in self.tasks:
            if task["id"] == task_id:
                task.update(body)
                return httpx.Response(200, json=task)
        return httpx.Response(404)


# ---------------------------------------------------------------------------
# Isolation fixtures
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def isolated_dirs(tmp_path, monkeypatch):
    """Keep config and log files inside *tmp_path* and reset cached singletons."""
    import motion_cli.utils.logger as logger_mod
    from motion_cli.services.config_service import get_config_service

    config_dir = tmp_path / "config"
    log_dir = tmp_path / "logs"
    monkeypatch.setattr(
        "motion_cli.services.config_service.user_config_dir", lambda *_: str(config_dir)
    )
    monkeypatch.setattr("motion_cli.utils.logger.user_log_dir", lambda *_: str(log_dir))
    monkeypatch.setenv("MOTION_API_KEY", "test-key")
    # Wide enough that rich never wraps asserted lines
    monkeypatch.setenv("COLUMNS", "200")

    get_config_service.cache_clear()
    logger_mod._logger = None
    logging.getLogger("motion_cli").handlers.clear()

    yield tmp_path

    get_config_service.cache_clear()
    logger_mod._logger = None
    for handler in logging.getLogger("motion_cli").handlers:
        handler.close()
    logging.getLogger("motion_cli").handlers.clear()


@pytest.fixture
def config_service():
    """The real ConfigService, stored under the temporary config dir."""
    from motion_cli.services.config_service import get_config_service

    return get_config_service()


@pytest.fixture
def fake_motion():
    """Patch every ``get_client`` call site to talk to a ``FakeMotion``."""
    fake = FakeMotion()
    transport = httpx.MockTransport(lambda request: fake.handler(request))

    def client_factory():
        return APIClient("test-key", transport=transport)

    with ExitStack() as stack:
        for module in CLIENT_MODULES:
            stack.enter_context(patch(f"{module}.get_client", side_effect=client_factory))
        yield fake

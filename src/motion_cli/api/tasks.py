"""Tasks API endpoints."""

from typing import Any

from motion_cli.api.client import APIClient
from motion_cli.models import Task, TaskCreate, TaskList, TaskUpdate


class TasksAPI:
    """Tasks API client."""

    def __init__(self, client: APIClient):
        self.client = client

    async def list_tasks(
        self,
        *,
        assignee_id: str | None = None,
        cursor: str | None = None,
        include_all_statuses: bool | None = None,
        label: str | None = None,
        name: str | None = None,
        project_id: str | None = None,
        status: list[str] | None = None,
        workspace_id: str | None = None,
    ) -> TaskList:
        """List tasks with optional filters.

        ``status`` is sent as a repeated ``status`` query parameter.
        """
        params: dict[str, Any] = {
            "assigneeId": assignee_id,
            "cursor": cursor,
            "includeAllStatuses": include_all_statuses,
            "label": label,
            "name": name,
            "projectId": project_id,
            "status": list(status) if status else None,
            "workspaceId": workspace_id,
        }
        data = await self.client.get("/tasks", params=params)
        return TaskList.model_validate(data)

    async def get_task(self, task_id: str) -> Task:
        """Get a specific task by ID."""
        data = await self.client.get(f"/tasks/{task_id}")
        return Task.model_validate(data)

    async def create_task(self, task: TaskCreate) -> Task:
        """Create a new task."""
        data = await self.client.post("/tasks", json=task.to_payload())
        return Task.model_validate(data)

    async def update_task(self, task_id: str, updates: TaskUpdate) -> Task:
        """Patch a task; only the fields set on *updates* are sent."""
        data = await self.client.patch(f"/tasks/{task_id}", json=updates.to_payload())
        return Task.model_validate(data)

"""Projects API endpoints."""

from motion_cli.api.client import APIClient
from motion_cli.models import Project


class ProjectsAPI:
    """Projects API client."""

    def __init__(self, client: APIClient):
        self.client = client

    async def list_projects(
        self,
        workspace_id: str | None = None,
        *,
        cursor: str | None = None,
    ) -> list[Project]:
        """List projects, optionally scoped to one workspace."""
        data = await self.client.get(
            "/projects", params={"workspaceId": workspace_id, "cursor": cursor}
        )
        return [Project.model_validate(p) for p in (data or {}).get("projects", [])]

    async def get_project(self, project_id: str) -> Project:
        """Get a specific project by ID."""
        data = await self.client.get(f"/projects/{project_id}")
        return Project.model_validate(data)

"""Workspaces API endpoints."""

from motion_cli.api.client import APIClient
from motion_cli.models import Workspace
from motion_cli.utils.errors import ConfigError


class WorkspacesAPI:
    """Workspaces API client."""

    def __init__(self, client: APIClient):
        self.client = client

    async def list_workspaces(self) -> list[Workspace]:
        """List the workspaces the API key can see."""
        data = await self.client.get("/workspaces")
        return [Workspace.model_validate(w) for w in (data or {}).get("workspaces", [])]

    async def get_default_workspace_id(self) -> str:
        """Return the first accessible workspace ID.

        Raises:
            ConfigError: The API key has no workspace access.
        """
        workspaces = await self.list_workspaces()
        if not workspaces:
            raise ConfigError("No workspaces found; cannot determine a workspaceId")
        return workspaces[0].id

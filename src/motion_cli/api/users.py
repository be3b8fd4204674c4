"""Users API endpoints."""

from motion_cli.api.client import APIClient
from motion_cli.models import User


class UsersAPI:
    """Users API client."""

    def __init__(self, client: APIClient):
        self.client = client

    async def get_me(self) -> User:
        """Get the user that owns the API key."""
        data = await self.client.get("/users/me")
        return User.model_validate(data)

    async def list_users(self, workspace_id: str | None = None) -> list[User]:
        """List the users of a workspace (or of every accessible workspace)."""
        data = await self.client.get("/users", params={"workspaceId": workspace_id})
        return [User.model_validate(u) for u in (data or {}).get("users", [])]

"""API client for Motion."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from motion_cli.models.config_models import BASE_URL
from motion_cli.services.config_service import get_config_service
from motion_cli.utils.errors import MotionAPIError

logger = logging.getLogger(__name__)


def _clean_params(params: dict[str, Any] | None) -> dict[str, Any]:
    """Drop unset filters; lists stay lists so httpx repeats the key."""
    if not params:
        return {}
    return {key: value for key, value in params.items() if value is not None}


class APIClient:
    """HTTP client for the Motion REST API."""

    def __init__(
        self,
        api_key: str,
        *,
        base_url: str = BASE_URL,
        timeout: float = 30,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.transport = transport
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> "APIClient":
        """Enter the async context manager."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Exit the async context manager and ensure the client is closed."""
        await self.close()

    def _get_headers(self) -> dict[str, str]:
        """Get HTTP headers with authentication."""
        return {
            "X-API-Key": self.api_key,
            "Content-Type": "application/json",
            "Accept": "application/json",
        }

    def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                headers=self._get_headers(),
                timeout=self.timeout,
                follow_redirects=True,
                transport=self.transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def request(
        self,
        method: str,
        path: str,
        *,
        json: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
    ) -> Any:
        """Make an HTTP request and return the decoded JSON body.

        Raises:
            MotionAPIError: The API answered with a non-2xx status.
            httpx.RequestError: The request never got an answer.
        """
        client = self._get_client()
        url = path if path.startswith("/") else f"/{path}"

        logger.debug("%s %s params=%s", method, url, params)
        response = await client.request(
            method=method,
            url=url,
            json=json,
            params=_clean_params(params),
        )
        if not response.is_success:
            logger.warning(
                "%s %s -> %s %s", method, url, response.status_code, response.reason_phrase
            )
            raise MotionAPIError(
                response.status_code, response.reason_phrase, body=response.text
            )
        if not response.content:
            return None
        return response.json()

    async def get(self, path: str, *, params: dict[str, Any] | None = None) -> Any:
        """Make a GET request."""
        return await self.request("GET", path, params=params)

    async def post(self, path: str, *, json: dict[str, Any] | None = None) -> Any:
        """Make a POST request."""
        return await self.request("POST", path, json=json)

    async def patch(self, path: str, *, json: dict[str, Any] | None = None) -> Any:
        """Make a PATCH request."""
        return await self.request("PATCH", path, json=json)


def get_client() -> APIClient:
    """Get an API client configured from the local settings."""
    config_service = get_config_service()
    config = config_service.config
    return APIClient(
        config_service.get_api_key(),
        base_url=config.api.endpoint,
        timeout=config.api.timeout,
    )

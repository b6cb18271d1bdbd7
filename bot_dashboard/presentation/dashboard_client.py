# bot_dashboard/presentation/dashboard_client.py - Client for scripts polling the dashboard API
import logging
from typing import Any, Dict, List, Optional

import aiohttp

logger = logging.getLogger(__name__)


class DashboardClientError(Exception):
    """The dashboard API answered with an unexpected status."""

    def __init__(self, status: int, body: str):
        super().__init__(f"Dashboard API returned {status}: {body}")
        self.status = status
        self.body = body


class DashboardClient:
    """Client for the bot dashboard HTTP API. Responses are returned as camelCase dicts."""

    def __init__(self, base_url: str, timeout: float = 10.0):
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.session: Optional[aiohttp.ClientSession] = None

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create HTTP session."""
        if self.session is None or self.session.closed:
            self.session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self.timeout)
            )
        return self.session

    async def _request(
            self,
            method: str,
            path: str,
            allowed_missing: tuple = (),
            **kwargs
    ) -> Optional[Any]:
        """Send a request. Returns None for statuses listed in allowed_missing."""
        session = await self._get_session()
        async with session.request(method, f"{self.base_url}{path}", **kwargs) as response:
            if response.status in allowed_missing:
                logger.debug(f"{method} {path} returned {response.status}")
                return None
            if response.status >= 400:
                error_text = await response.text()
                logger.error(f"Dashboard request {method} {path} failed: {response.status} - {error_text}")
                raise DashboardClientError(response.status, error_text)
            return await response.json()

    async def get_bot_status(self) -> Optional[Dict[str, Any]]:
        """Returns None while the dashboard is still initializing."""
        return await self._request("GET", "/api/bot/status", allowed_missing=(503,))

    async def get_servers(self) -> List[Dict[str, Any]]:
        return await self._request("GET", "/api/servers")

    async def get_server_channels(self, server_id: str) -> List[Dict[str, Any]]:
        return await self._request("GET", f"/api/servers/{server_id}/channels")

    async def get_commands(self, search: Optional[str] = None) -> List[Dict[str, Any]]:
        params = {"search": search} if search else None
        return await self._request("GET", "/api/commands", params=params)

    async def get_command(self, command_id: str) -> Optional[Dict[str, Any]]:
        """Returns None if the command does not exist."""
        return await self._request("GET", f"/api/commands/{command_id}", allowed_missing=(404,))

    async def toggle_command(self, command_id: str, enabled: bool) -> Optional[Dict[str, Any]]:
        """Returns None if the command does not exist."""
        return await self._request(
            "PATCH", f"/api/commands/{command_id}",
            allowed_missing=(404,), json={"enabled": enabled}
        )

    async def get_activity(self) -> List[Dict[str, Any]]:
        return await self._request("GET", "/api/activity")

    async def get_settings(self) -> Dict[str, Any]:
        return await self._request("GET", "/api/settings")

    async def update_settings(self, prefix: str, status_message: str, activity_type: str) -> Dict[str, Any]:
        return await self._request(
            "PUT", "/api/settings",
            json={"prefix": prefix, "statusMessage": status_message, "activityType": activity_type}
        )

    async def close(self) -> None:
        """Close HTTP session."""
        if self.session and not self.session.closed:
            await self.session.close()

    async def __aenter__(self) -> "DashboardClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

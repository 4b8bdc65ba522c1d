from typing import Any, Dict

from mission_control.services.remote_client import RemoteStatusClient


class HomeAssistantClient(RemoteStatusClient):
    """Home Assistant REST API, including the Supervisor endpoints."""

    service_name = "Home Assistant"

    async def get_system_info(self) -> Dict[str, Any]:
        return await self._get("/api/")

    async def get_host_info(self) -> Dict[str, Any]:
        return await self._get("/api/hassio/host/info")

    async def get_supervisor_info(self) -> Dict[str, Any]:
        return await self._get("/api/hassio/supervisor/info")

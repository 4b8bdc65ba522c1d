from typing import Any, Dict

from mission_control.services.remote_client import RemoteStatusClient


class GatewayClient(RemoteStatusClient):
    """Status endpoints of the Ratchet AI gateway."""

    service_name = "Ratchet Gateway"

    async def get_system_status(self) -> Dict[str, Any]:
        return await self._get("/api/system")

    async def get_gateway_info(self) -> Dict[str, Any]:
        return await self._get("/api/status")

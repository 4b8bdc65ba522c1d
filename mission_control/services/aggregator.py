import asyncio
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Union

import structlog
from pydantic import ValidationError

from mission_control.models.containers import ContainerRecord
from mission_control.models.hosts import (
    UNAVAILABLE,
    GatewayHostSummary,
    GatewayMetrics,
    HomeAssistantHostSummary,
    HomeAssistantMetrics,
    HostsOverview,
    LocalHostSummary,
    RemoteError,
    RemoteServiceStatus,
)
from mission_control.models.resources import ResourceSnapshot
from mission_control.models.snapshot import SnapshotMessage
from mission_control.services.container_monitor import ContainerMonitor
from mission_control.services.gateway_monitor import GatewayClient
from mission_control.services.ha_monitor import HomeAssistantClient
from mission_control.services.resource_monitor import ResourceMonitor

logger = structlog.get_logger()

def _percent_or_marker(value: Any) -> Union[float, str]:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return UNAVAILABLE
    if not 0 <= value <= 100:
        return UNAVAILABLE
    return float(value)


def _label(value: Any) -> Union[str, float]:
    if not value:
        return "Unknown"
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return float(value)
    return str(value)


def _optional_text(value: Any) -> Optional[str]:
    # Remote versions may arrive as numbers, e.g. {"version": 2026}
    if value is None or isinstance(value, (dict, list)):
        return None
    return str(value)


def _data(payload: Dict[str, Any]) -> Dict[str, Any]:
    # Supervisor endpoints wrap their result in {"result": "ok", "data": {...}}
    data = payload.get("data")
    return data if isinstance(data, dict) else {}


def map_home_assistant_metrics(
    system: Dict[str, Any],
    host: Dict[str, Any],
    supervisor: Dict[str, Any],
) -> HomeAssistantMetrics:
    """Build hub metrics from the core, host and supervisor payloads.

    Host and supervisor reads may have failed on their own; their fields then
    fall back to placeholders.
    """
    host_data = _data(host)
    supervisor_data = _data(supervisor)
    return HomeAssistantMetrics(
        version=_optional_text(system.get("version")),
        hostname=str(host_data.get("hostname") or "homeassistant"),
        uptime=_label(supervisor_data.get("uptime")),
        supervisor_version=str(supervisor_data.get("version") or "Unknown"),
        cpu=_percent_or_marker(supervisor_data.get("cpu_percent")),
        memory=_percent_or_marker(supervisor_data.get("memory_percent")),
    )


def map_gateway_metrics(system: Dict[str, Any], info: Dict[str, Any]) -> GatewayMetrics:
    """Build gateway metrics from its system status and status info payloads."""
    if "error" in info:
        info = {}
    sessions = info.get("sessions")
    if isinstance(sessions, list):
        active_sessions = len(sessions)
    elif isinstance(sessions, int) and not isinstance(sessions, bool) and sessions >= 0:
        active_sessions = sessions
    else:
        active_sessions = 0

    return GatewayMetrics(
        gateway_version=str(info.get("version") or "Unknown"),
        uptime=_label(info.get("uptime")),
        active_sessions=active_sessions,
        system=system,
    )


class DashboardAggregator:
    """Composes the leaf collectors into the views served to the dashboard.

    Every view is independent: a failing source only degrades its own part
    of the response.
    """

    def __init__(
        self,
        resources: ResourceMonitor,
        containers: ContainerMonitor,
        home_assistant: HomeAssistantClient,
        gateway: GatewayClient,
    ) -> None:
        self._resources = resources
        self._containers = containers
        self._home_assistant = home_assistant
        self._gateway = gateway

    async def docker_system(self) -> Dict[str, Any]:
        return await self._containers.get_docker_info()

    async def resources(self) -> ResourceSnapshot:
        return await self._resources.get_system_info()

    async def containers(self) -> List[ContainerRecord]:
        return await self._containers.list_containers()

    def _home_assistant_summary(
        self,
        system: Dict[str, Any],
        host: Dict[str, Any],
        supervisor: Dict[str, Any],
    ) -> HomeAssistantHostSummary:
        status = RemoteServiceStatus.from_response(self._home_assistant.configured, system)
        if status.reachable:
            try:
                metrics = map_home_assistant_metrics(system, host, supervisor)
            except ValidationError as exc:
                logger.warning("home_assistant_payload_invalid", errors=exc.error_count())
                metrics = map_home_assistant_metrics({}, {}, {})
        else:
            metrics = RemoteError(error=status.error)
        return HomeAssistantHostSummary(
            name="Home Assistant",
            type="automation_hub",
            status="online" if status.reachable else "offline",
            metrics=metrics,
            description="Home automation and IoT control center",
        )

    def _gateway_summary(self, system: Dict[str, Any], info: Dict[str, Any]) -> GatewayHostSummary:
        status = RemoteServiceStatus.from_response(self._gateway.configured, system)
        if status.reachable:
            try:
                metrics = map_gateway_metrics(system, info)
            except ValidationError as exc:
                logger.warning("gateway_payload_invalid", errors=exc.error_count())
                metrics = map_gateway_metrics({}, {})
        else:
            metrics = RemoteError(error=status.error)
        return GatewayHostSummary(
            name="Ratchet Gateway",
            type="ai_gateway",
            status="online" if status.reachable else "offline",
            metrics=metrics,
            description="OpenClaw AI gateway and orchestration hub",
        )

    async def hosts(self) -> HostsOverview:
        (
            local,
            ha_system,
            ha_host,
            ha_supervisor,
            gateway_system,
            gateway_info,
        ) = await asyncio.gather(
            self._resources.get_system_info(),
            self._home_assistant.get_system_info(),
            self._home_assistant.get_host_info(),
            self._home_assistant.get_supervisor_info(),
            self._gateway.get_system_status(),
            self._gateway.get_gateway_info(),
        )

        return HostsOverview(
            jamlife=LocalHostSummary(
                name="JAMLIFE Server",
                type="media_server",
                status="online",
                metrics=local,
                description="Hetzner dedicated server running Saltbox + Docker",
            ),
            homeassistant=self._home_assistant_summary(ha_system, ha_host, ha_supervisor),
            ratchet=self._gateway_summary(gateway_system, gateway_info),
        )

    async def close(self) -> None:
        await self._home_assistant.aclose()
        await self._gateway.aclose()
        self._containers.close()

    async def snapshot(self) -> SnapshotMessage:
        containers = await self.containers()
        system = await self.docker_system()
        resources = await self.resources()
        return SnapshotMessage(
            containers=containers,
            system=system,
            resources=resources,
            timestamp=datetime.now(timezone.utc),
        )

from typing import Any, Dict

from fastapi import APIRouter, Depends

from mission_control.api.dependencies import get_aggregator
from mission_control.models.hosts import HostsOverview
from mission_control.models.resources import ResourceSnapshot
from mission_control.services.aggregator import DashboardAggregator

router = APIRouter()


@router.get("/docker", summary="Docker daemon info")
async def docker_system(
    aggregator: DashboardAggregator = Depends(get_aggregator),
) -> Dict[str, Any]:
    """
    Return the Docker daemon's info and version, or ``{"error": ...}`` when
    the daemon cannot be queried.
    """
    return await aggregator.docker_system()


@router.get("/resources", response_model=ResourceSnapshot, summary="Host resources")
async def resources(
    aggregator: DashboardAggregator = Depends(get_aggregator),
) -> ResourceSnapshot:
    """
    Return CPU, memory, disk, load and uptime of the host running this service.

    CPU usage is sampled over about one second, so this endpoint responds
    after that window.
    """
    return await aggregator.resources()


@router.get("/hosts", response_model=HostsOverview, summary="Multi-host status")
async def hosts(
    aggregator: DashboardAggregator = Depends(get_aggregator),
) -> HostsOverview:
    """
    Return one summary per monitored host.

    A remote host is reported offline when its status call failed; the other
    hosts are unaffected.
    """
    return await aggregator.hosts()


@router.get("", summary="Docker daemon info (legacy path)")
async def legacy_system(
    aggregator: DashboardAggregator = Depends(get_aggregator),
) -> Dict[str, Any]:
    return await aggregator.docker_system()

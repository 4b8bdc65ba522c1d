from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

import structlog
from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from mission_control.api import containers, health, realtime, system
from mission_control.config import Settings, get_settings
from mission_control.log import configure_logging
from mission_control.services.aggregator import DashboardAggregator
from mission_control.services.broadcaster import SnapshotBroadcaster
from mission_control.services.container_monitor import ContainerMonitor
from mission_control.services.gateway_monitor import GatewayClient
from mission_control.services.ha_monitor import HomeAssistantClient
from mission_control.services.resource_monitor import ResourceMonitor

logger = structlog.get_logger()


def build_aggregator(settings: Settings) -> DashboardAggregator:
    return DashboardAggregator(
        resources=ResourceMonitor(),
        containers=ContainerMonitor(docker_host=settings.docker_host),
        home_assistant=HomeAssistantClient(settings.ha_url, settings.ha_token),
        gateway=GatewayClient(settings.gateway_url, settings.gateway_token),
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings
    if not settings.ha_token:
        logger.warning("ha_token_missing", detail="Home Assistant integration will be disabled")
    if not settings.gateway_token:
        logger.warning(
            "gateway_token_missing", detail="Ratchet Gateway integration will be disabled"
        )
    logger.info(
        "mission_control_started",
        port=settings.port,
        ha_url=settings.ha_url,
        gateway_url=settings.gateway_url,
        environment=settings.environment,
    )

    yield

    await app.state.broadcaster.close()
    await app.state.aggregator.close()
    logger.info("mission_control_stopped")


def create_app(
    settings: Optional[Settings] = None,
    aggregator: Optional[DashboardAggregator] = None,
) -> FastAPI:
    settings = settings or get_settings()
    aggregator = aggregator or build_aggregator(settings)

    app = FastAPI(title="Mission Control", lifespan=lifespan)
    app.state.settings = settings
    app.state.aggregator = aggregator
    app.state.broadcaster = SnapshotBroadcaster(
        aggregator.snapshot, interval=settings.update_interval
    )

    app.include_router(system.router, prefix="/api/system", tags=["system"])
    app.include_router(containers.router, prefix="/api/containers", tags=["containers"])
    app.include_router(health.router, prefix="/api/health", tags=["health"])
    app.include_router(realtime.router, tags=["realtime"])

    # Dashboard assets, mounted last so the API and WebSocket routes win
    static_dir = Path(settings.static_dir)
    if static_dir.is_dir():
        app.mount("/", StaticFiles(directory=static_dir, html=True), name="static")

    return app


configure_logging(get_settings().log_level)

app = create_app()

import asyncio
from typing import Any, Callable, Dict, List, Optional

import docker
import structlog

from mission_control.models.containers import ContainerRecord

logger = structlog.get_logger()

_SHORT_ID_LENGTH = 12


def to_container_record(raw: Dict[str, Any]) -> ContainerRecord:
    """Normalise one entry of the daemon's ``/containers/json`` listing."""
    names = raw.get("Names") or [""]
    name = names[0]
    if name.startswith("/"):
        name = name[1:]

    return ContainerRecord(
        id=raw["Id"][:_SHORT_ID_LENGTH],
        name=name,
        image=raw.get("Image", ""),
        status=raw.get("Status", ""),
        state=raw.get("State", ""),
        ports=raw.get("Ports") or [],
        created=raw.get("Created", 0),
    )


class ContainerMonitor:
    """
    Queries the Docker daemon for containers and daemon metadata.

    The Docker client is created on first use so the service starts even
    when the daemon socket is missing. All SDK calls are blocking and run in
    a worker thread.
    """

    def __init__(
        self,
        docker_host: str = "unix:///var/run/docker.sock",
        client_factory: Optional[Callable[[], Any]] = None,
    ) -> None:
        self._docker_host = docker_host
        self._client_factory = client_factory or self._default_factory
        self._client = None

    def _default_factory(self) -> docker.DockerClient:
        return docker.DockerClient(base_url=self._docker_host)

    def _docker(self):
        if self._client is None:
            self._client = self._client_factory()
        return self._client

    def _list_raw(self) -> List[Dict[str, Any]]:
        return self._docker().api.containers(all=True)

    def _info_and_version(self) -> Dict[str, Any]:
        client = self._docker()
        return {"info": client.info(), "version": client.version()}

    async def list_containers(self) -> List[ContainerRecord]:
        try:
            raw_containers = await asyncio.to_thread(self._list_raw)
            return [to_container_record(raw) for raw in raw_containers]
        except Exception as exc:
            logger.error("docker_query_failed", query="containers", error=str(exc))
            return []

    async def get_docker_info(self) -> Dict[str, Any]:
        try:
            return await asyncio.to_thread(self._info_and_version)
        except Exception as exc:
            logger.error("docker_query_failed", query="info", error=str(exc))
            return {"error": str(exc)}

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
            self._client = None

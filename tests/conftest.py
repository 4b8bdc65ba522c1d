from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient

from mission_control.config import Settings
from mission_control.main import create_app
from mission_control.models.containers import ContainerRecord
from mission_control.models.resources import (
    CpuUsage,
    DiskUsage,
    LoadAverage,
    MemoryUsage,
    ResourceSnapshot,
)
from mission_control.models.snapshot import SnapshotMessage


@pytest.fixture
def resource_snapshot() -> ResourceSnapshot:
    return ResourceSnapshot(
        hostname="jamlife",
        platform="linux",
        arch="x86_64",
        cpu=CpuUsage(usage=12.5, cores=8, model="AMD Ryzen 7 3700X"),
        memory=MemoryUsage(total=64, used=20, free=44, percentage=31),
        disk=DiskUsage(total="1.8T", used="900G", available="850G", percentage=52),
        uptime="3d 4h",
        load=LoadAverage(one=0.52, five=0.61, fifteen=0.7),
        timestamp=datetime(2026, 1, 1, tzinfo=timezone.utc),
    )


@pytest.fixture
def container_record() -> ContainerRecord:
    return ContainerRecord(
        id="4f66ad9a0b2e",
        name="plex",
        image="plexinc/pms-docker:latest",
        status="Up 3 hours",
        state="running",
        ports=[{"PrivatePort": 32400, "PublicPort": 32400, "Type": "tcp"}],
        created=1767225600,
    )


class FakeAggregator:
    """Stands in for DashboardAggregator in endpoint tests."""

    def __init__(self, resources, containers, docker=None, hosts=None):
        self.resources_value = resources
        self.containers_value = containers
        self.docker_value = docker if docker is not None else {"info": {"Containers": 1}, "version": {"Version": "27.0.3"}}
        self.hosts_value = hosts
        self.snapshots = 0

    async def docker_system(self):
        return self.docker_value

    async def resources(self):
        return self.resources_value

    async def containers(self):
        return self.containers_value

    async def hosts(self):
        return self.hosts_value

    async def snapshot(self):
        self.snapshots += 1
        return SnapshotMessage(
            containers=self.containers_value,
            system=self.docker_value,
            resources=self.resources_value,
            timestamp=datetime.now(timezone.utc),
        )

    async def close(self):
        pass


@pytest.fixture
def test_settings(tmp_path) -> Settings:
    return Settings(static_dir=str(tmp_path / "no-static"))


@pytest.fixture
def fake_aggregator(resource_snapshot, container_record) -> FakeAggregator:
    return FakeAggregator(resource_snapshot, [container_record])


@pytest.fixture
def client(test_settings, fake_aggregator) -> TestClient:
    return TestClient(create_app(test_settings, aggregator=fake_aggregator))

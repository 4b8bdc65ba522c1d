from collections import namedtuple
from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient

from mission_control.main import create_app
from mission_control.services import resource_monitor
from mission_control.services.aggregator import DashboardAggregator
from mission_control.services.container_monitor import ContainerMonitor
from mission_control.services.gateway_monitor import GatewayClient
from mission_control.services.ha_monitor import HomeAssistantClient
from mission_control.services.resource_monitor import (
    ResourceMonitor,
    busy_percent,
    human_size,
    uptime_label,
)

GIB = 1024 ** 3

CpuTimes = namedtuple("CpuTimes", ["user", "nice", "system", "idle", "iowait", "guest", "guest_nice"])


@pytest.mark.parametrize(
    "seconds, label",
    [
        (90000, "1d 1h"),
        (5400, "1h 30m"),
        (120, "2m"),
        (59, "0m"),
        (86400 * 3 + 60, "3d 0h"),
    ],
)
def test_uptime_label_uses_two_largest_units(seconds, label):
    assert uptime_label(seconds) == label


def test_read_memory_reports_gib_and_percentage(monkeypatch):
    monkeypatch.setattr(
        resource_monitor.psutil,
        "virtual_memory",
        lambda: SimpleNamespace(total=8 * GIB, available=2 * GIB),
    )

    memory = ResourceMonitor().read_memory()

    assert memory.total == 8
    assert memory.used == 6
    assert memory.free == 2
    assert memory.percentage == 75


def test_busy_percent_from_cpu_time_deltas():
    start = CpuTimes(user=100, nice=0, system=50, idle=800, iowait=50, guest=0, guest_nice=0)
    end = CpuTimes(user=130, nice=0, system=60, idle=850, iowait=60, guest=0, guest_nice=0)

    # 100 ticks elapsed, 60 of them idle
    assert busy_percent(start, end) == 40.0


def test_busy_percent_without_elapsed_time_is_zero():
    times = CpuTimes(user=1, nice=0, system=1, idle=1, iowait=0, guest=0, guest_nice=0)
    assert busy_percent(times, times) == 0.0


def test_busy_percent_ignores_guest_time():
    start = CpuTimes(user=0, nice=0, system=0, idle=0, iowait=0, guest=0, guest_nice=0)
    end = CpuTimes(user=50, nice=0, system=0, idle=50, iowait=0, guest=50, guest_nice=0)

    assert busy_percent(start, end) == 50.0


@pytest.mark.asyncio
async def test_sample_cpu_compares_counters_around_window(monkeypatch):
    samples = iter(
        [
            CpuTimes(user=0, nice=0, system=0, idle=0, iowait=0, guest=0, guest_nice=0),
            CpuTimes(user=25, nice=0, system=0, idle=75, iowait=0, guest=0, guest_nice=0),
        ]
    )
    monkeypatch.setattr(resource_monitor.psutil, "cpu_times", lambda: next(samples))

    assert await ResourceMonitor(cpu_window=0).sample_cpu() == 25.0


@pytest.mark.asyncio
async def test_read_disk_formats_usage(monkeypatch):
    def fake_disk_usage(path):
        assert path == "/"
        return SimpleNamespace(total=1800 * GIB, used=900 * GIB, free=850 * GIB, percent=51.4)

    monkeypatch.setattr(resource_monitor.psutil, "disk_usage", fake_disk_usage)

    disk = await ResourceMonitor().read_disk()

    assert disk.total == "1.8T"
    assert disk.used == "900G"
    assert disk.available == "850G"
    assert disk.percentage == 51
    assert disk.error is None


@pytest.mark.asyncio
async def test_read_disk_failure_sets_error(monkeypatch):
    def fake_disk_usage(path):
        raise FileNotFoundError(2, "No such file or directory", path)

    monkeypatch.setattr(resource_monitor.psutil, "disk_usage", fake_disk_usage)

    disk = await ResourceMonitor(disk_path="/missing").read_disk()

    assert disk.error == "Unable to get disk info"
    assert disk.percentage is None
    assert disk.total is None


@pytest.mark.parametrize(
    "num_bytes, label",
    [
        (512, "512B"),
        (512 * 1024, "512K"),
        (int(9.5 * GIB), "9.5G"),
        (40 * GIB, "40G"),
        (2048 * GIB, "2.0T"),
    ],
)
def test_human_size(num_bytes, label):
    assert human_size(num_bytes) == label


def test_cpu_model_falls_back_when_cpuinfo_is_unreadable(monkeypatch):
    def unreadable(*args, **kwargs):
        raise PermissionError("/proc/cpuinfo")

    monkeypatch.setattr(resource_monitor, "open", unreadable, raising=False)
    monkeypatch.setattr(resource_monitor.platform, "processor", lambda: "")

    assert ResourceMonitor._cpu_model() == "Unknown"

    monkeypatch.setattr(resource_monitor.platform, "processor", lambda: "x86_64")

    assert ResourceMonitor._cpu_model() == "x86_64"


def test_load_average_is_rounded(monkeypatch):
    monkeypatch.setattr(resource_monitor.psutil, "getloadavg", lambda: (0.123456, 1.006, 2.5))

    load = ResourceMonitor().load_average()

    assert load.model_dump(by_alias=True) == {"1m": 0.12, "5m": 1.01, "15m": 2.5}


def test_resources_endpoint_structure_and_ranges(test_settings):
    """
    Endpoint test against the real host: only the remote clients and
    Docker are stubbed out, the resource monitor reads psutil.
    """
    aggregator = DashboardAggregator(
        resources=ResourceMonitor(cpu_window=0.05),
        containers=ContainerMonitor(client_factory=lambda: None),
        home_assistant=HomeAssistantClient("http://ha.invalid", None),
        gateway=GatewayClient("http://gw.invalid", None),
    )
    client = TestClient(create_app(test_settings, aggregator=aggregator))

    response = client.get("/api/system/resources")
    assert response.status_code == 200

    data = response.json()

    expected_keys = {
        "hostname",
        "platform",
        "arch",
        "cpu",
        "memory",
        "disk",
        "uptime",
        "load",
        "timestamp",
    }
    assert expected_keys.issubset(data.keys())

    assert isinstance(data["hostname"], str)
    assert data["hostname"].strip() != ""
    assert 0.0 <= data["cpu"]["usage"] <= 100.0
    assert data["cpu"]["cores"] >= 1
    assert 0 <= data["memory"]["percentage"] <= 100
    assert set(data["load"].keys()) == {"1m", "5m", "15m"}
    assert isinstance(data["uptime"], str)

    # Disk is best-effort: either a percentage or the error marker
    disk = data["disk"]
    if disk["error"] is None:
        assert 0 <= disk["percentage"] <= 100
    else:
        assert disk["error"] == "Unable to get disk info"

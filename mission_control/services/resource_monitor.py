import asyncio
import platform
import socket
import time
from datetime import datetime, timezone

import psutil
import structlog

from mission_control.models.resources import (
    CpuUsage,
    DiskUsage,
    LoadAverage,
    MemoryUsage,
    ResourceSnapshot,
)

logger = structlog.get_logger()

_GIB = 1024 ** 3
_DISK_ERROR = "Unable to get disk info"


def uptime_label(seconds: float) -> str:
    """
    Format an uptime as its two largest units.

    90000 -> "1d 1h", 5400 -> "1h 30m", 120 -> "2m".
    """
    seconds = int(seconds)
    days = seconds // 86400
    hours = (seconds % 86400) // 3600
    minutes = (seconds % 3600) // 60

    if days > 0:
        return f"{days}d {hours}h"
    if hours > 0:
        return f"{hours}h {minutes}m"
    return f"{minutes}m"


def _total_time(times) -> float:
    # guest time is already accounted for in user/nice on Linux
    return sum(times) - getattr(times, "guest", 0.0) - getattr(times, "guest_nice", 0.0)


def _idle_time(times) -> float:
    return getattr(times, "idle", 0.0) + getattr(times, "iowait", 0.0)


def busy_percent(start, end) -> float:
    """Share of non-idle CPU time between two ``psutil.cpu_times()`` samples."""
    total_delta = _total_time(end) - _total_time(start)
    if total_delta <= 0:
        return 0.0
    idle_delta = _idle_time(end) - _idle_time(start)
    percent = (total_delta - idle_delta) / total_delta * 100.0
    return round(min(100.0, max(0.0, percent)), 1)


def human_size(num_bytes: float) -> str:
    """Format a byte count the way ``df -h`` does: 512K, 9.5G, 1.8T."""
    value = float(num_bytes)
    for unit in ("B", "K", "M", "G", "T"):
        if value < 1024:
            break
        value /= 1024
    else:
        unit = "P"
    if unit == "B":
        return f"{int(value)}B"
    if value < 10:
        return f"{value:.1f}{unit}"
    return f"{round(value)}{unit}"


class ResourceMonitor:
    """Collects resource metrics of the local host."""

    def __init__(self, cpu_window: float = 1.0, disk_path: str = "/") -> None:
        self._cpu_window = cpu_window
        self._disk_path = disk_path

    async def sample_cpu(self) -> float:
        start = psutil.cpu_times()
        await asyncio.sleep(self._cpu_window)
        end = psutil.cpu_times()
        return busy_percent(start, end)

    def read_memory(self) -> MemoryUsage:
        memory = psutil.virtual_memory()
        total = memory.total
        free = memory.available
        used = total - free
        return MemoryUsage(
            total=round(total / _GIB),
            used=round(used / _GIB),
            free=round(free / _GIB),
            percentage=round(used / total * 100) if total else 0,
        )

    def _disk_usage(self) -> DiskUsage:
        try:
            usage = psutil.disk_usage(self._disk_path)
        except OSError as exc:
            logger.warning("disk_query_failed", path=self._disk_path, reason=str(exc))
            return DiskUsage(error=_DISK_ERROR)

        return DiskUsage(
            total=human_size(usage.total),
            used=human_size(usage.used),
            available=human_size(usage.free),
            percentage=min(100, max(0, round(usage.percent))),
        )

    async def read_disk(self) -> DiskUsage:
        return await asyncio.to_thread(self._disk_usage)

    def uptime(self) -> str:
        return uptime_label(time.time() - psutil.boot_time())

    def load_average(self) -> LoadAverage:
        one, five, fifteen = psutil.getloadavg()
        return LoadAverage(one=round(one, 2), five=round(five, 2), fifteen=round(fifteen, 2))

    @staticmethod
    def _cpu_model() -> str:
        try:
            with open("/proc/cpuinfo", "r") as f:
                for line in f:
                    if line.startswith("model name"):
                        return line.split(":", 1)[1].strip()
        except OSError as exc:
            logger.debug("cpuinfo_unavailable", reason=str(exc))
        return platform.processor() or "Unknown"

    async def get_system_info(self) -> ResourceSnapshot:
        """
        Collect the full resource snapshot of this host.

        Takes about one CPU sampling window. Only the disk read may degrade;
        it then carries an ``error`` instead of sizes.
        """
        cpu_usage = await self.sample_cpu()
        disk = await self.read_disk()

        return ResourceSnapshot(
            hostname=socket.gethostname(),
            platform=platform.system().lower(),
            arch=platform.machine(),
            cpu=CpuUsage(
                usage=cpu_usage,
                cores=psutil.cpu_count() or 1,
                model=self._cpu_model(),
            ),
            memory=self.read_memory(),
            disk=disk,
            uptime=self.uptime(),
            load=self.load_average(),
            timestamp=datetime.now(timezone.utc),
        )

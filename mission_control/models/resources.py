from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class CpuUsage(BaseModel):
    """CPU utilisation of the local host."""

    usage: float = Field(
        ...,
        ge=0,
        le=100,
        description="CPU utilisation in percent over a ~1 second sampling window",
    )
    cores: int = Field(..., ge=1, description="Number of logical CPUs")
    model: str = Field(default="Unknown", description="CPU model name")


class MemoryUsage(BaseModel):
    """RAM usage in whole GiB."""

    total: int = Field(..., ge=0, description="Total memory in GiB")
    used: int = Field(..., ge=0, description="Used memory in GiB")
    free: int = Field(..., ge=0, description="Available memory in GiB")
    percentage: int = Field(..., ge=0, le=100, description="RAM usage in percent")


class DiskUsage(BaseModel):
    """Root filesystem usage from ``psutil.disk_usage``.

    Sizes are human-readable strings in ``df -h`` style (``"40G"``).
    When the query fails all sizes are None and ``error`` is set.
    """

    total: Optional[str] = None
    used: Optional[str] = None
    available: Optional[str] = None
    percentage: Optional[int] = Field(None, ge=0, le=100)
    error: Optional[str] = Field(
        None,
        description="Set when the disk query failed; the other fields are then absent.",
    )


class LoadAverage(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    one: float = Field(..., ge=0, alias="1m")
    five: float = Field(..., ge=0, alias="5m")
    fifteen: float = Field(..., ge=0, alias="15m")


class ResourceSnapshot(BaseModel):
    """Point-in-time resource view of the host running this service."""

    hostname: str = Field(..., description="System hostname")
    platform: str = Field(..., description="Operating system, e.g. linux")
    arch: str = Field(..., description="Machine architecture, e.g. x86_64")
    cpu: CpuUsage
    memory: MemoryUsage
    disk: DiskUsage
    uptime: str = Field(..., description="Uptime label, e.g. '3d 4h'")
    load: LoadAverage
    timestamp: datetime

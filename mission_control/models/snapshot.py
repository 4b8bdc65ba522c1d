from datetime import datetime
from typing import Any, Dict, List, Literal

from pydantic import BaseModel

from mission_control.models.containers import ContainerRecord
from mission_control.models.resources import ResourceSnapshot


class SnapshotMessage(BaseModel):
    """One frame pushed to WebSocket listeners."""

    type: Literal["update"] = "update"
    containers: List[ContainerRecord]
    system: Dict[str, Any]
    resources: ResourceSnapshot
    timestamp: datetime


class HealthStatus(BaseModel):
    status: Literal["healthy"] = "healthy"
    timestamp: datetime

from typing import Any, Dict, List

from pydantic import BaseModel, Field


class ContainerRecord(BaseModel):
    """One container as listed by the Docker daemon, including stopped ones."""

    id: str = Field(..., max_length=12, description="Short container id (first 12 chars)")
    name: str = Field(..., description="Primary container name without the leading '/'")
    image: str
    status: str = Field(..., description="Human readable status, e.g. 'Up 3 hours'")
    state: str = Field(..., description="Runtime state, e.g. running or exited")
    ports: List[Dict[str, Any]] = Field(
        default_factory=list,
        description="Port mappings exactly as reported by the daemon",
    )
    created: int = Field(..., description="Creation time in epoch seconds")

from datetime import datetime, timezone

from fastapi import APIRouter

from mission_control.models.snapshot import HealthStatus

router = APIRouter()


@router.get("", response_model=HealthStatus, summary="Liveness")
async def health() -> HealthStatus:
    return HealthStatus(timestamp=datetime.now(timezone.utc))

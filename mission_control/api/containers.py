from typing import List

from fastapi import APIRouter, Depends

from mission_control.api.dependencies import get_aggregator
from mission_control.models.containers import ContainerRecord
from mission_control.services.aggregator import DashboardAggregator

router = APIRouter()


@router.get("", response_model=List[ContainerRecord], summary="Container status")
async def containers(
    aggregator: DashboardAggregator = Depends(get_aggregator),
) -> List[ContainerRecord]:
    """
    Return all containers known to the Docker daemon, including stopped ones.

    An unreachable daemon yields an empty list rather than an error.
    """
    return await aggregator.containers()

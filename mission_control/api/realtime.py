import structlog
from fastapi import APIRouter, Depends, WebSocket

from mission_control.api.dependencies import get_broadcaster
from mission_control.services.broadcaster import SnapshotBroadcaster

logger = structlog.get_logger()

router = APIRouter()


@router.websocket("/")
@router.websocket("/ws")
async def updates(
    websocket: WebSocket,
    broadcaster: SnapshotBroadcaster = Depends(get_broadcaster),
) -> None:
    """Push a dashboard snapshot on connect and then on every update interval."""
    await broadcaster.connect(websocket)
    try:
        while True:
            # Text and binary client frames are read and dropped
            message = await websocket.receive()
            if message["type"] == "websocket.disconnect":
                break
    except Exception:
        logger.exception("websocket_error")
    finally:
        await broadcaster.disconnect(websocket)

"""Periodic snapshot push to connected WebSocket listeners."""

import asyncio
from typing import Any, Awaitable, Callable, Dict

import structlog
from fastapi import WebSocket

from mission_control.models.snapshot import SnapshotMessage

logger = structlog.get_logger()

DEFAULT_INTERVAL_S = 30.0


class SnapshotBroadcaster:
    """
    Keeps one push task per connected listener.

    Each task pushes a freshly computed snapshot right after the connection
    is accepted and then every ``interval`` seconds until the listener
    disconnects. Listeners share nothing; every push computes its own
    snapshot.
    """

    def __init__(
        self,
        build_snapshot: Callable[[], Awaitable[SnapshotMessage]],
        interval: float = DEFAULT_INTERVAL_S,
    ) -> None:
        self._build_snapshot = build_snapshot
        self._interval = interval
        self._tasks: Dict[Any, asyncio.Task] = {}

    @property
    def listener_count(self) -> int:
        return len(self._tasks)

    async def connect(self, websocket: WebSocket) -> None:
        await websocket.accept()
        self._tasks[websocket] = asyncio.create_task(self._push_loop(websocket))
        logger.info("listener_connected", listeners=self.listener_count)

    async def disconnect(self, websocket: WebSocket) -> None:
        task = self._tasks.pop(websocket, None)
        if task is None:
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
        logger.info("listener_disconnected", listeners=self.listener_count)

    async def close(self) -> None:
        for websocket in list(self._tasks):
            await self.disconnect(websocket)

    async def _push_loop(self, websocket: WebSocket) -> None:
        while True:
            await self._push(websocket)
            await asyncio.sleep(self._interval)

    async def _push(self, websocket: WebSocket) -> None:
        try:
            snapshot = await self._build_snapshot()
            await websocket.send_json(snapshot.model_dump(mode="json", by_alias=True))
        except Exception:
            logger.exception("snapshot_push_failed")

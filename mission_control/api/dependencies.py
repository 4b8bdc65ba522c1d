from fastapi import Request, WebSocket

from mission_control.services.aggregator import DashboardAggregator
from mission_control.services.broadcaster import SnapshotBroadcaster


def get_aggregator(request: Request) -> DashboardAggregator:
    return request.app.state.aggregator


def get_broadcaster(websocket: WebSocket) -> SnapshotBroadcaster:
    return websocket.app.state.broadcaster

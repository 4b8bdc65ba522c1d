from typing import Any, Dict, Literal, Optional, Union

from pydantic import BaseModel, Field

from mission_control.models.resources import ResourceSnapshot

HostState = Literal["online", "offline"]

# Marker for a remote metric the service did not report
UNAVAILABLE = "--"


class RemoteServiceStatus(BaseModel):
    """Outcome of one call to a remote integration."""

    configured: bool = Field(..., description="True if a token is configured for the service")
    reachable: bool = Field(..., description="True if the call returned a payload")
    payload: Optional[Dict[str, Any]] = None
    error: Optional[str] = None

    @classmethod
    def from_response(cls, configured: bool, response: Dict[str, Any]) -> "RemoteServiceStatus":
        if not configured or "error" in response:
            return cls(
                configured=configured,
                reachable=False,
                error=str(response.get("error", "not configured")),
            )
        return cls(configured=True, reachable=True, payload=response)


class RemoteError(BaseModel):
    error: str


class HomeAssistantMetrics(BaseModel):
    version: Optional[str]
    hostname: str
    uptime: Union[str, float]
    supervisor_version: str
    cpu: Union[float, str] = Field(..., description="CPU percent or '--'")
    memory: Union[float, str] = Field(..., description="Memory percent or '--'")


class GatewayMetrics(BaseModel):
    gateway_version: str
    uptime: Union[str, float]
    active_sessions: int = Field(..., ge=0)
    system: Dict[str, Any] = Field(
        ...,
        description="Raw system status payload reported by the gateway",
    )


class HostSummary(BaseModel):
    name: str
    type: str
    status: HostState
    description: str


class LocalHostSummary(HostSummary):
    metrics: ResourceSnapshot


class HomeAssistantHostSummary(HostSummary):
    metrics: Union[HomeAssistantMetrics, RemoteError]


class GatewayHostSummary(HostSummary):
    metrics: Union[GatewayMetrics, RemoteError]


class HostsOverview(BaseModel):
    """Multi-host view: the local server plus the two remote integrations."""

    jamlife: LocalHostSummary
    homeassistant: HomeAssistantHostSummary
    ratchet: GatewayHostSummary

import os
from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field

DEFAULT_HA_URL = "http://homeassistant:8123"
DEFAULT_GATEWAY_URL = "http://100.84.150.102:18789"


class Settings(BaseModel):
    model_config = ConfigDict(frozen=True)

    # Server
    host: str = Field(default="0.0.0.0", description="Listen address")
    port: int = Field(default=3000, description="Listen port")
    environment: str = Field(
        default="development",
        description="Deployment environment; anything but 'production' loads a local .env file",
    )
    log_level: str = Field(default="info", description="structlog filtering level")

    # Home Assistant
    ha_url: str = Field(
        default=DEFAULT_HA_URL,
        description="Base URL of the Home Assistant instance, e.g. http://ha-nuc:8123",
    )
    ha_token: Optional[str] = Field(
        default=None,
        description="Long-lived access token for Home Assistant; absence disables the integration",
    )

    # Ratchet gateway
    gateway_url: str = Field(
        default=DEFAULT_GATEWAY_URL,
        description="Base URL of the Ratchet AI gateway",
    )
    gateway_token: Optional[str] = Field(
        default=None,
        description="Bearer token for the Ratchet gateway; absence disables the integration",
    )

    # Docker / dashboard
    docker_host: str = Field(
        default="unix:///var/run/docker.sock",
        description="Docker daemon address",
    )
    update_interval: float = Field(
        default=30.0,
        gt=0,
        description="Seconds between WebSocket snapshot pushes",
    )
    static_dir: str = Field(
        default="public",
        description="Directory with the dashboard's static files",
    )

    @classmethod
    def from_env(cls, env_file: str = ".env") -> "Settings":
        environment = os.getenv("APP_ENV", "development")
        if environment != "production":
            # Existing variables win over the .env file
            load_dotenv(env_file, override=False)

        return cls(
            host=os.getenv("HOST", "0.0.0.0"),
            port=int(os.getenv("PORT", "3000")),
            environment=environment,
            log_level=os.getenv("LOG_LEVEL", "info"),
            ha_url=os.getenv("HA_URL") or DEFAULT_HA_URL,
            ha_token=os.getenv("HA_TOKEN") or None,
            gateway_url=os.getenv("RATCHET_GATEWAY_URL") or DEFAULT_GATEWAY_URL,
            gateway_token=os.getenv("RATCHET_GATEWAY_TOKEN") or None,
            docker_host=os.getenv("DOCKER_HOST", "unix:///var/run/docker.sock"),
            update_interval=float(os.getenv("UPDATE_INTERVAL", "30")),
            static_dir=os.getenv("STATIC_DIR", "public"),
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings.from_env()

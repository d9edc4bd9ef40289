"""Application configuration using Pydantic Settings."""

from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings

from .protocol.constants import (
    CONTROL_PORT,
    DEFAULT_CONNECT_TIMEOUT,
    DEFAULT_READ_TIMEOUT,
    DEFAULT_WRITE_TIMEOUT,
)
from .services.zone_directory import DEFAULT_MAX_ZONE, DEFAULT_ZONES

# Resolve config: prefer system config (installed), fall back to repo .env (dev)
_PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
_SYSTEM_CONF = Path("/etc/rnet-bridge/rnet-bridge.conf")
_ENV_FILE = _SYSTEM_CONF if _SYSTEM_CONF.exists() else _PROJECT_ROOT / ".env"


class Settings(BaseSettings):
    """Application settings loaded from environment variables and .env file."""

    # Controller
    controller_host: str = "10.0.0.131"
    controller_port: int = CONTROL_PORT

    # Wake broadcast (sent before every command unless disabled)
    wake_enabled: bool = True
    broadcast_address: str = "10.0.0.255"
    wake_source_port: int = CONTROL_PORT  # 0 = ephemeral

    # Deadlines (seconds)
    connect_timeout: float = DEFAULT_CONNECT_TIMEOUT
    write_timeout: float = DEFAULT_WRITE_TIMEOUT
    read_timeout: float = DEFAULT_READ_TIMEOUT

    # Room directory, as JSON in the environment: RNET_ZONES='{"kitchen": [4]}'
    zones: dict[str, list[int]] = DEFAULT_ZONES
    max_zone: int = DEFAULT_MAX_ZONE

    # Logging
    log_level: str = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = 8080

    model_config = {"env_prefix": "RNET_", "env_file": str(_ENV_FILE)}

    @field_validator("connect_timeout", "write_timeout", "read_timeout")
    @classmethod
    def _positive_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("timeouts must be positive")
        return v

    @field_validator("log_level")
    @classmethod
    def _upper_log_level(cls, v: str) -> str:
        return v.upper()


settings = Settings()

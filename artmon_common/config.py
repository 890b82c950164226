"""Shared configuration management using pydantic-settings.

Provides centralized configuration with environment variable support for
the monitoring client library and its command-line entry point.

Environment Variables:
    ARTMON_HOST - Daemon address (default: local address)
    ARTMON_PORT - Daemon monitoring port or service name (no default)
    ARTMON_SOCKET_TIMEOUT - Connect/send/receive timeout in seconds, 0 disables (default: 5.0)
    ARTMON_RECV_BUFFER_SIZE - Maximum reply size read from the daemon (default: 2048)
    ARTMON_LOG_LEVEL - Logging level (default: INFO)
    ARTMON_LOG_FORMAT - Log format: json or console (default: console)
    ARTMON_DEBUG - Enable debug mode (default: false)

Example:
    export ARTMON_PORT=2958
    export ARTMON_LOG_FORMAT=json
    art-monitoring-client -r read_eeprom
"""

from pydantic_settings import BaseSettings
from pydantic import field_validator
from typing import Optional, Literal

from .constants import (
    DEFAULT_HOST,
    DEFAULT_SOCKET_TIMEOUT,
    DEFAULT_RECV_BUFFER_SIZE,
    DEFAULT_LOG_LEVEL,
)


class ArtMonConfig(BaseSettings):
    """Configuration for the monitoring client.

    Command-line options take precedence over these values; the settings
    only provide defaults.
    """

    # Daemon endpoint
    host: Optional[str] = DEFAULT_HOST
    port: Optional[str] = None

    # Network settings
    socket_timeout: Optional[float] = DEFAULT_SOCKET_TIMEOUT
    recv_buffer_size: int = DEFAULT_RECV_BUFFER_SIZE

    # Logging configuration
    log_level: str = DEFAULT_LOG_LEVEL
    log_format: Literal["json", "console"] = "console"

    # Debug mode
    debug: bool = False

    model_config = {
        "env_prefix": "ARTMON_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore"  # Ignore unknown environment variables
    }

    @field_validator('log_level', mode='after')
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        """Store log level upper-cased, as the logging module expects."""
        return v.upper()

    @field_validator('recv_buffer_size', mode='after')
    @classmethod
    def validate_buffer_size(cls, v: int) -> int:
        if v <= 0:
            raise ValueError(f"recv_buffer_size must be positive, got {v}")
        return v

    @field_validator('socket_timeout', mode='after')
    @classmethod
    def normalize_timeout(cls, v: Optional[float]) -> Optional[float]:
        """A zero or negative timeout means blocking I/O."""
        if v is not None and v <= 0:
            return None
        return v

    def get_log_level(self) -> str:
        """Get log level string for structlog."""
        return self.log_level

    def __str__(self) -> str:
        """String representation for debugging."""
        return (
            f"ArtMonConfig(host={self.host}, port={self.port}, "
            f"timeout={self.socket_timeout}, log_level={self.log_level})"
        )


# Global configuration instance
config = ArtMonConfig()

import logging
import os
from dataclasses import dataclass

from dotenv import load_dotenv

# A local .env is picked up for development; real env vars win.
load_dotenv()

logger = logging.getLogger("open_meteo_mcp.settings")

DEFAULT_OPEN_METEO_URL = "https://api.open-meteo.com/v1/forecast"


def _read_int_env(name: str, default: int) -> int:
    raw_value = os.environ.get(name)
    if raw_value is None:
        return default
    try:
        return int(raw_value)
    except ValueError:
        logger.warning("Invalid integer %s=%r. Using default=%s.", name, raw_value, default)
        return default


def _read_log_level_env(name: str, default: str) -> str:
    raw_value = os.environ.get(name)
    if raw_value is None:
        return default
    level = raw_value.strip().upper()
    if level not in logging.getLevelNamesMapping():
        logger.warning("Unknown log level %s=%r. Using default=%s.", name, raw_value, default)
        return default
    return level


def _read_float_env(name: str, default: float) -> float:
    raw_value = os.environ.get(name)
    if raw_value is None:
        return default
    try:
        value = float(raw_value)
    except ValueError:
        logger.warning("Invalid number %s=%r. Using default=%s.", name, raw_value, default)
        return default
    if value <= 0:
        logger.warning("%s must be positive, got %r. Using default=%s.", name, raw_value, default)
        return default
    return value


@dataclass(frozen=True)
class Settings:
    """Runtime configuration for the MCP server and its tools."""

    server_name: str = "open-meteo-forecast"
    host: str = "0.0.0.0"
    port: int = 8000
    path: str = "/mcp"
    log_level: str = "INFO"
    open_meteo_url: str = DEFAULT_OPEN_METEO_URL
    # Upper bound on one tool invocation, in seconds.
    max_duration: float = 60.0

    @classmethod
    def from_env(cls) -> "Settings":
        settings = cls(
            server_name=os.environ.get("MCP_SERVER_NAME", cls.server_name),
            host=os.environ.get("HOST", cls.host),
            port=_read_int_env("PORT", cls.port),
            path=os.environ.get("MCP_PATH", cls.path),
            log_level=_read_log_level_env("LOG_LEVEL", cls.log_level),
            open_meteo_url=os.environ.get("OPEN_METEO_URL", cls.open_meteo_url),
            max_duration=_read_float_env("MAX_DURATION", cls.max_duration),
        )
        logger.debug("Settings loaded: %s", settings)
        return settings

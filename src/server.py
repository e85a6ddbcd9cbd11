#!/usr/bin/env python3
import logging
import sys

from fastmcp import FastMCP

from forecast_tools import register_weather
from settings import Settings

logger = logging.getLogger("open_meteo_mcp.server")

settings = Settings.from_env()


def configure_logging(settings):
    # stderr only; stdout may carry protocol traffic.
    logging.basicConfig(
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    logging.getLogger("open_meteo_mcp").setLevel(settings.log_level)


configure_logging(settings)

# Initialize the MCP Server
mcp = FastMCP(
    settings.server_name,
    instructions="Hourly temperature forecasts for a latitude/longitude pair, backed by Open-Meteo.",
)


# Helper to register tools with logging
def register_module(name, register_func):
    logger.info("--- Registering %s module ---", name)
    try:
        register_func(mcp, settings)
        logger.info("✅ %s module registered successfully.", name)
        return True
    except Exception:
        logger.exception("❌ Failed to register %s module", name)
        return False


# Register all tools
register_module("Weather", register_weather)


def main():
    logger.info("Starting FastMCP server on %s:%s%s", settings.host, settings.port, settings.path)

    # Streamable HTTP answers GET/POST/DELETE on one path; json_response turns off SSE.
    mcp.run(
        transport="http",
        host=settings.host,
        port=settings.port,
        path=settings.path,
        stateless_http=True,
        json_response=True,
    )


if __name__ == "__main__":
    main()

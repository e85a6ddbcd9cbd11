import asyncio
import logging
from datetime import datetime, timezone
from decimal import Decimal
from typing import Annotated, List, Optional

import requests
from fastmcp import FastMCP
from pydantic import Field, ValidationError

from settings import DEFAULT_OPEN_METEO_URL, Settings

from .errors import NetworkError, RequestError, ShapeError, WeatherToolError
from .models import ForecastEntry, ForecastResponse

logger = logging.getLogger("open_meteo_mcp.weather")

TOOL_NAME = "get_weather_forecast"
TOOL_DESCRIPTION = (
    "Get hourly temperature forecast for a given location using longitude and latitude coordinates"
)
FORECAST_HOURS = 24

Latitude = Annotated[
    float,
    Field(ge=-90, le=90, strict=True, allow_inf_nan=False, description="Latitude coordinate (-90 to 90)"),
]
Longitude = Annotated[
    float,
    Field(ge=-180, le=180, strict=True, allow_inf_nan=False, description="Longitude coordinate (-180 to 180)"),
]


def fetch_forecast(
    latitude: float,
    longitude: float,
    url: str = DEFAULT_OPEN_METEO_URL,
    timeout: float = 60.0,
) -> ForecastResponse:
    """
    Call Open-Meteo once and decode the hourly temperature series.

    Raises NetworkError, RequestError or ShapeError.
    """
    params = {
        "latitude": latitude,
        "longitude": longitude,
        "hourly": "temperature_2m",
    }

    try:
        response = requests.get(url, params=params, timeout=timeout)
    except requests.RequestException as e:
        raise NetworkError(str(e)) from e

    logger.debug(
        "response status=%s reason=%s url=%s headers=%s",
        response.status_code,
        response.reason,
        response.url,
        dict(response.headers),
    )

    if not 200 <= response.status_code < 300:
        raise RequestError(response.status_code, response.reason)

    try:
        payload = response.json()
    except ValueError as e:
        raise ShapeError(f"Weather API returned invalid JSON: {e}") from e

    logger.debug("weather data: %s", payload)

    try:
        return ForecastResponse.model_validate(payload)
    except ValidationError as e:
        raise ShapeError(f"Unexpected weather API response: {e}") from e


def current_hour_prefix(now: Optional[datetime] = None) -> str:
    """UTC instant truncated to the hour, e.g. '2024-06-01T14'."""
    if now is None:
        now = datetime.now(timezone.utc)
    return now.astimezone(timezone.utc).strftime("%Y-%m-%dT%H")


def find_start_index(times: List[str], hour_prefix: str) -> int:
    # ISO-8601 strings sort chronologically.
    for index, value in enumerate(times):
        if value >= hour_prefix:
            return index
    # No upcoming hour: fall back to the start of the series.
    return 0


def select_entries(forecast: ForecastResponse, hour_prefix: Optional[str] = None) -> List[ForecastEntry]:
    if hour_prefix is None:
        hour_prefix = current_hour_prefix()

    times = forecast.hourly.time
    temperatures = forecast.hourly.temperature_2m
    unit = forecast.hourly_units.temperature_2m

    start = find_start_index(times, hour_prefix)
    count = min(FORECAST_HOURS, len(times) - start)

    return [
        ForecastEntry(time=time, temperature=temperature, unit=unit)
        for time, temperature in zip(
            times[start:start + count], temperatures[start:start + count]
        )
    ]


def format_number(value: Optional[float]) -> str:
    """
    Render a number the way a JavaScript client prints it:
    20.0 -> '20', 20.5 -> '20.5', 1e-07 -> '1e-7', 1e21 -> '1e+21'.
    """
    if value is None:
        return "n/a"
    number = float(value)
    if number.is_integer() and abs(number) < 1e21:
        return str(int(number))

    # Shortest round-trip digits, then placed by the JS Number#toString rules.
    _, digit_tuple, exponent = Decimal(repr(abs(number))).as_tuple()
    digits = "".join(str(digit) for digit in digit_tuple).rstrip("0") or "0"
    point = exponent + len(digit_tuple)
    prefix = "-" if number < 0 else ""

    if 0 < point <= 21:
        if point >= len(digits):
            return prefix + digits + "0" * (point - len(digits))
        return prefix + digits[:point] + "." + digits[point:]
    if -6 < point <= 0:
        return prefix + "0." + "0" * -point + digits

    mantissa = digits[0] + ("." + digits[1:] if len(digits) > 1 else "")
    power = point - 1
    return f"{prefix}{mantissa}e{'+' if power >= 0 else '-'}{abs(power)}"


def render_forecast(latitude: float, longitude: float, entries: List[ForecastEntry]) -> str:
    lines = [
        f"- {entry.time}: {format_number(entry.temperature)}{entry.unit}"
        for entry in entries
    ]
    return (
        f"Weather Forecast for coordinates ({format_number(latitude)}, {format_number(longitude)}):\n\n"
        f"Next {len(entries)} Hours Temperature Forecast:\n"
        + "\n".join(lines)
    )


def register_weather(mcp: FastMCP, settings: Optional[Settings] = None):
    """
    Registers the Open-Meteo hourly temperature forecast tool with the MCP server.
    """
    if settings is None:
        settings = Settings.from_env()

    @mcp.tool(name=TOOL_NAME, description=TOOL_DESCRIPTION)
    async def get_weather_forecast(latitude: Latitude, longitude: Longitude) -> str:
        logger.debug("latitude=%s longitude=%s", latitude, longitude)

        try:
            forecast = await asyncio.to_thread(
                fetch_forecast,
                latitude,
                longitude,
                settings.open_meteo_url,
                settings.max_duration,
            )
            entries = select_entries(forecast)
            logger.debug("forecast: %s", [entry.model_dump() for entry in entries])

            text = render_forecast(latitude, longitude, entries)
        except WeatherToolError as e:
            logger.warning("%s for (%s, %s): %s", type(e).__name__, latitude, longitude, e)
            return f"Error fetching weather data: {e}"
        except Exception as e:
            logger.exception("Unexpected failure building forecast for (%s, %s)", latitude, longitude)
            return f"Error fetching weather data: {e}"

        logger.debug("text: %s", text)
        return text

    return get_weather_forecast

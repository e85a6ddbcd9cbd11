import json

import pytest
import requests


def hourly_payload(times, temperatures, unit="°C"):
    return {
        "latitude": 52.52,
        "longitude": 13.419998,
        "generationtime_ms": 0.05,
        "utc_offset_seconds": 0,
        "timezone": "GMT",
        "timezone_abbreviation": "GMT",
        "elevation": 38.0,
        "hourly_units": {"time": "iso8601", "temperature_2m": unit},
        "hourly": {"time": times, "temperature_2m": temperatures},
    }


def make_response(status_code=200, payload=None, reason="OK", body=None):
    response = requests.Response()
    response.status_code = status_code
    response.reason = reason
    response.url = "https://api.open-meteo.com/v1/forecast"
    if body is None:
        body = json.dumps(payload if payload is not None else {})
    response._content = body.encode("utf-8")
    response.headers["Content-Type"] = "application/json"
    return response


@pytest.fixture
def june_first_payload():
    """24 hourly slots on 2024-06-01, temperature = 10 + hour / 2."""
    times = [f"2024-06-01T{hour:02d}:00" for hour in range(24)]
    temperatures = [10 + hour / 2 for hour in range(24)]
    return hourly_payload(times, temperatures)


@pytest.fixture
def two_day_payload():
    times = [f"2024-06-{day:02d}T{hour:02d}:00" for day in (1, 2) for hour in range(24)]
    temperatures = [float(index) for index in range(48)]
    return hourly_payload(times, temperatures)

class WeatherToolError(Exception):
    """Base class for failures while fetching or reshaping a forecast."""


class RequestError(WeatherToolError):
    """The weather API answered with a non-2xx status."""

    def __init__(self, status_code: int, reason: str):
        self.status_code = status_code
        self.reason = reason
        super().__init__(f"Weather API request failed: {status_code} {reason}")


class NetworkError(WeatherToolError):
    """The request could not complete (DNS, refused connection, timeout)."""


class ShapeError(WeatherToolError):
    """The response body was not JSON or did not match the expected shape."""

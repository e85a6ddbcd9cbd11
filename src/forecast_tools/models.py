from typing import List, Optional

from pydantic import BaseModel, model_validator


class HourlySeries(BaseModel):
    time: List[str]
    temperature_2m: List[Optional[float]]

    @model_validator(mode="after")
    def check_aligned(self):
        if len(self.time) != len(self.temperature_2m):
            raise ValueError(
                f"hourly.time has {len(self.time)} values but "
                f"hourly.temperature_2m has {len(self.temperature_2m)}"
            )
        return self


class HourlyUnits(BaseModel):
    temperature_2m: str


class ForecastResponse(BaseModel):
    """
    The subset of an Open-Meteo /v1/forecast payload this server reads.
    Unknown fields are ignored.
    """

    latitude: Optional[float] = None
    longitude: Optional[float] = None
    timezone: Optional[str] = None
    elevation: Optional[float] = None
    hourly_units: HourlyUnits
    hourly: HourlySeries


class ForecastEntry(BaseModel):
    time: str
    temperature: Optional[float]
    unit: str

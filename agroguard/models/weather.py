"""
Weather input models consumed by the risk detector.
"""
from typing import Iterator, Optional, Tuple

from pydantic import BaseModel, Field


class ForecastDay(BaseModel):
    """Single day of a short-term forecast."""

    date: str = Field(..., description="Forecast date (YYYY-MM-DD)")
    temp_max: float = Field(..., alias="tempMax", description="Maximum temperature (°C)")
    temp_min: float = Field(..., alias="tempMin", description="Minimum temperature (°C)")
    humidity: float = Field(..., description="Mean relative humidity (%)")
    rainfall: float = Field(..., description="Precipitation total (mm/day)")
    conditions: str = Field(default="Clear", description="Conditions label")

    model_config = {
        "frozen": True,
        "populate_by_name": True,
    }

    @property
    def mean_temp(self) -> float:
        return (self.temp_max + self.temp_min) / 2


class WeatherSnapshot(BaseModel):
    """
    Current conditions plus the daily forecast for one location.

    The forecast keeps the order the provider returned; only the first
    seven days are meaningful for risk detection.
    """

    location: str = Field(..., description="Human readable location label")
    latitude: float = Field(..., description="Latitude of the forecast point")
    longitude: float = Field(..., description="Longitude of the forecast point")
    temperature: float = Field(..., description="Current air temperature (°C)")
    humidity: float = Field(..., description="Current relative humidity (%)")
    rainfall: float = Field(default=0.0, description="Recent precipitation (mm)")
    conditions: str = Field(default="Clear", description="Current conditions label")
    forecast: Tuple[ForecastDay, ...] = Field(default=(), description="Daily forecast")

    model_config = {
        "frozen": True,
        "populate_by_name": True,
        "json_schema_extra": {
            "examples": [
                {
                    "location": "Nakuru",
                    "latitude": -0.3031,
                    "longitude": 36.08,
                    "temperature": 24.5,
                    "humidity": 62,
                    "rainfall": 0.0,
                    "conditions": "Clouds",
                    "forecast": [
                        {
                            "date": "2025-03-01",
                            "tempMax": 29.0,
                            "tempMin": 17.0,
                            "humidity": 58,
                            "rainfall": 1.2,
                            "conditions": "Clouds"
                        }
                    ]
                }
            ]
        }
    }

    def numeric_values(self) -> Iterator[float]:
        """Yield every numeric reading carried by the snapshot."""
        yield from (self.latitude, self.longitude, self.temperature, self.humidity, self.rainfall)
        for day in self.forecast:
            yield from (day.temp_max, day.temp_min, day.humidity, day.rainfall)


class FarmerLocation(BaseModel):
    """Roster entry supplied by the farmer registry."""

    id: Optional[str] = Field(default=None, description="Farmer identifier")
    name: Optional[str] = Field(default=None, description="Farmer name")
    phone: Optional[str] = Field(default=None, description="Phone number for SMS alerts")
    latitude: float = Field(..., ge=-90, le=90, description="Farm latitude")
    longitude: float = Field(..., ge=-180, le=180, description="Farm longitude")
    language: str = Field(default="en", description="Preferred alert language code")

    model_config = {"frozen": True}

"""
Shared fixtures for AgroGuard tests.
"""
from datetime import date, timedelta

import pytest

from agroguard.models.weather import ForecastDay, WeatherSnapshot


def build_snapshot(
    rainfall=None,
    temp_max=20.0,
    temp_min=15.0,
    day_humidity=50.0,
    temperature=22.0,
    humidity=50.0,
    latitude=-0.3031,
    longitude=36.08,
    location="Nakuru"
):
    """
    Build a snapshot; per-day values may be scalars or lists.

    Forecast length follows the rainfall list (7 dry days by default).
    """
    if rainfall is None:
        rainfall = [0.0] * 7

    def per_day(value, i):
        return value[i] if isinstance(value, (list, tuple)) else value

    start = date(2025, 3, 1)
    forecast = tuple(
        ForecastDay(
            date=(start + timedelta(days=i)).isoformat(),
            temp_max=per_day(temp_max, i),
            temp_min=per_day(temp_min, i),
            humidity=per_day(day_humidity, i),
            rainfall=rain,
            conditions="Rain" if rain >= 5 else "Clear",
        )
        for i, rain in enumerate(rainfall)
    )
    return WeatherSnapshot(
        location=location,
        latitude=latitude,
        longitude=longitude,
        temperature=temperature,
        humidity=humidity,
        rainfall=0.0,
        conditions="Clear",
        forecast=forecast,
    )


@pytest.fixture
def snapshot_factory():
    """Factory for weather snapshots."""
    return build_snapshot


@pytest.fixture
def dry_week_snapshot():
    """Seven rainless, mild days."""
    return build_snapshot(rainfall=[0.0] * 7)


@pytest.fixture
def snapshot_payload():
    """JSON body for a snapshot using the API's camelCase keys."""
    return {
        "location": "Nakuru",
        "latitude": -0.3031,
        "longitude": 36.08,
        "temperature": 22.0,
        "humidity": 50,
        "rainfall": 0.0,
        "conditions": "Clear",
        "forecast": [
            {
                "date": f"2025-03-0{i + 1}",
                "tempMax": 20.0,
                "tempMin": 15.0,
                "humidity": 50,
                "rainfall": 120.0 if i == 0 else 0.0,
                "conditions": "Rain" if i == 0 else "Clear",
            }
            for i in range(7)
        ],
    }

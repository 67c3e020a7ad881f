"""
Async weather service building risk-detection snapshots from Open-Meteo.
"""
import asyncio
from typing import Any, Dict, List, Optional

import httpx
import pandas as pd

from agroguard.models.weather import ForecastDay, WeatherSnapshot
from agroguard.utils.errors import WeatherProviderError
from agroguard.utils.logger import get_logger


HOURLY_PARAMS = ["temperature_2m", "relative_humidity_2m", "precipitation", "weather_code"]
CURRENT_PARAMS = ["temperature_2m", "relative_humidity_2m", "precipitation", "weather_code"]

# WMO weather interpretation codes -> conditions label
WEATHER_CODE_LABELS = {
    0: "Clear",
    1: "Clouds", 2: "Clouds", 3: "Clouds",
    45: "Fog", 48: "Fog",
    51: "Drizzle", 53: "Drizzle", 55: "Drizzle", 56: "Drizzle", 57: "Drizzle",
    61: "Rain", 63: "Rain", 65: "Rain", 66: "Rain", 67: "Rain",
    80: "Rain", 81: "Rain", 82: "Rain",
    71: "Snow", 73: "Snow", 75: "Snow", 77: "Snow", 85: "Snow", 86: "Snow",
    95: "Thunderstorm", 96: "Thunderstorm", 99: "Thunderstorm",
}


def _reading(value: Any, default: float = float("nan")) -> float:
    """Provider reading as float; null or malformed values become the default."""
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


def describe_weather_code(code: Any) -> str:
    """Map a WMO weather code to a short conditions label."""
    if code is None or pd.isna(code):
        return "Clear"
    return WEATHER_CODE_LABELS.get(int(code), "Clouds")


class WeatherService:
    """
    Async service for fetching forecasts from the Open-Meteo API.
    """

    def __init__(
        self,
        base_url: str = "https://api.open-meteo.com/v1",
        timeout: int = 30,
        max_retries: int = 3,
        retry_delay: float = 5,
        forecast_days: int = 7,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        logger=None
    ):
        """
        Initialize weather service.

        Args:
            base_url: Base URL for Open-Meteo API
            timeout: Request timeout in seconds
            max_retries: Maximum number of retry attempts
            retry_delay: Seconds to wait between attempts
            forecast_days: Number of forecast days to request
            transport: Optional httpx transport (used by tests)
            logger: Logger instance
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.max_retries = max_retries
        self.retry_delay = retry_delay
        self.forecast_days = forecast_days
        self.transport = transport
        self.logger = logger or get_logger("agroguard.weather")

    async def get_snapshot(
        self,
        latitude: float,
        longitude: float,
        location: Optional[str] = None
    ) -> WeatherSnapshot:
        """
        Fetch current conditions and the daily forecast for a point.

        Args:
            latitude: Latitude coordinate
            longitude: Longitude coordinate
            location: Label for the location (defaults to the coordinates)

        Returns:
            WeatherSnapshot ready for risk detection

        Raises:
            WeatherProviderError: If the API cannot be reached or answers badly
        """
        data = await self._fetch_forecast(latitude, longitude)
        label = location or f"{latitude:.4f}, {longitude:.4f}"
        return self._parse_snapshot(data, latitude, longitude, label)

    async def _fetch_forecast(self, latitude: float, longitude: float) -> Dict[str, Any]:
        """
        Fetch forecast data using httpx, retrying transient failures.

        Args:
            latitude: Latitude coordinate
            longitude: Longitude coordinate

        Returns:
            API response as dictionary

        Raises:
            WeatherProviderError: If request fails after all retries
        """
        endpoint = f"{self.base_url}/forecast"

        params = {
            "latitude": latitude,
            "longitude": longitude,
            "current": ",".join(CURRENT_PARAMS),
            "hourly": ",".join(HOURLY_PARAMS),
            "forecast_days": min(self.forecast_days, 16),
            "timezone": "auto"
        }

        last_error = None
        for attempt in range(1, self.max_retries + 1):
            try:
                async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                    response = await client.get(endpoint, params=params)

                if response.status_code == 200:
                    data = response.json()
                    if self._validate_response(data):
                        return data
                    raise WeatherProviderError("Invalid response format")

                if response.status_code == 429:
                    self.logger.warning(f"Rate limit hit (attempt {attempt}/{self.max_retries})")
                    last_error = WeatherProviderError("Rate limit exceeded", status_code=429)
                    if attempt < self.max_retries:
                        await asyncio.sleep(self.retry_delay * 2)
                    continue

                last_error = WeatherProviderError(
                    f"API request failed: {response.status_code}",
                    status_code=response.status_code
                )

            except httpx.TimeoutException:
                last_error = WeatherProviderError("Request timed out")

            except httpx.HTTPError as e:
                last_error = WeatherProviderError(f"Connection failed: {e}")

            except (WeatherProviderError, ValueError) as e:
                last_error = e if isinstance(e, WeatherProviderError) else WeatherProviderError(str(e))

            self.logger.warning(
                f"Weather fetch attempt {attempt}/{self.max_retries} for "
                f"{latitude}, {longitude} failed: {last_error}"
            )
            if attempt < self.max_retries:
                await asyncio.sleep(self.retry_delay)

        raise WeatherProviderError(f"Request failed after {self.max_retries} attempts: {last_error}")

    def _validate_response(self, data: Dict) -> bool:
        """
        Validate API response format.

        Args:
            data: Response data

        Returns:
            True if valid, False otherwise
        """
        if not isinstance(data, dict) or data.get("error"):
            return False

        for field in ("current", "hourly"):
            if not isinstance(data.get(field), dict):
                return False

        return "time" in data["hourly"]

    def _parse_snapshot(
        self,
        data: Dict,
        latitude: float,
        longitude: float,
        location: str
    ) -> WeatherSnapshot:
        """
        Convert an API response into a WeatherSnapshot.

        Args:
            data: Weather API response
            latitude: Requested latitude
            longitude: Requested longitude
            location: Location label

        Returns:
            WeatherSnapshot
        """
        current = data.get("current", {})

        return WeatherSnapshot(
            location=location,
            latitude=latitude,
            longitude=longitude,
            temperature=_reading(current.get("temperature_2m")),
            humidity=_reading(current.get("relative_humidity_2m")),
            rainfall=_reading(current.get("precipitation"), default=0.0),
            conditions=describe_weather_code(current.get("weather_code")),
            forecast=tuple(self._parse_daily_forecast(data)),
        )

    def _parse_daily_forecast(self, data: Dict) -> List[ForecastDay]:
        """
        Aggregate hourly values into per-day forecast entries.

        Args:
            data: Weather API response

        Returns:
            Up to forecast_days ForecastDay values in date order
        """
        hourly_data = data.get("hourly", {})
        times = hourly_data.get("time", [])

        df = pd.DataFrame({
            "timestamp": pd.to_datetime(times),
            "temperature_2m": hourly_data.get("temperature_2m", [None] * len(times)),
            "relative_humidity_2m": hourly_data.get("relative_humidity_2m", [None] * len(times)),
            "precipitation": hourly_data.get("precipitation", [None] * len(times)),
            "weather_code": hourly_data.get("weather_code", [None] * len(times)),
        })

        if df.empty:
            return []

        # Missing precipitation means no rain; other gaps stay NaN
        df["precipitation"] = pd.to_numeric(df["precipitation"], errors="coerce").fillna(0)
        for column in ("temperature_2m", "relative_humidity_2m", "weather_code"):
            df[column] = pd.to_numeric(df[column], errors="coerce")
        df["date"] = df["timestamp"].dt.strftime("%Y-%m-%d")

        forecast = []
        for date, day in df.sort_values("timestamp").groupby("date", sort=True):
            midday = day.iloc[len(day) // 2]
            forecast.append(ForecastDay(
                date=date,
                temp_max=float(day["temperature_2m"].max()),
                temp_min=float(day["temperature_2m"].min()),
                humidity=float(day["relative_humidity_2m"].mean().round()),
                rainfall=float(day["precipitation"].sum()),
                conditions=describe_weather_code(midday["weather_code"]),
            ))

            if len(forecast) >= self.forecast_days:
                break

        return forecast

    async def check_available(self) -> bool:
        """Quick reachability probe for the health endpoint."""
        try:
            async with httpx.AsyncClient(timeout=5.0, transport=self.transport) as client:
                response = await client.get(
                    f"{self.base_url}/forecast",
                    params={"latitude": 0, "longitude": 0, "current": "temperature_2m"}
                )
            return response.status_code == 200
        except httpx.HTTPError:
            return False

"""
Dependency injection for FastAPI.
Handles settings loading and service construction.
"""
import os
from functools import lru_cache
from typing import Any, Dict, List

from dotenv import load_dotenv

from agroguard.alerts.composer import AlertComposer
from agroguard.models.weather import FarmerLocation
from agroguard.risk.detector import RiskDetector
from agroguard.utils.helpers import deep_merge, load_yaml
from agroguard.utils.logger import get_logger
from api.services.weather_service import WeatherService


load_dotenv()

BASE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

DEFAULT_SETTINGS: Dict[str, Any] = {
    "logging": {"level": "INFO", "file": None, "console": True},
    "weather": {
        "base_url": "https://api.open-meteo.com/v1",
        "timeout": 30,
        "max_retries": 3,
        "retry_delay": 5,
        "forecast_days": 7,
    },
    "monitor": {"enabled": True, "interval_seconds": 3600},
}


def config_path(name: str) -> str:
    return os.path.join(BASE_DIR, "config", name)


@lru_cache()
def get_settings() -> Dict[str, Any]:
    """
    Load settings once: defaults, then YAML, then environment overrides.

    Returns:
        dict: Merged settings
    """
    path = os.getenv("AGROGUARD_CONFIG", config_path("config.yaml"))
    if not os.path.isabs(path):
        path = os.path.join(BASE_DIR, path)

    settings = DEFAULT_SETTINGS
    if os.path.exists(path):
        settings = deep_merge(settings, load_yaml(path))

    if os.getenv("AGROGUARD_LOG_LEVEL"):
        settings = deep_merge(settings, {"logging": {"level": os.environ["AGROGUARD_LOG_LEVEL"]}})
    if os.getenv("OPEN_METEO_BASE_URL"):
        settings = deep_merge(settings, {"weather": {"base_url": os.environ["OPEN_METEO_BASE_URL"]}})

    # Configure the package logger once for every child logger
    get_logger("agroguard", settings["logging"])
    return settings


@lru_cache()
def get_monitored_locations() -> Dict[str, Any]:
    """
    Load monitored locations and the farmer roster.

    Returns:
        dict: {"locations": {...}, "farmers": [...]}
    """
    path = config_path("locations.yaml")
    if not os.path.exists(path):
        return {"locations": {}, "farmers": []}
    data = load_yaml(path)
    return {
        "locations": data.get("locations") or {},
        "farmers": data.get("farmers") or [],
    }


def get_roster() -> List[FarmerLocation]:
    return [FarmerLocation(**entry) for entry in get_monitored_locations()["farmers"]]


def get_detector() -> RiskDetector:
    return RiskDetector()


def get_composer() -> AlertComposer:
    return AlertComposer()


def get_weather_service() -> WeatherService:
    weather = get_settings()["weather"]
    return WeatherService(
        base_url=weather["base_url"],
        timeout=weather["timeout"],
        max_retries=weather["max_retries"],
        retry_delay=weather["retry_delay"],
        forecast_days=weather["forecast_days"],
    )

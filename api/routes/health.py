"""
Health check endpoint for monitoring API status.
"""
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Request, status

from api.dependencies import get_weather_service
from api.services.weather_service import WeatherService

router = APIRouter()


@router.get("/health", status_code=status.HTTP_200_OK)
async def health_check(
    request: Request,
    weather_service: WeatherService = Depends(get_weather_service)
):
    """
    Health check endpoint to verify API status.

    Returns:
        dict: System health status including weather API and risk monitor
    """
    health_status = {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "weather_api": "unknown",
        "risk_monitor": "disabled",
    }

    if await weather_service.check_available():
        health_status["weather_api"] = "available"
    else:
        health_status["weather_api"] = "unavailable"
        health_status["status"] = "degraded"

    monitor = getattr(request.app.state, "risk_monitor", None)
    if monitor is not None:
        health_status["risk_monitor"] = "running" if monitor.running else "stopped"

    return health_status

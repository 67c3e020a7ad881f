"""
Climate risk detection endpoints.
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Path, Query, Request, status

from agroguard.models.weather import FarmerLocation, WeatherSnapshot
from agroguard.risk.detector import RiskDetector, count_active_warnings
from agroguard.utils.errors import WeatherProviderError
from agroguard.utils.helpers import all_finite
from api.dependencies import get_detector, get_roster, get_weather_service
from api.models.risk import (
    LatestRisksResponse,
    MonitoredLocationRisks,
    RiskDetectionRequest,
    RiskDetectionResponse,
)
from api.services.weather_service import WeatherService


router = APIRouter()


def ensure_finite(snapshot: WeatherSnapshot) -> WeatherSnapshot:
    """Reject snapshots carrying NaN or infinite weather values."""
    if not all_finite(snapshot.numeric_values()):
        raise HTTPException(
            status_code=422,
            detail="Weather values must be finite numbers"
        )
    return snapshot


@router.post(
    "/risks/detect",
    response_model=RiskDetectionResponse,
    status_code=status.HTTP_200_OK,
    summary="Detect risks from a weather snapshot",
    description="Classify drought, flood and pest risk for a pre-fetched forecast"
)
async def detect_risks(
    request: RiskDetectionRequest,
    detector: RiskDetector = Depends(get_detector)
):
    """
    Detect risks for a snapshot supplied by the caller.

    When a farmer roster is included, every assessment carries the number
    of farmers within one degree of the snapshot location.
    """
    snapshot = ensure_finite(request.snapshot)
    risks = detector.get_risks_with_farmer_count(snapshot, request.farmers)
    return RiskDetectionResponse(
        location=snapshot.location,
        risks=risks,
        active_warnings=count_active_warnings(risks),
    )


@router.get(
    "/risks/coordinates/{latitude}/{longitude}",
    response_model=RiskDetectionResponse,
    summary="Detect risks for coordinates",
    description="Fetch the 7-day forecast for a point and classify its risks",
    responses={503: {"description": "Weather provider unavailable"}}
)
async def detect_risks_for_coordinates(
    latitude: float = Path(..., ge=-90, le=90),
    longitude: float = Path(..., ge=-180, le=180),
    location: Optional[str] = Query(None, description="Location label"),
    detector: RiskDetector = Depends(get_detector),
    weather_service: WeatherService = Depends(get_weather_service),
    roster: List[FarmerLocation] = Depends(get_roster)
):
    """
    Detect risks for a point using live forecast data.

    Raises:
        503: Weather API unavailable
    """
    try:
        snapshot = await weather_service.get_snapshot(latitude, longitude, location)
    except WeatherProviderError as e:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=f"Failed to fetch weather data: {str(e)}"
        )

    risks = detector.get_risks_with_farmer_count(snapshot, roster)
    return RiskDetectionResponse(
        location=snapshot.location,
        risks=risks,
        active_warnings=count_active_warnings(risks),
    )


@router.get(
    "/risks/latest",
    response_model=LatestRisksResponse,
    summary="Latest monitored risks",
    description="Most recent scan results of the background risk monitor"
)
async def latest_risks(request: Request):
    """Return the risk monitor's latest results per location."""
    monitor = getattr(request.app.state, "risk_monitor", None)
    results = list(monitor.latest.values()) if monitor else []

    locations = [MonitoredLocationRisks(**result) for result in results]
    return LatestRisksResponse(
        locations=locations,
        active_warnings=sum(count_active_warnings(loc.risks) for loc in locations),
    )

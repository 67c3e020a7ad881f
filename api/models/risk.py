"""
Pydantic models for risk detection endpoints.
"""
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from agroguard.models.risk import RiskAssessment
from agroguard.models.weather import FarmerLocation, WeatherSnapshot


class RiskDetectionRequest(BaseModel):
    """Request model for risk detection on a pre-fetched snapshot."""

    snapshot: WeatherSnapshot = Field(..., description="Current conditions and daily forecast")
    farmers: List[FarmerLocation] = Field(default_factory=list,
                                          description="Roster used for affected-farmer counts")


class RiskDetectionResponse(BaseModel):
    """Response model for risk detection."""

    location: str = Field(..., description="Location label")
    risks: List[RiskAssessment] = Field(..., description="Detected risks, at most one per type")
    active_warnings: int = Field(..., ge=0, alias="activeWarnings",
                                 description="Number of high or severe risks")

    model_config = {
        "populate_by_name": True,
        "json_schema_extra": {
            "examples": [
                {
                    "location": "Nakuru",
                    "risks": [
                        {
                            "type": "flood",
                            "severity": "severe",
                            "location": "Nakuru",
                            "description": "Severe flood warning: Heavy rainfall expected (max 120.0mm/day)",
                            "affectedFarmers": 2
                        }
                    ],
                    "activeWarnings": 1
                }
            ]
        }
    }


class MonitoredLocationRisks(BaseModel):
    """Latest monitor result for one location."""

    location: str
    latitude: float
    longitude: float
    checked_at: datetime
    risks: List[RiskAssessment]
    error: Optional[str] = None


class LatestRisksResponse(BaseModel):
    """Response model for the latest monitor results."""

    locations: List[MonitoredLocationRisks]
    active_warnings: int = Field(..., ge=0, alias="activeWarnings")

    model_config = {"populate_by_name": True}

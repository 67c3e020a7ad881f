"""
Pydantic models for alert composition endpoints.
"""
from typing import List, Optional

from pydantic import BaseModel, Field

from agroguard.models.risk import RiskType, Severity
from agroguard.models.weather import FarmerLocation
from api.models.risk import RiskDetectionRequest


class ComposeAlertRequest(BaseModel):
    """Request model for a single alert message."""

    risk_type: RiskType = Field(..., alias="riskType", description="Risk category")
    description: str = Field(..., min_length=1, description="Risk description, embedded verbatim")
    language: str = Field(default="en", description="Language code (en, es, hi); others fall back to en")

    model_config = {
        "populate_by_name": True,
        "json_schema_extra": {
            "examples": [
                {
                    "riskType": "drought",
                    "description": "High drought risk: 5 dry days forecast with minimal rainfall (8.4mm)",
                    "language": "es"
                }
            ]
        }
    }


class ComposeAlertResponse(BaseModel):
    """Response model for a single alert message."""

    message: str
    language: str = Field(..., description="Language actually used")


class AlertPreviewRequest(RiskDetectionRequest):
    """Request model for drafting alerts to a roster."""


class AlertDraftResponse(BaseModel):
    """Message drafted for one farmer and one risk."""

    farmer: FarmerLocation
    risk_type: RiskType = Field(..., alias="riskType")
    severity: Severity
    language: str
    message: str

    model_config = {"populate_by_name": True}


class AlertPreviewResponse(BaseModel):
    """Response model for roster alert drafts."""

    location: str
    drafts: List[AlertDraftResponse]
    skipped_farmers: Optional[int] = Field(default=None, alias="skippedFarmers",
                                           description="Roster entries outside the alert radius")

    model_config = {"populate_by_name": True}

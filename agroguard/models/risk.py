"""
Risk assessment models.
"""
from enum import Enum

from pydantic import BaseModel, Field


class RiskType(str, Enum):
    DROUGHT = "drought"
    FLOOD = "flood"
    PEST = "pest"


class Severity(str, Enum):
    """Severity tiers, ordered by escalating concern."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    SEVERE = "severe"

    @property
    def rank(self) -> int:
        return list(Severity).index(self)


class Language(str, Enum):
    ENGLISH = "en"
    SPANISH = "es"
    HINDI = "hi"


class RiskAssessment(BaseModel):
    """A single categorized risk for one location."""

    type: RiskType = Field(..., description="Risk category")
    severity: Severity = Field(..., description="Severity tier")
    location: str = Field(..., description="Location label the forecast belongs to")
    description: str = Field(..., description="Human readable explanation")
    affected_farmers: int = Field(default=0, ge=0, alias="affectedFarmers",
                                  description="Roster entries near the location")

    model_config = {
        "frozen": True,
        "populate_by_name": True,
        "json_schema_extra": {
            "examples": [
                {
                    "type": "drought",
                    "severity": "severe",
                    "location": "Nakuru",
                    "description": "Critical drought conditions: 7 dry days forecast with only 0.0mm total rainfall expected",
                    "affectedFarmers": 12
                }
            ]
        }
    }

    @property
    def is_active_warning(self) -> bool:
        return self.severity.rank >= Severity.HIGH.rank

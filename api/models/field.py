"""
Pydantic models for field geometry endpoints.
"""
from typing import List

from pydantic import BaseModel, Field

from agroguard.models.field import Coordinate


class FieldGeometryRequest(BaseModel):
    """Request model for measuring a drawn field."""

    polygon: List[Coordinate] = Field(..., description="Field boundary vertices, closed or not")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "polygon": [
                        {"lat": 0.0, "lng": 0.0},
                        {"lat": 0.0, "lng": 0.001},
                        {"lat": 0.001, "lng": 0.001},
                        {"lat": 0.001, "lng": 0.0}
                    ]
                }
            ]
        }
    }

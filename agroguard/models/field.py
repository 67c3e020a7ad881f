"""
Geographic models for mapped fields.
"""
from pydantic import AliasChoices, BaseModel, Field


class Coordinate(BaseModel):
    """Geographic coordinate (latitude, longitude)."""

    latitude: float = Field(..., ge=-90, le=90,
                            validation_alias=AliasChoices("latitude", "lat"),
                            description="Latitude")
    longitude: float = Field(..., ge=-180, le=180,
                             validation_alias=AliasChoices("longitude", "lng", "lon"),
                             description="Longitude")

    model_config = {"frozen": True}


class FieldGeometryResult(BaseModel):
    """Area and marker position of a mapped field."""

    area_hectares: float = Field(..., ge=0, alias="areaHectares", description="Field area (ha)")
    center_latitude: float = Field(..., alias="centerLatitude", description="Vertex-mean latitude")
    center_longitude: float = Field(..., alias="centerLongitude", description="Vertex-mean longitude")

    model_config = {
        "frozen": True,
        "populate_by_name": True,
    }

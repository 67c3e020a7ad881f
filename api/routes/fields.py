"""
Field geometry endpoints.
"""
from fastapi import APIRouter, status

from agroguard.geometry.field_geometry import measure_field
from agroguard.models.field import FieldGeometryResult
from api.models.field import FieldGeometryRequest


router = APIRouter()


@router.post(
    "/fields/geometry",
    response_model=FieldGeometryResult,
    status_code=status.HTTP_200_OK,
    summary="Measure a mapped field",
    description="Area in hectares and marker position for a drawn polygon"
)
async def field_geometry(request: FieldGeometryRequest):
    """
    Measure a field polygon.

    Polygons with fewer than three vertices measure 0 ha; callers that need
    stricter validation do it before calling.
    """
    return measure_field(request.polygon)

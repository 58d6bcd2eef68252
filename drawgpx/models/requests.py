"""API request models."""

from typing import Optional
from pydantic import BaseModel, Field

from .geo import GeoPoint, TravelProfile


class PerimeterRequest(BaseModel):
    """Request body for measuring a drawn shape."""
    points: list[GeoPoint] = Field(description="Shape vertices in drawing order")


class RouteRequest(BaseModel):
    """Request body for route generation."""
    points: list[GeoPoint] = Field(
        description="Shape vertices in drawing order (closed implicitly)",
        min_length=3,
    )
    distance_km: float = Field(description="Target route length in kilometers", gt=0)
    profile: TravelProfile = Field(default=TravelProfile.FOOT, description="Travel profile")


class ExportRequest(BaseModel):
    """Request body for exporting an arbitrary path as GPX."""
    points: list[GeoPoint] = Field(description="Track points in travel order")
    filename: Optional[str] = Field(default=None, description="Download file name")

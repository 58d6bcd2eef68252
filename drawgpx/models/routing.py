"""Generated route models - what the API returns and the route store keeps."""

from datetime import datetime
from enum import Enum
from pydantic import BaseModel, Field

from .geo import GeoPoint, TravelProfile


class RouteStatus(str, Enum):
    """Outcome of a route generation run."""
    SUCCESS = "success"
    EMPTY = "empty"


class GeneratedRoute(BaseModel):
    """A generated route and the shapes it was built from."""
    request_id: str
    timestamp: datetime
    status: RouteStatus

    profile: TravelProfile
    target_distance_km: float = Field(description="Requested route length")
    shape_perimeter_km: float = Field(description="Perimeter of the scaled shape")
    route_distance_km: float = Field(description="Length of the matched route")
    vertex_count: int = Field(description="Resampling steps used for matching")

    scaled_shape: list[GeoPoint] = Field(description="Shape after scaling (display guide)")
    route: list[GeoPoint] = Field(default_factory=list, description="Road-following route")

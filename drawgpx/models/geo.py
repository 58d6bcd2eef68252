"""Geographic value types shared by the shape-to-route pipeline."""

from enum import Enum
from pydantic import BaseModel, ConfigDict, Field


class TravelProfile(str, Enum):
    """Routing engine profile (cost/restriction model)."""
    FOOT = "foot"
    BIKE = "bike"
    DRIVING = "driving"


class GeoPoint(BaseModel):
    """A latitude/longitude pair. Immutable and hashable."""
    model_config = ConfigDict(frozen=True)

    lat: float = Field(description="Latitude in decimal degrees", ge=-90, le=90)
    lon: float = Field(description="Longitude in decimal degrees", ge=-180, le=180)

    @classmethod
    def from_lon_lat(cls, coord) -> "GeoPoint":
        """Build a point from a GeoJSON-style [lon, lat] pair."""
        return cls(lat=coord[1], lon=coord[0])

    def to_lon_lat(self) -> tuple[float, float]:
        return (self.lon, self.lat)


# A closed polygon (implicit closing edge) and an open polyline.
Shape = list[GeoPoint]
Path = list[GeoPoint]

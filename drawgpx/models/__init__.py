"""Pydantic models for the shape-to-route pipeline."""

from .geo import GeoPoint, TravelProfile, Shape, Path
from .requests import (
    PerimeterRequest,
    RouteRequest,
    ExportRequest,
)

__all__ = [
    "GeoPoint",
    "TravelProfile",
    "Shape",
    "Path",
    "PerimeterRequest",
    "RouteRequest",
    "ExportRequest",
]

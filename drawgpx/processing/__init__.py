"""Shape processing and route pipeline."""

from .geometry import (
    shape_perimeter_km,
    scale_shape,
    resample_shape,
    target_vertex_count,
)
from .route_matcher import CHUNK_SIZE, RouteMatcher, chunk_windows
from .pipeline import ShapeRoutePipeline, RouteResult

__all__ = [
    "shape_perimeter_km",
    "scale_shape",
    "resample_shape",
    "target_vertex_count",
    "CHUNK_SIZE",
    "RouteMatcher",
    "chunk_windows",
    "ShapeRoutePipeline",
    "RouteResult",
]

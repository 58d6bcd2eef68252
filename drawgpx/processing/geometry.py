"""
Shape scaling and arc-length resampling.

Both transforms are pure: they never mutate the input list and always
return freshly built GeoPoint lists.
"""

import math
from typing import Optional

import numpy as np
from pyproj import Transformer

from ..config import get_yaml_setting
from ..models.geo import GeoPoint, Shape, Path
from ..utils.geodesy import close_ring, line_length_km, point_along


def shape_perimeter_km(shape: Shape) -> float:
    """Perimeter of a closed shape in kilometers (closing edge included)."""
    if len(shape) < 2:
        return 0.0
    return line_length_km(list(shape) + [shape[0]])


def _local_transformers(shape: Shape) -> tuple[Transformer, Transformer]:
    """Forward/inverse transformers for an azimuthal-equidistant plane centred on the shape."""
    lat0 = sum(p.lat for p in shape) / len(shape)
    lon0 = sum(p.lon for p in shape) / len(shape)
    local_crs = f"+proj=aeqd +lat_0={lat0} +lon_0={lon0} +datum=WGS84 +units=m +no_defs"
    to_local = Transformer.from_crs("EPSG:4326", local_crs, always_xy=True)
    to_wgs84 = Transformer.from_crs(local_crs, "EPSG:4326", always_xy=True)
    return to_local, to_wgs84


def _area_centroid(x: np.ndarray, y: np.ndarray) -> tuple[float, float]:
    """
    Planar centroid of the polygon enclosed by (x, y), shoelace formula.

    Zero-area polygons (collinear vertices) fall back to the vertex mean.
    """
    x_next, y_next = np.roll(x, -1), np.roll(y, -1)
    cross = x * y_next - x_next * y
    area = cross.sum() / 2.0

    if math.isclose(area, 0.0, abs_tol=1e-6):
        return float(x.mean()), float(y.mean())

    cx = ((x + x_next) * cross).sum() / (6.0 * area)
    cy = ((y + y_next) * cross).sum() / (6.0 * area)
    return float(cx), float(cy)


def scale_shape(shape: Shape, target_length_km: float) -> Shape:
    """
    Scale a closed shape so its perimeter matches a target length.

    The shape is scaled uniformly about its area centroid in a local
    azimuthal-equidistant plane, so angles and proportions are preserved.

    Args:
        shape: Polygon vertices (closing edge implicit)
        target_length_km: Desired perimeter in kilometers

    Returns:
        New shape with the same vertex count and order. Shapes with fewer
        than 3 points or zero perimeter are returned unchanged.
    """
    if len(shape) < 3:
        return shape

    current_km = shape_perimeter_km(shape)
    if current_km == 0:
        return shape

    scale_factor = target_length_km / current_km

    to_local, to_wgs84 = _local_transformers(shape)
    x, y = to_local.transform(
        np.array([p.lon for p in shape]),
        np.array([p.lat for p in shape]),
    )
    x, y = np.asarray(x), np.asarray(y)

    cx, cy = _area_centroid(x, y)
    scaled_x = cx + (x - cx) * scale_factor
    scaled_y = cy + (y - cy) * scale_factor

    lons, lats = to_wgs84.transform(scaled_x, scaled_y)
    return [GeoPoint(lat=float(lat), lon=float(lon)) for lon, lat in zip(lons, lats)]


def resample_shape(shape: Shape, target_vertex_count: int) -> Path:
    """
    Evenly spaced points along the boundary of a closed shape.

    Args:
        shape: Polygon vertices; closed automatically if first != last
        target_vertex_count: Number of equal arc-length steps (>= 1)

    Returns:
        target_vertex_count + 1 points from the start around to the start
        again. Shapes with fewer than 2 points are returned unchanged.
    """
    if len(shape) < 2:
        return list(shape)
    if target_vertex_count < 1:
        raise ValueError(f"target_vertex_count must be >= 1, got {target_vertex_count}")

    ring = close_ring(shape)
    step = line_length_km(ring) / target_vertex_count

    resampled = [point_along(ring, i * step) for i in range(target_vertex_count)]
    resampled.append(ring[-1])
    return resampled


def target_vertex_count(
    distance_km: float,
    km_per_point: Optional[float] = None,
    minimum: Optional[int] = None,
) -> int:
    """
    Adaptive resampling density for a target route length.

    Short loops keep a minimum vertex count for shape fidelity; longer ones
    get roughly one point per `km_per_point` kilometers.
    """
    if km_per_point is None:
        km_per_point = get_yaml_setting("sampling", "km_per_point", default=2.0)
    if minimum is None:
        minimum = get_yaml_setting("sampling", "min_vertices", default=12)

    # Half-up rounding, not banker's rounding
    by_density = int(math.floor(distance_km / km_per_point + 0.5))
    return max(minimum, by_density)

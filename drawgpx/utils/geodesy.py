"""
Great-circle primitives on a spherical Earth.

Lengths are in kilometers; points are GeoPoint values.
"""

import math
from typing import Sequence

from ..models.geo import GeoPoint

# Mean Earth radius, kilometers
EARTH_RADIUS_KM = 6371.0088


def haversine_km(a: GeoPoint, b: GeoPoint) -> float:
    """Great-circle distance between two points in kilometers."""
    phi1, phi2 = math.radians(a.lat), math.radians(b.lat)
    dphi = math.radians(b.lat - a.lat)
    dlambda = math.radians(b.lon - a.lon)
    h = (
        math.sin(dphi / 2) ** 2
        + math.cos(phi1) * math.cos(phi2) * math.sin(dlambda / 2) ** 2
    )
    return 2 * EARTH_RADIUS_KM * math.asin(min(1.0, math.sqrt(h)))


def line_length_km(points: Sequence[GeoPoint]) -> float:
    """Sum of segment lengths along an open polyline."""
    return sum(haversine_km(a, b) for a, b in zip(points, points[1:]))


def close_ring(points: Sequence[GeoPoint]) -> list[GeoPoint]:
    """Return the points with the first one appended, unless already closed."""
    ring = list(points)
    if ring and ring[0] != ring[-1]:
        ring.append(ring[0])
    return ring


def interpolate(a: GeoPoint, b: GeoPoint, fraction: float) -> GeoPoint:
    """
    Point at `fraction` of the way from a to b along the great circle.

    Args:
        a: Segment start
        b: Segment end
        fraction: 0.0 returns a, 1.0 returns b

    Returns:
        Intermediate point
    """
    if fraction <= 0.0:
        return a
    if fraction >= 1.0:
        return b

    delta = haversine_km(a, b) / EARTH_RADIUS_KM
    if delta == 0.0:
        return a

    phi1, lam1 = math.radians(a.lat), math.radians(a.lon)
    phi2, lam2 = math.radians(b.lat), math.radians(b.lon)

    wa = math.sin((1 - fraction) * delta) / math.sin(delta)
    wb = math.sin(fraction * delta) / math.sin(delta)

    x = wa * math.cos(phi1) * math.cos(lam1) + wb * math.cos(phi2) * math.cos(lam2)
    y = wa * math.cos(phi1) * math.sin(lam1) + wb * math.cos(phi2) * math.sin(lam2)
    z = wa * math.sin(phi1) + wb * math.sin(phi2)

    lat = math.degrees(math.atan2(z, math.hypot(x, y)))
    lon = math.degrees(math.atan2(y, x))
    return GeoPoint(lat=lat, lon=lon)


def point_along(points: Sequence[GeoPoint], distance_km: float) -> GeoPoint:
    """
    Point located `distance_km` along a polyline from its first vertex.

    Offsets past the end clamp to the last vertex; negative offsets clamp
    to the first.
    """
    if distance_km <= 0.0:
        return points[0]

    travelled = 0.0
    for a, b in zip(points, points[1:]):
        segment = haversine_km(a, b)
        if segment > 0.0 and travelled + segment >= distance_km:
            return interpolate(a, b, (distance_km - travelled) / segment)
        travelled += segment

    return points[-1]

"""Routing service capability used by the route matcher."""

from typing import Protocol, Sequence, runtime_checkable

from ..models.geo import GeoPoint, TravelProfile


class RoutingServiceError(Exception):
    """Raised when a routing request fails at the transport level."""
    pass


@runtime_checkable
class RoutingService(Protocol):
    """
    Anything that can road-snap an ordered window of points.

    Implementations return the snapped geometry in travel order, or an empty
    list when the engine answers but has no usable route. Transport failures
    raise RoutingServiceError.
    """

    async def snap_window(
        self, points: Sequence[GeoPoint], profile: TravelProfile
    ) -> list[GeoPoint]:
        ...

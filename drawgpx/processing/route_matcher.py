"""
Chunked road-matching of a resampled trace.

The routing engine accepts a limited number of coordinates per request, so
the trace is cut into overlapping windows that are snapped one after another
and stitched back into a single path.
"""

import logging
from typing import Optional, Sequence

from ..clients.base import RoutingService, RoutingServiceError
from ..config import get_yaml_setting
from ..models.geo import GeoPoint, Path, TravelProfile

logger = logging.getLogger(__name__)

# Coordinates per request; the public OSRM server is safe at ~25
CHUNK_SIZE = 20


def chunk_windows(path: Sequence[GeoPoint], chunk_size: int = CHUNK_SIZE) -> list[list[GeoPoint]]:
    """
    Split a path into windows of at most `chunk_size` points.

    Consecutive windows share exactly one point: the last point of one
    window is the first point of the next.
    """
    if chunk_size < 2:
        raise ValueError(f"chunk_size must be >= 2, got {chunk_size}")

    windows = []
    for start in range(0, len(path) - 1, chunk_size - 1):
        window = list(path[start : start + chunk_size])
        if len(window) < 2:
            break
        windows.append(window)
    return windows


class RouteMatcher:
    """
    Snap an ordered trace onto the road network, window by window.

    Windows are dispatched sequentially. A window the engine cannot match
    contributes its raw points instead (a straight-line gap), so a partial
    outage still yields a continuous path.
    """

    def __init__(self, service: RoutingService, chunk_size: Optional[int] = None):
        self.service = service
        if chunk_size is None:
            chunk_size = get_yaml_setting("routing", "chunk_size", default=CHUNK_SIZE)
        if chunk_size < 2:
            raise ValueError(f"chunk_size must be >= 2, got {chunk_size}")
        self.chunk_size = chunk_size

    async def _snap_or_empty(
        self, window: list[GeoPoint], profile: TravelProfile
    ) -> list[GeoPoint]:
        try:
            return await self.service.snap_window(window, profile)
        except RoutingServiceError as e:
            logger.warning(f"Routing request failed: {e}")
            return []

    async def match(self, path: Sequence[GeoPoint], profile: TravelProfile) -> Path:
        """
        Road-snap a path.

        Args:
            path: Ordered trace, typically a resampled shape
            profile: Travel profile passed to the routing engine

        Returns:
            Stitched road-following path, or [] for traces shorter than two
            points or when the matching run fails as a whole
        """
        if len(path) < 2:
            return []

        try:
            windows = chunk_windows(path, self.chunk_size)
            logger.info(f"Matching {len(path)} points in {len(windows)} window(s) ({profile})")

            route: Path = []
            fallbacks = 0
            for index, window in enumerate(windows):
                snapped = await self._snap_or_empty(window, profile)

                if not snapped:
                    # Raw points keep the path continuous; the first one is not trimmed
                    logger.warning(
                        f"Window {index + 1}/{len(windows)} not matched, "
                        "drawing straight line for this segment"
                    )
                    fallbacks += 1
                    route.extend(window)
                    continue

                # Matched windows start on the previous window's last point
                if route:
                    route.extend(snapped[1:])
                else:
                    route.extend(snapped)

            if fallbacks:
                logger.warning(f"{fallbacks}/{len(windows)} window(s) fell back to straight lines")
            return route

        except Exception:
            logger.exception("Failed to match route windows")
            return []

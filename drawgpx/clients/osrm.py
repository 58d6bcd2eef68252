"""
OSRM (Open Source Routing Machine) client for road-snapping point windows.
100% free, no API key required.
"""

import logging
from typing import Optional, Sequence

import httpx

from .base import RoutingServiceError
from ..models.geo import GeoPoint, TravelProfile

logger = logging.getLogger(__name__)


class OSRMRouteClient:
    """
    Road-snap ordered point windows with the OSRM /route service.

    FREE: 100% free, no API key required.
    Uses the public demo server unless another base URL is given.
    """

    def __init__(
        self,
        base_url: str = "https://router.project-osrm.org",
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self._client = httpx.AsyncClient(timeout=timeout, transport=transport)

    async def close(self):
        """Close the HTTP client."""
        await self._client.aclose()

    async def test_connection(self) -> bool:
        """Test API connectivity."""
        try:
            result = await self.snap_window(
                [
                    GeoPoint(lat=48.8566, lon=2.3522),  # Paris
                    GeoPoint(lat=48.8606, lon=2.3376),
                ],
                TravelProfile.FOOT,
            )
            return len(result) > 0
        except RoutingServiceError:
            return False

    @staticmethod
    def format_coordinates(points: Sequence[GeoPoint]) -> str:
        """Convert points to OSRM format 'lon,lat;lon,lat;...' - NOTE: lon first!"""
        return ";".join("{},{}".format(*p.to_lon_lat()) for p in points)

    def build_url(self, points: Sequence[GeoPoint], profile: TravelProfile) -> str:
        profile_name = TravelProfile(profile).value
        return f"{self.base_url}/route/v1/{profile_name}/{self.format_coordinates(points)}"

    async def snap_window(
        self, points: Sequence[GeoPoint], profile: TravelProfile
    ) -> list[GeoPoint]:
        """
        Get the road-following geometry through the points, in order.

        Args:
            points: Ordered window of points (at least 2)
            profile: Travel profile for the routing engine

        Returns:
            Snapped points from the first route, or [] if OSRM reports no route

        Raises:
            RoutingServiceError: On transport failures (timeouts, refused connections)
        """
        url = self.build_url(points, profile)
        params = {
            "overview": "full",
            "geometries": "geojson",
        }

        try:
            response = await self._client.get(url, params=params)
        except httpx.HTTPError as e:
            raise RoutingServiceError(f"OSRM request failed: {e}") from e

        try:
            data = response.json()
        except ValueError:
            logger.warning(f"OSRM returned a non-JSON body (HTTP {response.status_code})")
            return []

        if not isinstance(data, dict) or data.get("code") != "Ok" or not data.get("routes"):
            error = data.get("code", "Unknown") if isinstance(data, dict) else "Unknown"
            logger.warning(f"OSRM returned no route: {error}")
            return []

        try:
            coordinates = data["routes"][0]["geometry"]["coordinates"]
            return [GeoPoint.from_lon_lat(c) for c in coordinates]
        except (KeyError, IndexError, TypeError, AttributeError, ValueError) as e:
            # pydantic ValidationError is a ValueError (out-of-range coordinates)
            logger.warning(f"OSRM returned malformed route geometry: {e!r}")
            return []

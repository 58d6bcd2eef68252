"""
Shape-to-route pipeline.

Integrates:
- Shape scaling to the target perimeter
- Arc-length resampling with an adaptive vertex count
- Chunked OSRM road-matching
"""

import logging
from dataclasses import dataclass, field
from typing import Optional, Sequence

from ..clients.base import RoutingService
from ..models.geo import GeoPoint, Path, Shape, TravelProfile
from ..utils.geodesy import line_length_km
from .geometry import resample_shape, scale_shape, shape_perimeter_km, target_vertex_count
from .route_matcher import RouteMatcher

logger = logging.getLogger(__name__)


@dataclass
class RouteResult:
    """Output of one route-generation run."""
    profile: TravelProfile
    target_distance_km: float
    vertex_count: int
    scaled_shape: Shape = field(default_factory=list)
    resampled: Path = field(default_factory=list)
    route: Path = field(default_factory=list)

    @property
    def shape_perimeter_km(self) -> float:
        return shape_perimeter_km(self.scaled_shape)

    @property
    def route_distance_km(self) -> float:
        return line_length_km(self.route)

    @property
    def is_empty(self) -> bool:
        return not self.route


class ShapeRoutePipeline:
    """
    Turn a drawn shape into a road-following route of a target length.
    """

    def __init__(
        self,
        service: RoutingService,
        chunk_size: Optional[int] = None,
        km_per_point: Optional[float] = None,
        min_vertices: Optional[int] = None,
    ):
        self.service = service
        self.matcher = RouteMatcher(service, chunk_size=chunk_size)
        self.km_per_point = km_per_point
        self.min_vertices = min_vertices

    async def close(self):
        """Close the routing client, if it holds one."""
        close = getattr(self.service, "close", None)
        if close is not None:
            await close()

    async def test_connection(self) -> bool:
        """Test routing engine connectivity."""
        test = getattr(self.service, "test_connection", None)
        if test is None:
            return True
        return await test()

    async def generate_route(
        self,
        shape: Sequence[GeoPoint],
        distance_km: float,
        profile: TravelProfile = TravelProfile.FOOT,
    ) -> RouteResult:
        """
        Scale, resample and road-match a drawn shape.

        Args:
            shape: Drawn polygon vertices (at least 3)
            distance_km: Target route length in kilometers
            profile: Travel profile for the routing engine

        Returns:
            RouteResult; its route is empty if matching failed as a whole
        """
        if len(shape) < 3:
            raise ValueError("Please draw at least 3 points to make a shape.")
        if distance_km <= 0:
            raise ValueError(f"distance_km must be positive, got {distance_km}")

        shape = list(shape)
        logger.info(
            f"Generating {distance_km:g} km {TravelProfile(profile).value} route "
            f"from {len(shape)}-point shape ({shape_perimeter_km(shape):.2f} km drawn)"
        )

        # Step 1: Scale to target perimeter
        scaled = scale_shape(shape, distance_km)

        # Step 2: Resample densely enough to trace the lines
        vertex_count = target_vertex_count(
            distance_km, km_per_point=self.km_per_point, minimum=self.min_vertices
        )
        resampled = resample_shape(scaled, vertex_count)
        logger.info(f"Resampled scaled shape to {len(resampled)} points")

        # Step 3: Match against the road network
        route = await self.matcher.match(resampled, profile)

        result = RouteResult(
            profile=TravelProfile(profile),
            target_distance_km=distance_km,
            vertex_count=vertex_count,
            scaled_shape=scaled,
            resampled=resampled,
            route=route,
        )

        if result.is_empty:
            logger.error("No route generated")
        else:
            logger.info(
                f"Route generation complete: {len(route)} points, "
                f"{result.route_distance_km:.2f} km"
            )
        return result

"""API clients for external services."""

from .base import RoutingService, RoutingServiceError
from .osrm import OSRMRouteClient

__all__ = [
    "RoutingService",
    "RoutingServiceError",
    "OSRMRouteClient",
]

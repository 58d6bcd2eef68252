"""
Recently generated routes, kept in memory so they can be exported later.
Nothing survives a restart.
"""

from collections import OrderedDict
from datetime import datetime
from typing import Iterator, Optional

from ..config import get_yaml_setting
from ..models.routing import GeneratedRoute


class RouteStore:
    """
    Bounded, insertion-ordered map of request id -> GeneratedRoute.

    Once `max_entries` is exceeded the least recently added route is evicted.
    """

    def __init__(self, max_entries: int = 100):
        self.max_entries = max_entries
        self._routes: OrderedDict[str, GeneratedRoute] = OrderedDict()

    def add_entry(self, entry: GeneratedRoute) -> None:
        """Store a route; re-adding an id replaces it and marks it newest."""
        self._routes.pop(entry.request_id, None)
        self._routes[entry.request_id] = entry
        if len(self._routes) > self.max_entries:
            del self._routes[next(iter(self._routes))]

    def get_entry(self, request_id: str) -> Optional[GeneratedRoute]:
        return self._routes.get(request_id)

    def latest(self) -> Optional[GeneratedRoute]:
        """Most recently generated route, or None when the store is empty."""
        if not self._routes:
            return None
        return next(reversed(self._routes.values()))

    def _newest_first(self, since: Optional[datetime]) -> Iterator[GeneratedRoute]:
        for entry in reversed(self._routes.values()):
            if since is None or entry.timestamp >= since:
                yield entry

    def list_entries(
        self,
        limit: int = 50,
        offset: int = 0,
        since: Optional[datetime] = None,
    ) -> list[GeneratedRoute]:
        """
        Page through stored routes, newest first.

        Args:
            limit: Page size
            offset: Routes to skip
            since: Only routes generated at or after this time
        """
        return list(self._newest_first(since))[offset : offset + limit]

    def count(self, since: Optional[datetime] = None) -> int:
        return sum(1 for _ in self._newest_first(since))

    def clear(self) -> None:
        self._routes.clear()


_route_store: Optional[RouteStore] = None


def get_route_store() -> RouteStore:
    """Process-wide route store, sized by storage.max_routes."""
    global _route_store
    if _route_store is None:
        _route_store = RouteStore(
            max_entries=get_yaml_setting("storage", "max_routes", default=100)
        )
    return _route_store

"""BestRoutes - Accumulator holding the best ski runs seen so far.

Routes are ranked by length first, then by steepness. All routes tied on
both are kept. Starts empty; offer() is the only way to change it.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Iterator, Optional

from skirun_finder.constants import RouteConfig
from skirun_finder.model.route import Route

logger = logging.getLogger(__name__)


class BestRoutes:
    """Best-set of routes under the length-then-steepness ordering.

    Invariant: every kept route has the maximal length offered so far and,
    unless collect_all_longest is set, the maximal steepness among routes of
    that length.

    Example:
        best = BestRoutes()
        best.offer(route)
        best.length, best.steepness, len(best)
    """

    def __init__(self, collect_all_longest: bool = RouteConfig.COLLECT_ALL_LONGEST_ROUTES) -> None:
        """Initialize an empty best-set.

        Args:
            collect_all_longest: Keep every longest route regardless of steepness
        """
        self.collect_all_longest = collect_all_longest
        self._routes: list[Route] = []
        self._length = 0
        self._steepness: Optional[int] = None
        self.offered = 0

    @property
    def routes(self) -> list[Route]:
        """Kept routes in the order they were accepted."""
        return list(self._routes)

    @property
    def length(self) -> int:
        """Shared length of the kept routes (0 when empty)."""
        return self._length

    @property
    def steepness(self) -> Optional[int]:
        """Best steepness among the kept routes, None when empty."""
        return self._steepness

    @property
    def is_empty(self) -> bool:
        return not self._routes

    def rank(self) -> Optional[tuple[int, int]]:
        """(length, steepness) of the set, None when empty."""
        if self.is_empty:
            return None
        return (self._length, self._steepness)

    def offer(self, route: Route) -> bool:
        """Fold one candidate route into the set.

        Args:
            route: Candidate route

        Returns:
            True if the route was kept.
        """
        self.offered += 1

        if self.is_empty or route.length > self._length:
            self._reset(route)
            return True

        if route.length < self._length:
            return False

        # Same length
        if self.collect_all_longest:
            self._routes.append(route)
            self._steepness = max(self._steepness, route.steepness)
            return True

        if route.steepness < self._steepness:
            return False
        if route.steepness > self._steepness:
            self._reset(route)
            return True

        self._routes.append(route)
        return True

    def offer_all(self, routes: Iterable[Route]) -> int:
        """Fold many routes. Returns how many were kept at the time of offering."""
        return sum(1 for route in routes if self.offer(route))

    def _reset(self, route: Route) -> None:
        logger.debug(f"New best rank ({route.length}, {route.steepness}) from {route.start!r}")
        self._routes = [route]
        self._length = route.length
        self._steepness = route.steepness

    def check_invariant(self) -> None:
        """Assert that all kept routes share length (and steepness unless collecting all)."""
        assert all(r.length == self._length for r in self._routes), "best-set routes differ in length"
        if not self.collect_all_longest:
            assert all(r.steepness == self._steepness for r in self._routes), "best-set routes differ in steepness"

    def signature(self) -> set[tuple[tuple[int, ...], int]]:
        """Order-independent summary: {(elevations in stored order, steepness)}."""
        return {(tuple(route.elevations), route.steepness) for route in self._routes}

    def __iter__(self) -> Iterator[Route]:
        return iter(self._routes)

    def __len__(self) -> int:
        return len(self._routes)

    def to_dict(self) -> dict[str, Any]:
        """Serialize best-set to dictionary."""
        return {
            "count": len(self._routes),
            "length": self._length,
            "steepness": self._steepness,
            "routes": [route.to_dict() for route in self._routes],
        }

    def __repr__(self) -> str:
        return f"BestRoutes(count={len(self)}, length={self._length}, steepness={self._steepness})"

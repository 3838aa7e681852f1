"""Waypoint routes and their precomputed shortest-path segments."""

from __future__ import annotations

from typing import Iterable, List, Optional, Sequence

from .providers import GridCell, PathfindingProvider


class WaypointPath:
    """Ordered waypoints plus one shortest-path segment per consecutive pair.

    Segments are recomputed eagerly whenever the waypoint list changes, so
    ``segments`` is always consistent with ``get_path()``. A path with fewer
    than two waypoints has no segments.
    """

    def __init__(
        self,
        waypoints: Optional[Iterable[GridCell]] = None,
        *,
        provider: PathfindingProvider,
    ):
        """Initialize the path and compute its segments.

        Args:
            waypoints: Cells to visit in order. Defaults to an empty route.
            provider: Engine used for shortest-path queries.
        """
        self._provider = provider
        self._waypoints: List[GridCell] = []
        self._segments: List[List[GridCell]] = []
        self.set_path(waypoints if waypoints is not None else [])

    @property
    def provider(self) -> PathfindingProvider:
        return self._provider

    @property
    def segments(self) -> List[List[GridCell]]:
        """Segment i connects waypoint i to waypoint i + 1."""
        return self._segments

    def set_path(self, waypoints: Iterable[GridCell]) -> None:
        """Replace the waypoints and recompute every segment.

        Follow tasks already running keep the segments they snapshotted at
        start; only follow calls made after this returns see the new route.
        """
        self._waypoints = list(waypoints)
        self._segments = self._calculate_segments(self._waypoints)

    def get_path(self) -> List[GridCell]:
        """Return the current waypoints. Callers must not mutate the list."""
        return self._waypoints

    def _calculate_segments(self, waypoints: Sequence[GridCell]) -> List[List[GridCell]]:
        segments: List[List[GridCell]] = []
        # zip pairs each waypoint with its successor, in order
        for start, goal in zip(waypoints, waypoints[1:]):
            cells = self._provider.find_shortest_path(start, goal)
            # unreachable goals come back empty (or None); stored as-is
            segments.append(list(cells) if cells is not None else [])
        return segments

    def __len__(self) -> int:
        return len(self._waypoints)

    def __repr__(self) -> str:
        return (
            f"WaypointPath(waypoints={len(self._waypoints)}, "
            f"segments={len(self._segments)})"
        )


def create_path(
    waypoints: Iterable[GridCell], provider: PathfindingProvider
) -> WaypointPath:
    """Create a WaypointPath visiting ``waypoints`` in order."""
    return WaypointPath(waypoints, provider=provider)

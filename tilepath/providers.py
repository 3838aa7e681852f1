"""
Engine-facing interfaces for pathfinding, movement, and coordinate resolution.

Tilepath never searches grids or animates sprites itself. The host engine
supplies both through two small strategy interfaces:

1. PathfindingProvider - shortest-path queries plus move/stop/is-moving commands
2. CoordinateResolver - map an agent's continuous position to a grid cell

Grid cells are opaque. Whatever the provider returns from
``find_shortest_path`` is stored and handed back to ``move_along`` untouched,
so engines are free to use tuples, ``TileLocation`` models, or their own
location objects.

Usage pattern:
    class MyEngine(PathfindingProvider):
        def find_shortest_path(self, start, goal):
            return self.tilemap.a_star(start, goal)
        ...

    follower = PathFollower(MyEngine(), PixelCoordinateResolver())
"""

import asyncio
from abc import ABC, abstractmethod
from typing import Any, Hashable, Optional, Sequence

from .config import Config
from .schemas import TileLocation

# Opaque grid coordinate supplied by the engine.
GridCell = Hashable


class PathfindingProvider(ABC):
    """Abstract base class for the engine's grid pathfinding and movement system.

    Method categories:
    1. Queries: find_shortest_path(), is_moving()
    2. Commands: move_along(), stop_moving()
    3. Awaiting: wait_until_idle()

    Movement is asynchronous from the follower's point of view: move_along()
    starts movement and returns immediately, the engine animates the agent on
    its own schedule, and wait_until_idle() resolves once the agent stops.

    The default wait_until_idle() polls is_moving() once per event loop turn
    (or every Config.IDLE_POLL_INTERVAL seconds). Engines that know when
    movement ends should override it with a future resolved by their movement
    system instead.
    """

    @abstractmethod
    def find_shortest_path(
        self, start: GridCell, goal: GridCell
    ) -> Optional[Sequence[GridCell]]:
        """
        Return the shortest cell sequence from start to goal.

        Degenerate results are allowed and stored verbatim: a single cell
        when start == goal, an empty sequence (or None) when goal is
        unreachable.

        Args:
            start: Cell to start from
            goal: Cell to reach

        Returns:
            Cells from start to goal inclusive, empty sequence, or None
        """
        pass

    @abstractmethod
    def move_along(self, agent: Any, cells: Sequence[GridCell], speed: float) -> None:
        """
        Start moving agent along cells at the given speed.

        Replaces any movement already in progress for this agent. An empty
        sequence must behave as an instantaneous no-op: the agent is idle
        right after the call.

        Args:
            agent: Engine sprite to move
            cells: Cells to walk through, in order
            speed: Engine-defined speed units (pixels/second in tile engines)
        """
        pass

    @abstractmethod
    def stop_moving(self, agent: Any) -> None:
        """
        Cancel the agent's current movement, if any.

        Engines may let the agent settle onto its current tile first; the
        follower only requires that is_moving() eventually reports False.
        """
        pass

    @abstractmethod
    def is_moving(self, agent: Any) -> bool:
        """Return True while the agent is still moving along a path."""
        pass

    async def wait_until_idle(self, agent: Any) -> None:
        """
        Suspend until the agent is no longer moving.

        Yields to the event loop between checks, so other follow tasks keep
        running. There is no timeout: an agent that never stops keeps this
        coroutine waiting.
        """
        while self.is_moving(agent):
            await asyncio.sleep(Config.IDLE_POLL_INTERVAL)


class CoordinateResolver(ABC):
    """Abstract base class mapping an agent's live position to a grid cell.

    Used for the approach leg: the agent's real position rarely coincides with
    a waypoint, so the follower asks the resolver where the agent stands now.
    """

    @abstractmethod
    def resolve_cell(self, agent: Any) -> GridCell:
        """Return the cell currently containing the agent."""
        pass


def screen_coordinate_to_tile(value: float, tile_scale: Optional[int] = None) -> int:
    """Convert one pixel coordinate (x or y) to a tile index.

    Tiles are 2**tile_scale pixels wide, so the conversion is a right shift of
    the integer part of the coordinate. Without a tile scale from the host
    tilemap, Config.DEFAULT_TILE_SCALE (16px tiles) is used.
    """
    scale = Config.DEFAULT_TILE_SCALE if tile_scale is None else tile_scale
    return int(value) >> scale


class PixelCoordinateResolver(CoordinateResolver):
    """Resolve agents exposing ``x``/``y`` pixel attributes to TileLocation cells."""

    def __init__(self, tile_scale: Optional[int] = None):
        """
        Args:
            tile_scale: Bit shift of the host tilemap (4 = 16px tiles).
                Defaults to Config.DEFAULT_TILE_SCALE.
        """
        if tile_scale is not None and tile_scale < 0:
            raise ValueError(f"tile_scale must be >= 0 (got {tile_scale})")
        self.tile_scale = tile_scale

    def resolve_cell(self, agent: Any) -> TileLocation:
        return TileLocation(
            col=screen_coordinate_to_tile(agent.x, self.tile_scale),
            row=screen_coordinate_to_tile(agent.y, self.tile_scale),
        )

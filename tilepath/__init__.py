"""
Tilepath - waypoint routes for sprites on grid-based maps.

Split a list of waypoints into shortest-path segments and walk an agent
through them, with cooperative stop requests and a completion handler.

No global state: pathfinding, movement, and coordinate resolution are
injected by the host engine.
"""

__version__ = "0.1.0"

from .config import Config
from .providers import (
    GridCell,
    PathfindingProvider,
    CoordinateResolver,
    PixelCoordinateResolver,
    screen_coordinate_to_tile,
)
from .path import WaypointPath, create_path
from .registry import FollowRegistry, FinishHandler
from .follower import PathFollower
from .schemas import TileLocation, FollowOutcome, FollowStatus

__all__ = [
    # Main classes
    "PathFollower",
    "WaypointPath",
    "FollowRegistry",
    "create_path",
    # Engine interfaces
    "GridCell",
    "PathfindingProvider",
    "CoordinateResolver",
    "PixelCoordinateResolver",
    "screen_coordinate_to_tile",
    # Schemas
    "TileLocation",
    "FollowOutcome",
    "FollowStatus",
    # Types / config
    "FinishHandler",
    "Config",
]

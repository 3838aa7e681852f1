"""
Pydantic schemas for tilepath.

Design Philosophy:
- Grid cells are opaque to the follower; ``TileLocation`` is only the cell type
  produced by the bundled pixel resolver. Hosts may use any hashable value.
- Follow results are plain data so callers can log, persist, or assert on them.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class TileLocation(BaseModel):
    """A (column, row) tile coordinate on a tilemap.

    Frozen so instances are hashable and can be used as waypoints, set members,
    or dict keys by host pathfinders.
    """

    model_config = ConfigDict(frozen=True)

    col: int = Field(..., description="Tile column (x >> tile_scale)")
    row: int = Field(..., description="Tile row (y >> tile_scale)")

    def __str__(self) -> str:
        return f"({self.col}, {self.row})"


class FollowStatus(str, Enum):
    """How a follow task ended."""

    COMPLETED = "completed"
    INTERRUPTED = "interrupted"


class FollowOutcome(BaseModel):
    """Result of one ``PathFollower.follow`` call.

    ``legs_completed`` counts every leg whose movement finished, including the
    approach leg. An interrupted run counts the leg during which the stop was
    requested, since that leg is allowed to finish.
    """

    status: FollowStatus = Field(..., description="completed or interrupted")
    legs_completed: int = Field(0, ge=0, description="Legs walked, approach leg included")
    segments_total: int = Field(0, ge=0, description="Stored segments in the route snapshot")
    speed: float = Field(..., gt=0, description="Speed passed to the engine for every leg")

    @property
    def completed(self) -> bool:
        return self.status is FollowStatus.COMPLETED

    @property
    def interrupted(self) -> bool:
        return self.status is FollowStatus.INTERRUPTED

"""
Example: Patrol - Two Sprites Walking Waypoint Routes
=====================================================

WHAT THIS SHOWS:
- Building WaypointPath routes from tile locations
- A (toy) engine implementing PathfindingProvider
- Following routes concurrently with PathFollower.start()
- Stopping one sprite mid-route with request_stop()
- A single on_finish handler for natural completions

The engine here is deliberately tiny: an obstacle-free tilemap where routes
walk along the column first and then along the row. Real games plug in their
own tilemap pathfinder and sprite movement instead.

RUN:
    uv run python -m examples.patrol.run
    TILEPATH_VERBOSE=1 uv run python -m examples.patrol.run
"""

import asyncio
from collections import deque
from dataclasses import dataclass
from typing import Deque, Dict, Tuple

from tilepath import (
    PathFollower,
    PathfindingProvider,
    PixelCoordinateResolver,
    TileLocation,
    WaypointPath,
)

TILE_SCALE = 4           # 16px tiles
TILE_SIZE = 1 << TILE_SCALE
FRAME_SECONDS = 1 / 60


@dataclass(eq=False)
class Sprite:
    """Engine sprite: a name and a pixel position."""

    name: str
    x: float
    y: float


def tile_center(cell: TileLocation) -> Tuple[float, float]:
    return (cell.col * TILE_SIZE + TILE_SIZE / 2, cell.row * TILE_SIZE + TILE_SIZE / 2)


class ToyTilemapEngine(PathfindingProvider):
    """Obstacle-free tilemap with frame-stepped sprite movement."""

    def __init__(self):
        # id(sprite) -> (sprite, remaining cells, speed in px/s)
        self._routes: Dict[int, Tuple[Sprite, Deque[TileLocation], float]] = {}
        self._idle: Dict[int, asyncio.Event] = {}

    def _idle_event(self, agent: Sprite) -> asyncio.Event:
        return self._idle.setdefault(id(agent), asyncio.Event())

    # PathfindingProvider ---------------------------------------------------

    def find_shortest_path(self, start, goal):
        cells = [start]
        col, row = start.col, start.row
        while col != goal.col:
            col += 1 if goal.col > col else -1
            cells.append(TileLocation(col=col, row=row))
        while row != goal.row:
            row += 1 if goal.row > row else -1
            cells.append(TileLocation(col=col, row=row))
        return cells

    def move_along(self, agent, cells, speed):
        idle = self._idle_event(agent)
        if not cells:
            self._routes.pop(id(agent), None)
            idle.set()
            return
        self._routes[id(agent)] = (agent, deque(cells), speed)
        idle.clear()

    def stop_moving(self, agent):
        self._routes.pop(id(agent), None)
        self._idle_event(agent).set()

    def is_moving(self, agent):
        return id(agent) in self._routes

    async def wait_until_idle(self, agent):
        await self._idle_event(agent).wait()

    # Frame loop -------------------------------------------------------------

    def update(self, dt: float) -> None:
        """Advance every moving sprite by one frame."""
        for key, (sprite, cells, speed) in list(self._routes.items()):
            budget = speed * dt
            while cells and budget > 0:
                tx, ty = tile_center(cells[0])
                dx, dy = tx - sprite.x, ty - sprite.y
                distance = (dx * dx + dy * dy) ** 0.5
                if distance <= budget:
                    sprite.x, sprite.y = tx, ty
                    budget -= distance
                    cells.popleft()
                else:
                    sprite.x += dx / distance * budget
                    sprite.y += dy / distance * budget
                    budget = 0
            if not cells:
                del self._routes[key]
                self._idle[key].set()

    async def run(self, until: "asyncio.Future") -> None:
        while not until.done():
            self.update(FRAME_SECONDS)
            await asyncio.sleep(FRAME_SECONDS)


def tile(col: int, row: int) -> TileLocation:
    return TileLocation(col=col, row=row)


async def main():
    print("=" * 60)
    print("EXAMPLE: PATROL")
    print("=" * 60)
    print()

    engine = ToyTilemapEngine()
    follower = PathFollower(engine, PixelCoordinateResolver(tile_scale=TILE_SCALE))

    @follower.on_finish
    def announce(sprite: Sprite) -> None:
        cell = follower.resolver.resolve_cell(sprite)
        print(f"  {sprite.name} finished its route at tile {cell}")

    hero = Sprite("hero", x=8, y=8)
    guard = Sprite("guard", x=150, y=150)

    hero_route = WaypointPath([tile(2, 2), tile(6, 2), tile(6, 6), tile(2, 6)], provider=engine)
    guard_route = WaypointPath([tile(9, 9), tile(1, 9), tile(1, 1)], provider=engine)
    print(f"Hero route:  {hero_route}")
    print(f"Guard route: {guard_route}\n")

    hero_task = follower.start(hero, hero_route, speed=160)
    guard_task = follower.start(guard, guard_route, speed=120)
    both = asyncio.gather(hero_task, guard_task)
    frame_loop = asyncio.create_task(engine.run(both))

    # The guard gets called off after a second; it halts at its next leg boundary.
    await asyncio.sleep(1.0)
    if follower.request_stop(guard):
        print("  guard: stop requested")

    hero_outcome, guard_outcome = await both
    await frame_loop

    print()
    print(f"hero:  {hero_outcome.status.value} after {hero_outcome.legs_completed} legs")
    print(f"guard: {guard_outcome.status.value} after {guard_outcome.legs_completed} legs")
    print(f"Still following: {[sprite.name for sprite in follower.registry.following()]}")


if __name__ == "__main__":
    asyncio.run(main())

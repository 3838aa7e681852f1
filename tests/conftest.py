"""Shared fakes for tilepath tests.

The fake engine answers shortest-path queries from a lookup table and records
every movement command. Movement either finishes instantly (auto_finish) or
waits for the test to call ``finish(agent)``, which lets tests pause a follow
task mid-leg.
"""

import asyncio

import pytest

from tilepath import CoordinateResolver, PathFollower, PathfindingProvider


class Sprite:
    """Minimal engine sprite. Defines __eq__ so it is unhashable, like many engine objects."""

    def __init__(self, name, cell=None, x=0.0, y=0.0):
        self.name = name
        self.cell = cell
        self.x = x
        self.y = y

    def __eq__(self, other):
        return isinstance(other, Sprite) and other.name == self.name

    def __repr__(self):
        return f"Sprite({self.name!r})"


class FakeEngine(PathfindingProvider):
    """Lookup-table pathfinder with scriptable movement."""

    def __init__(self, paths=None, *, auto_finish=True, halt_on_stop=True):
        self.paths = dict(paths or {})
        self.auto_finish = auto_finish
        self.halt_on_stop = halt_on_stop
        self.queries = []
        self.moves = []
        self.stops = []
        self._moving = {}

    def find_shortest_path(self, start, goal):
        self.queries.append((start, goal))
        if (start, goal) in self.paths:
            return self.paths[(start, goal)]
        if start == goal:
            return [start]
        return [start, goal]

    def move_along(self, agent, cells, speed):
        self.moves.append((agent.name, list(cells), speed))
        self._moving[id(agent)] = bool(cells) and not self.auto_finish

    def stop_moving(self, agent):
        self.stops.append(agent.name)
        if self.halt_on_stop:
            self._moving[id(agent)] = False

    def is_moving(self, agent):
        return self._moving.get(id(agent), False)

    def finish(self, agent):
        self._moving[id(agent)] = False

    def cells_moved(self):
        return [cells for _, cells, _ in self.moves]


class CellResolver(CoordinateResolver):
    """Reads the cell straight off the sprite."""

    def resolve_cell(self, agent):
        return agent.cell


async def _settle(turns=10):
    """Let background follow tasks run until they block on movement."""
    for _ in range(turns):
        await asyncio.sleep(0)


@pytest.fixture
def settle():
    return _settle


ABC_PATHS = {
    ("A", "B"): ["A", "x", "B"],
    ("B", "C"): ["B", "y", "C"],
    ("S", "A"): ["S", "A"],
}


@pytest.fixture
def make_sprite():
    def _make(name="hero", cell="S", x=0.0, y=0.0):
        return Sprite(name, cell=cell, x=x, y=y)

    return _make


@pytest.fixture
def engine():
    return FakeEngine(ABC_PATHS)


@pytest.fixture
def manual_engine():
    return FakeEngine(ABC_PATHS, auto_finish=False)


@pytest.fixture
def follower(engine):
    return PathFollower(engine, CellResolver())


@pytest.fixture
def manual_follower(manual_engine):
    return PathFollower(manual_engine, CellResolver())


@pytest.fixture
def resolver():
    return CellResolver()


@pytest.fixture
def make_engine():
    def _make(paths=None, **kwargs):
        return FakeEngine(ABC_PATHS if paths is None else paths, **kwargs)

    return _make

"""Tests for the engine interfaces and the pixel coordinate glue."""

import asyncio

import pytest

from tilepath import (
    Config,
    PathfindingProvider,
    PixelCoordinateResolver,
    TileLocation,
    screen_coordinate_to_tile,
)


class CountdownEngine(PathfindingProvider):
    """Reports moving for a fixed number of polls."""

    def __init__(self, polls):
        self.remaining = polls
        self.polls = 0

    def find_shortest_path(self, start, goal):
        return [start, goal]

    def move_along(self, agent, cells, speed):
        pass

    def stop_moving(self, agent):
        self.remaining = 0

    def is_moving(self, agent):
        self.polls += 1
        if self.remaining > 0:
            self.remaining -= 1
            return True
        return False


class SignalEngine(CountdownEngine):
    """Resolves a future when movement ends instead of polling."""

    def __init__(self):
        super().__init__(0)
        self.done = None

    def move_along(self, agent, cells, speed):
        self.done = asyncio.get_running_loop().create_future()

    async def wait_until_idle(self, agent):
        await self.done


class Pixel:
    def __init__(self, x, y):
        self.x = x
        self.y = y


def test_screen_coordinate_to_tile_shifts_by_scale():
    assert screen_coordinate_to_tile(0, 4) == 0
    assert screen_coordinate_to_tile(15, 4) == 0
    assert screen_coordinate_to_tile(16, 4) == 1
    assert screen_coordinate_to_tile(47.9, 4) == 2
    assert screen_coordinate_to_tile(40, 3) == 5


def test_screen_coordinate_to_tile_defaults_to_config_scale(monkeypatch):
    monkeypatch.setattr(Config, "DEFAULT_TILE_SCALE", 4)
    assert screen_coordinate_to_tile(33) == 2

    monkeypatch.setattr(Config, "DEFAULT_TILE_SCALE", 5)
    assert screen_coordinate_to_tile(33) == 1


def test_pixel_resolver_returns_tile_location():
    resolver = PixelCoordinateResolver(tile_scale=4)

    cell = resolver.resolve_cell(Pixel(x=40.5, y=17))

    assert cell == TileLocation(col=2, row=1)


def test_pixel_resolver_rejects_negative_scale():
    with pytest.raises(ValueError):
        PixelCoordinateResolver(tile_scale=-1)


@pytest.mark.asyncio
async def test_default_wait_until_idle_polls_until_stopped():
    engine = CountdownEngine(polls=3)

    await engine.wait_until_idle(object())

    # three "moving" answers, then the idle one
    assert engine.polls == 4


@pytest.mark.asyncio
async def test_default_wait_until_idle_yields_to_other_tasks():
    engine = CountdownEngine(polls=1000)
    ticks = []

    async def other_work():
        for i in range(5):
            ticks.append(i)
            await asyncio.sleep(0)
        engine.stop_moving(None)

    await asyncio.gather(engine.wait_until_idle(object()), other_work())

    assert ticks == [0, 1, 2, 3, 4]
    assert engine.polls < 1000


@pytest.mark.asyncio
async def test_wait_until_idle_can_be_overridden_with_a_signal():
    engine = SignalEngine()
    engine.move_along(None, ["A", "B"], 100)

    waiter = asyncio.ensure_future(engine.wait_until_idle(None))
    await asyncio.sleep(0)
    assert not waiter.done()

    engine.done.set_result(None)
    await waiter
    assert engine.polls == 0

"""
Path follower: drives agents through waypoint routes.

Flow for one follow task:
1. Register the agent as following
2. Snapshot the route (first waypoint + stored segments)
3. Approach leg: fresh shortest path from the agent's live cell to waypoint 0
4. Walk each stored segment, awaiting the engine's idle signal after each one
5. After every leg, honour a pending stop request (return early, no handler)
6. Otherwise fire the completion handler, then unregister

Stop requests are cooperative. request_stop() cancels the engine movement
immediately, but the follow task only notices at the next leg boundary,
once the engine reports the agent idle.
"""

import asyncio
import inspect
from typing import Any, List, Optional, Sequence, Set

from .config import Config
from .logging_utils import log_error, log_info, log_progress, log_success
from .path import WaypointPath
from .providers import CoordinateResolver, GridCell, PathfindingProvider
from .registry import FinishHandler, FollowRegistry
from .schemas import FollowOutcome, FollowStatus


def _describe(agent: Any) -> str:
    """Short label for log lines: the sprite's name if it has one."""
    name = getattr(agent, "name", None)
    return str(name) if name else repr(agent)


class PathFollower:
    """
    Walks agents along WaypointPath routes via an engine-supplied provider.

    All dependencies are injected; the follower owns no global state. Each
    follower holds one FollowRegistry (shared with other followers only if
    the caller passes the same registry in).
    """

    def __init__(
        self,
        provider: PathfindingProvider,
        resolver: CoordinateResolver,
        *,
        registry: Optional[FollowRegistry] = None,
        default_speed: Optional[float] = None,
    ):
        """Initialize follower with its engine collaborators.

        Args:
            provider: Engine pathfinding/movement system
            resolver: Maps an agent's live position to a grid cell
            registry: Optional shared FollowRegistry (defaults to a new one)
            default_speed: Speed used when follow() gets none
                (defaults to Config.DEFAULT_SPEED)
        """
        self.provider = provider
        self.resolver = resolver
        self.registry = registry if registry is not None else FollowRegistry()
        self.default_speed = self._check_speed(
            Config.DEFAULT_SPEED if default_speed is None else default_speed
        )
        # Strong references to background tasks from start(); the event loop
        # only keeps weak ones.
        self._tasks: Set[asyncio.Task] = set()

    @staticmethod
    def _check_speed(speed: float) -> float:
        if speed <= 0:
            raise ValueError(f"speed must be positive (got {speed})")
        return speed

    # ------------------------------------------------------------------
    # Following
    # ------------------------------------------------------------------

    async def follow(
        self,
        agent: Any,
        path: WaypointPath,
        speed: Optional[float] = None,
    ) -> FollowOutcome:
        """Walk agent through every waypoint of path, in order.

        Args:
            agent: Engine sprite to move
            path: Route to follow; its current segments are snapshotted now
            speed: Engine speed units; defaults to this follower's default_speed

        Returns:
            FollowOutcome describing whether the route completed or was
            interrupted by request_stop()

        Raises:
            ValueError: If speed is not positive
        """
        speed = self.default_speed if speed is None else self._check_speed(speed)

        # Snapshot: set_path() during the walk must not skew segment indexes.
        waypoints = list(path.get_path())
        segments: List[List[GridCell]] = [list(segment) for segment in path.segments]

        token = self.registry.register(agent)
        label = _describe(agent)
        log_info(f"[{label}] Following {len(waypoints)} waypoints at speed {speed}")

        legs_completed = 0
        try:
            if waypoints:
                # Approach leg is always recomputed from where the agent really is.
                start = self.resolver.resolve_cell(agent)
                approach = self.provider.find_shortest_path(start, waypoints[0])
                await self._walk(agent, approach if approach is not None else [], speed)
                legs_completed += 1
                if self.registry.consume_stop(agent, token):
                    return self._interrupted(label, legs_completed, segments, speed)

            for index, segment in enumerate(segments, start=1):
                log_progress(f"[{label}] Segment {index}/{len(segments)} ({len(segment)} cells)")
                await self._walk(agent, segment, speed)
                legs_completed += 1
                if self.registry.consume_stop(agent, token):
                    return self._interrupted(label, legs_completed, segments, speed)

            # Handler runs while the agent still counts as following.
            await self._notify_finished(agent)
            log_success(f"[{label}] Route complete")
            return FollowOutcome(
                status=FollowStatus.COMPLETED,
                legs_completed=legs_completed,
                segments_total=len(segments),
                speed=speed,
            )
        finally:
            # No-op if the interruption check already removed this registration.
            self.registry.unregister(agent, token)

    def start(
        self,
        agent: Any,
        path: WaypointPath,
        speed: Optional[float] = None,
    ) -> "asyncio.Task[FollowOutcome]":
        """Schedule follow() as a background task on the running event loop."""
        task = asyncio.get_running_loop().create_task(self.follow(agent, path, speed))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def _walk(self, agent: Any, cells: Sequence[GridCell], speed: float) -> None:
        self.provider.move_along(agent, cells, speed)
        await self.provider.wait_until_idle(agent)

    def _interrupted(
        self, label: str, legs_completed: int, segments: List[List[GridCell]], speed: float
    ) -> FollowOutcome:
        log_info(f"[{label}] Stopped after {legs_completed} legs")
        return FollowOutcome(
            status=FollowStatus.INTERRUPTED,
            legs_completed=legs_completed,
            segments_total=len(segments),
            speed=speed,
        )

    async def _notify_finished(self, agent: Any) -> None:
        handler = self.registry.finish_handler
        if handler is None:
            return
        # Handler failures are logged but don't crash the follow task.
        try:
            result = handler(agent)
            if inspect.isawaitable(result):
                await result
        except Exception as exc:
            log_error(f"[{_describe(agent)}] Finish handler failed: {exc}")

    # ------------------------------------------------------------------
    # Stop / query / events
    # ------------------------------------------------------------------

    def request_stop(self, agent: Any) -> bool:
        """Ask a following agent to stop after its current leg.

        Cancels the engine movement right away. The agent keeps counting as
        following until its follow task observes the stop. Agents that are not
        following are ignored (no engine call).

        Returns:
            True if a stop was requested, False if the agent was not following
        """
        if not self.registry.mark_pending_stop(agent):
            return False
        self.provider.stop_moving(agent)
        return True

    def is_following(self, agent: Any) -> bool:
        """Return True while a follow task for agent is in flight."""
        return self.registry.is_following(agent)

    def on_finish(self, handler: Optional[FinishHandler]) -> Optional[FinishHandler]:
        """Set THE completion handler, replacing any earlier one.

        There is a single slot: registering a second handler silently
        overwrites the first. The handler is called with the agent only when
        a route completes naturally, never when it is stopped. Returns the
        handler so this can be used as a decorator.
        """
        self.registry.set_finish_handler(handler)
        return handler

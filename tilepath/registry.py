"""Bookkeeping for which agents are following a route and which must stop."""

from __future__ import annotations

from typing import Any, Awaitable, Callable, Dict, List, Optional, Set, Tuple, Union

# Called with the agent when it finishes a route naturally. Coroutine
# functions are awaited by the follow task.
FinishHandler = Callable[[Any], Union[None, Awaitable[None]]]


class FollowRegistry:
    """Tracks following / pending-stop membership and the completion handler.

    Agents are keyed by identity (``id(agent)``), so unhashable sprites and
    sprites that compare equal are tracked separately. The registry keeps a
    reference to every registered agent, which also keeps its id stable for
    as long as it is registered.

    ``register`` hands back a token identifying that registration. Passing it
    to ``unregister``/``consume_stop`` makes removal apply only to that same
    registration, so a finished follow task cannot remove the registration of
    a newer task started for the same agent (e.g. from a finish handler).

    Invariant: every pending-stop agent is also following. ``unregister`` and
    ``consume_stop`` drop an agent from both sets at once.

    All methods are synchronous. Under asyncio no other task can run between a
    membership check and the mutation that follows it.
    """

    def __init__(self) -> None:
        # Maps id(agent) -> (agent, registration token).
        self._following: Dict[int, Tuple[Any, object]] = {}
        # ids of following agents whose task must end at the next leg boundary.
        self._pending_stop: Set[int] = set()
        self._finish_handler: Optional[FinishHandler] = None

    # ------------------------------------------------------------------
    # Membership
    # ------------------------------------------------------------------

    def register(self, agent: Any) -> object:
        """Mark agent as following and return the registration token.

        Re-registering replaces the previous registration and clears any stale
        stop request it carried.
        """
        key = id(agent)
        token = object()
        self._following[key] = (agent, token)
        self._pending_stop.discard(key)
        return token

    def _owns(self, key: int, token: Optional[object]) -> bool:
        entry = self._following.get(key)
        if entry is None:
            return False
        return token is None or entry[1] is token

    def unregister(self, agent: Any, token: Optional[object] = None) -> bool:
        """Remove agent from both sets.

        Returns False (and changes nothing) if the agent is not following or
        ``token`` belongs to an older registration.
        """
        key = id(agent)
        if not self._owns(key, token):
            return False
        self._pending_stop.discard(key)
        del self._following[key]
        return True

    def is_following(self, agent: Any) -> bool:
        return id(agent) in self._following

    def is_pending_stop(self, agent: Any) -> bool:
        return id(agent) in self._pending_stop

    def mark_pending_stop(self, agent: Any) -> bool:
        """Flag a following agent to stop at its next leg boundary.

        Returns True if the flag was set, False (and no change) if the agent
        is not following.
        """
        key = id(agent)
        if key not in self._following:
            return False
        self._pending_stop.add(key)
        return True

    def consume_stop(self, agent: Any, token: Optional[object] = None) -> bool:
        """If agent is pending stop, unregister it and return True."""
        key = id(agent)
        if key not in self._pending_stop or not self._owns(key, token):
            return False
        return self.unregister(agent, token)

    def following(self) -> List[Any]:
        """Snapshot of agents currently following, in registration order."""
        return [agent for agent, _ in self._following.values()]

    def __contains__(self, agent: Any) -> bool:
        return self.is_following(agent)

    def __len__(self) -> int:
        return len(self._following)

    # ------------------------------------------------------------------
    # Completion handler
    # ------------------------------------------------------------------

    @property
    def finish_handler(self) -> Optional[FinishHandler]:
        return self._finish_handler

    def set_finish_handler(self, handler: Optional[FinishHandler]) -> None:
        """Replace the single completion handler. Last registration wins; None clears it."""
        self._finish_handler = handler

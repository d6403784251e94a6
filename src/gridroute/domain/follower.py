# gridroute/domain/follower.py
import logging
from dataclasses import dataclass, field
from enum import Enum

from gridroute.app.protocols import RouteSource
from gridroute.domain.entities.route import PathResult

log = logging.getLogger(__name__)


class FollowerState(Enum):
    IDLE = "idle"
    FOLLOWING = "following"
    REROUTING = "rerouting"
    ARRIVED = "arrived"
    STUCK = "stuck"


class FollowerStateError(RuntimeError):
    pass


@dataclass
class RouteFollower:
    """
    Walks a route one hop at a time and recovers from obstructions.

      begin ──> FOLLOWING ──advance──> ... ──> ARRIVED
                   │  ▲
       hop blocked │  │ reroute (path found)
                   ▼  │
                REROUTING ──reroute (no path)──> STUCK ──reroute──> ...
      cancel: FOLLOWING | REROUTING -> IDLE

    Every reroute is a fresh solve from the node currently occupied to the
    trip destination. `task_id` increases with each new route and each
    cancel; the event layer uses it to drop events meant for an old route.
    """

    id: int
    source: RouteSource
    state: FollowerState = FollowerState.IDLE
    destination: int | None = None
    route: tuple[int, ...] = ()
    step: int = 0
    task_id: int = 0
    reroutes: int = 0
    travelled: float = 0.0
    last_result: PathResult | None = field(default=None, repr=False)
    _position: int | None = field(default=None, repr=False)

    # --------------- Helpers -----------------------------

    @property
    def position(self) -> int | None:
        if self.route:
            return self.route[self.step]
        return self._position

    @property
    def next_hop(self) -> int | None:
        if self.state is not FollowerState.FOLLOWING or self.step + 1 >= len(self.route):
            return None
        return self.route[self.step + 1]

    @property
    def next_hop_blocked(self) -> bool:
        nxt = self.next_hop
        return nxt is not None and self.source.is_blocked(nxt)

    @property
    def remaining(self) -> tuple[int, ...]:
        return self.route[self.step :]

    def _require(self, event: str, *allowed: FollowerState) -> None:
        if self.state not in allowed:
            raise FollowerStateError(
                f"follower {self.id}: {event} not allowed while {self.state.value}"
            )

    def _take(self, result: PathResult) -> FollowerState:
        self.last_result = result
        self.task_id += 1
        if not result.reachable:
            self._position = self.position
            self.route, self.step = (), 0
            self.state = FollowerState.STUCK
        elif result.hops == 0:
            self.route, self.step = result.path, 0
            self.state = FollowerState.ARRIVED
        else:
            self.route, self.step = result.path, 0
            self.state = FollowerState.FOLLOWING
        return self.state

    # --------------- Events ------------------------------

    def begin(self, start: int, end: int) -> FollowerState:
        self.destination = end
        self.route, self.step = (), 0
        self._position = start
        self.travelled, self.reroutes = 0.0, 0
        state = self._take(self.source.route(start, end))
        log.debug("follower %d begin %r->%r: %s", self.id, start, end, state.value)
        return state

    def advance(self) -> FollowerState:
        """Move one hop. A blocked hop target leaves the follower in place, REROUTING."""
        self._require("advance", FollowerState.FOLLOWING)
        nxt = self.next_hop
        if self.source.is_blocked(nxt):
            self.state = FollowerState.REROUTING
            return self.state
        self.travelled += self.source.edge_length(self.route[self.step], nxt)
        self.step += 1
        if self.step == len(self.route) - 1:
            self.state = FollowerState.ARRIVED
        return self.state

    def hop_blocked(self, node_id: int) -> FollowerState:
        self._require("hop_blocked", FollowerState.FOLLOWING)
        if node_id == self.next_hop:
            self.state = FollowerState.REROUTING
        return self.state

    def reroute(self) -> FollowerState:
        self._require("reroute", FollowerState.REROUTING, FollowerState.STUCK)
        here = self.position
        self.reroutes += 1
        state = self._take(self.source.route(here, self.destination))
        log.debug("follower %d reroute from %r: %s", self.id, here, state.value)
        return state

    def cancel(self) -> FollowerState:
        self._require("cancel", FollowerState.FOLLOWING, FollowerState.REROUTING)
        self._position = self.position
        self.route, self.step = (), 0
        self.task_id += 1
        self.state = FollowerState.IDLE
        return self.state

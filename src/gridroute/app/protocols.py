from typing import Protocol, runtime_checkable

import numpy as np

from gridroute.domain.entities.route import PathResult
from gridroute.domain.graph import Graph


# ------------- Mechanics --------------------
@runtime_checkable
class TopologyBuilder(Protocol):
    """
    Responsibilities:
      • Produce the Graph exactly once per run.
      • Be deterministic in node count, ids and coordinates; any randomness
        (diagonal edges) comes only from the injected generator.
    """

    def build(self, rng: np.random.Generator | None = None) -> Graph: ...


@runtime_checkable
class PathSolver(Protocol):
    """
    Responsibilities:
      • Shortest path over the graph as it is right now (blocked flags included).
      • Never mutate the graph; the result is owned by the caller.
      • Absorb invalid ids: an unknown start or end is simply unreachable.
    Ties between equal tentative distances go to the lowest node id.
    """

    def solve(self, graph: Graph, start: int, end: int) -> PathResult: ...


@runtime_checkable
class RouteSource(Protocol):
    """Anything a follower can ask for a fresh route (normally the RoutingEngine)."""

    def route(self, start: int, end: int) -> PathResult: ...
    def is_blocked(self, node_id: int) -> bool: ...
    def edge_length(self, u: int, v: int) -> float: ...

# gridroute/domain/mechanics/mechanics_core.py
import threading
from dataclasses import dataclass, field

from gridroute.app.protocols import PathSolver
from gridroute.domain import graph as g
from gridroute.domain.entities.geography import Node
from gridroute.domain.entities.route import PathResult
from gridroute.domain.graph import Graph


@dataclass
class RoutingEngine:
    """
    Owner of the graph's blocked flags and the one place routes are asked for.

    The lock serializes toggles against whole solves: a solve always sees a single
    consistent flag snapshot. Single-threaded callers never contend on it.
    """

    graph: Graph
    solver: PathSolver
    _lock: threading.RLock = field(
        default_factory=threading.RLock, init=False, repr=False, compare=False
    )

    def route(self, start: int, end: int) -> PathResult:
        with self._lock:
            return self.solver.solve(self.graph, start, end)

    def toggle_blocked(self, node_id: int) -> bool:
        """Flip the flag; returns the new state (False for unknown ids)."""
        with self._lock:
            g.toggle_blocked(self.graph, node_id)
            return g.is_blocked(self.graph, node_id)

    def is_blocked(self, node_id: int) -> bool:
        with self._lock:
            return g.is_blocked(self.graph, node_id)

    def reset(self) -> None:
        with self._lock:
            g.reset_blocked(self.graph)

    def blocked_ids(self) -> frozenset[int]:
        with self._lock:
            return g.blocked_ids(self.graph)

    def get_node(self, node_id: int) -> Node | None:
        return g.get_node(self.graph, node_id)

    def list_nodes(self) -> list[Node]:
        return g.list_nodes(self.graph)

    def edge_length(self, u: int, v: int) -> float:
        return self.graph.edge_length(u, v)

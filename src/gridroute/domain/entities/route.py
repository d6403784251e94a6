import math
from dataclasses import dataclass, field

from gridroute.domain.entities.geography import Segment
from gridroute.domain.graph import Graph

UNREACHABLE = math.inf


@dataclass(frozen=True)
class PathResult:
    """
    Output of one solve. Created fresh per call and never mutated afterwards.

    `path` is empty when the destination cannot be reached; that is different
    from a one-node path (start == end) whose `total_distance` is 0.0.
    `distances`/`predecessors` cover every node and are kept for diagnostics.
    """

    path: tuple[int, ...]
    total_distance: float
    distances: dict[int, float] = field(default_factory=dict, compare=False)
    predecessors: dict[int, int | None] = field(default_factory=dict, compare=False)

    @property
    def reachable(self) -> bool:
        return len(self.path) > 0

    @property
    def hops(self) -> int:
        return max(0, len(self.path) - 1)

    def segments(self, graph: Graph) -> list[Segment]:
        out = []
        for u, v in zip(self.path, self.path[1:]):
            a, b = graph.nodes[u], graph.nodes[v]
            out.append(Segment(a.point, b.point, graph.edge_length(u, v), from_id=u, to_id=v))
        return out

    @classmethod
    def unreachable(cls, distances=None, predecessors=None) -> "PathResult":
        return cls(
            path=(),
            total_distance=UNREACHABLE,
            distances=dict(distances or {}),
            predecessors=dict(predecessors or {}),
        )

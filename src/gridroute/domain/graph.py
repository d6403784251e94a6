# gridroute/domain/graph.py
import logging
from collections.abc import Iterator
from dataclasses import dataclass, field

import numpy as np

from gridroute.domain.entities.geography import Node, Point

log = logging.getLogger(__name__)


@dataclass
class Graph:
    """
    Fixed set of nodes laid out on a grid.

    Node count, ids, coordinates and adjacency never change after the builder
    returns; only `Node.blocked` is mutated, through the functions below.
    """

    nodes: list[Node]
    width: int
    spacing: float
    origin: Point = field(default_factory=lambda: Point(0.0, 0.0))

    def __len__(self) -> int:
        return len(self.nodes)

    def has_node(self, node_id: int) -> bool:
        # bool is an int subclass; True/False are not node ids
        return (
            isinstance(node_id, (int, np.integer))
            and not isinstance(node_id, bool)
            and 0 <= node_id < len(self.nodes)
        )

    def edge_length(self, u: int, v: int) -> float:
        return self.nodes[u].point.distance_to(self.nodes[v].point)

    def edges(self) -> Iterator[tuple[int, int]]:
        for n in self.nodes:
            for nb in n.neighbors:
                yield n.id, nb

    @property
    def edge_count(self) -> int:
        return sum(len(n.neighbors) for n in self.nodes)


# ------------- Accessors: invalid ids degrade, never raise --------------


def get_node(graph: Graph, node_id: int) -> Node | None:
    return graph.nodes[node_id] if graph.has_node(node_id) else None


def list_nodes(graph: Graph) -> list[Node]:
    return list(graph.nodes)


def is_blocked(graph: Graph, node_id: int) -> bool:
    return graph.has_node(node_id) and graph.nodes[node_id].blocked


def toggle_blocked(graph: Graph, node_id: int) -> None:
    if not graph.has_node(node_id):
        log.debug("toggle ignored for unknown node id %r", node_id)
        return
    n = graph.nodes[node_id]
    n.blocked = not n.blocked


def reset_blocked(graph: Graph) -> None:
    for n in graph.nodes:
        n.blocked = False


def blocked_ids(graph: Graph) -> frozenset[int]:
    return frozenset(n.id for n in graph.nodes if n.blocked)

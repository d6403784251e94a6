import logging

import numpy as np

from gridroute.app.protocols import TopologyBuilder
from gridroute.domain.entities.geography import Node, Point
from gridroute.domain.graph import Graph

log = logging.getLogger(__name__)


class GridTopologyBuilder(TopologyBuilder):
    """
    Lays `node_count` nodes out row-major on a grid `grid_width` wide.

    Axial edges are emitted per node in the order right, down, left, up, so axial
    adjacency ends up symmetric. Each node then draws independently, once per
    direction, for an up-left and an up-right diagonal; the lower endpoint never
    learns about it, which makes diagonal adjacency one-way unless both draws hit.
    """

    def __init__(
        self,
        *,
        node_count: int = 80,
        grid_width: int = 9,
        spacing: float = 60.0,
        diagonal_probability: float = 0.3,
        origin: tuple[float, float] = (100.0, 100.0),
    ):
        if node_count <= 0:
            raise ValueError(f"node_count must be positive, got {node_count}")
        if grid_width <= 0:
            raise ValueError(f"grid_width must be positive, got {grid_width}")
        if spacing <= 0:
            raise ValueError(f"spacing must be positive, got {spacing}")
        if not 0.0 <= diagonal_probability <= 1.0:
            raise ValueError(f"diagonal_probability must be in [0, 1], got {diagonal_probability}")
        self.n, self.w = node_count, grid_width
        self.spacing, self.p_diag = float(spacing), float(diagonal_probability)
        self.origin = Point(float(origin[0]), float(origin[1]))

    def _axial(self, i: int) -> list[int]:
        r, c = divmod(i, self.w)
        out = []
        if c + 1 < self.w and i + 1 < self.n:
            out.append(i + 1)
        if i + self.w < self.n:
            out.append(i + self.w)
        if c > 0:
            out.append(i - 1)
        if r > 0:
            out.append(i - self.w)
        return out

    def _diagonals(self, i: int, rng: np.random.Generator | None) -> list[int]:
        if self.p_diag == 0.0:
            return []
        r, c = divmod(i, self.w)
        out = []
        if r > 0 and c > 0 and rng.random() < self.p_diag:
            out.append(i - self.w - 1)
        if r > 0 and c + 1 < self.w and rng.random() < self.p_diag:
            out.append(i - self.w + 1)
        return out

    def build(self, rng: np.random.Generator | None = None) -> Graph:
        if self.p_diag > 0.0 and rng is None:
            raise ValueError("diagonal_probability > 0 needs an rng")
        nodes = []
        for i in range(self.n):
            r, c = divmod(i, self.w)
            nodes.append(
                Node(
                    id=i,
                    x=self.origin.x + c * self.spacing,
                    y=self.origin.y + r * self.spacing,
                )
            )
        for node in nodes:
            node.neighbors = self._axial(node.id) + self._diagonals(node.id, rng)

        g = Graph(nodes=nodes, width=self.w, spacing=self.spacing, origin=self.origin)
        log.debug("built grid n=%d w=%d edges=%d", self.n, self.w, g.edge_count)
        return g


def build_graph(
    node_count: int = 80,
    grid_width: int = 9,
    spacing: float = 60.0,
    diagonal_probability: float = 0.3,
    rng: np.random.Generator | None = None,
    *,
    origin: tuple[float, float] = (100.0, 100.0),
) -> Graph:
    return GridTopologyBuilder(
        node_count=node_count,
        grid_width=grid_width,
        spacing=spacing,
        diagonal_probability=diagonal_probability,
        origin=origin,
    ).build(rng)

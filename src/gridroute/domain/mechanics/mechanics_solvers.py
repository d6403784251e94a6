import heapq
import logging
import math

import numpy as np

from gridroute.app.protocols import PathSolver
from gridroute.domain.entities.route import PathResult
from gridroute.domain.graph import Graph

log = logging.getLogger(__name__)


def _reconstruct(pred: list[int | None], start: int, end: int) -> tuple[int, ...]:
    path = []
    cur: int | None = end
    while cur is not None:
        path.append(cur)
        if cur == start:
            break
        cur = pred[cur]
    path.reverse()
    return tuple(path)


def _result(
    graph: Graph, dist, pred: list[int | None], start: int, end: int
) -> PathResult:
    distances = {i: float(d) for i, d in enumerate(dist)}
    predecessors = dict(enumerate(pred))
    if not graph.has_node(end) or math.isinf(distances[end]):
        return PathResult.unreachable(distances, predecessors)
    return PathResult(
        path=_reconstruct(pred, start, end),
        total_distance=distances[end],
        distances=distances,
        predecessors=predecessors,
    )


def _relax(graph: Graph, cur: int, dist, pred, visited) -> list[int]:
    """Relax every enterable neighbour of `cur`; return the ids that improved."""
    improved = []
    node = graph.nodes[cur]
    n = len(graph)
    for nb in node.neighbors:
        if not 0 <= nb < n or visited[nb]:
            continue
        target = graph.nodes[nb]
        if target.blocked:
            continue
        alt = dist[cur] + math.hypot(node.x - target.x, node.y - target.y)
        if alt < dist[nb]:
            dist[nb] = alt
            pred[nb] = cur
            improved.append(nb)
    return improved


class LinearScanDijkstra(PathSolver):
    """
    Textbook O(N^2) Dijkstra: every iteration scans all unvisited nodes for the
    smallest tentative distance. argmin returns the first minimum, so ties go to
    the lowest id.
    """

    def solve(self, graph: Graph, start: int, end: int) -> PathResult:
        n = len(graph)
        dist = np.full(n, np.inf)
        pred: list[int | None] = [None] * n
        visited = np.zeros(n, dtype=bool)
        if not graph.has_node(start):
            log.debug("solve from unknown node %r", start)
            return _result(graph, dist, pred, start, end)

        dist[start] = 0.0
        for _ in range(n):
            masked = np.where(visited, np.inf, dist)
            cur = int(np.argmin(masked))
            if not np.isfinite(masked[cur]):
                break  # everything left is unreachable
            visited[cur] = True
            if graph.nodes[cur].blocked:
                continue  # reached, but cannot be departed from
            _relax(graph, cur, dist, pred, visited)

        return _result(graph, dist, pred, start, end)


class HeapDijkstra(PathSolver):
    """
    Same answers as LinearScanDijkstra, O(E log V). Heap entries are (distance, id)
    so equal distances still pop lowest id first; stale entries are skipped.
    """

    def solve(self, graph: Graph, start: int, end: int) -> PathResult:
        n = len(graph)
        dist = [math.inf] * n
        pred: list[int | None] = [None] * n
        visited = [False] * n
        if not graph.has_node(start):
            log.debug("solve from unknown node %r", start)
            return _result(graph, dist, pred, start, end)

        dist[start] = 0.0
        heap = [(0.0, start)]
        while heap:
            d, cur = heapq.heappop(heap)
            if visited[cur] or d > dist[cur]:
                continue
            visited[cur] = True
            if graph.nodes[cur].blocked:
                continue
            for nb in _relax(graph, cur, dist, pred, visited):
                heapq.heappush(heap, (dist[nb], nb))

        return _result(graph, dist, pred, start, end)


_default_solver = LinearScanDijkstra()


def solve(graph: Graph, start: int, end: int) -> PathResult:
    return _default_solver.solve(graph, start, end)

# runtime/registries.py
from collections.abc import Callable

from gridroute.app.protocols import PathSolver
from gridroute.config.models import SolverHeapModel, SolverLinearScanModel, SolverUnion
from gridroute.domain.mechanics.mechanics_solvers import HeapDijkstra, LinearScanDijkstra

SolverFactory = Callable[[SolverUnion], PathSolver]

_solver_registry: dict[str, SolverFactory] = {}


# ------------------- Path solvers ---------------------------


def register_solver(kind: str):
    def deco(fn: SolverFactory):
        _solver_registry[kind] = fn
        return fn

    return deco


def make_solver(cfg: SolverUnion) -> PathSolver:
    try:
        factory = _solver_registry[cfg.kind]
    except KeyError:
        raise ValueError(f"Unknown solver kind {cfg.kind!r}") from None
    return factory(cfg)


@register_solver("linear_scan")
def _make_linear_scan(cfg: SolverLinearScanModel):
    return LinearScanDijkstra()


@register_solver("heap")
def _make_heap(cfg: SolverHeapModel):
    return HeapDijkstra()

# gridroute/domain/mechanics/mechanics_factory.py

from gridroute.config.models import GridTopologyModel, SolverUnion
from gridroute.domain.graph import Graph
from gridroute.domain.mechanics.mechanics_core import RoutingEngine
from gridroute.domain.mechanics.mechanics_topology import GridTopologyBuilder
from gridroute.runtime.registries import make_solver
from gridroute.sim.rng import RNGRegistry


def build_graph_from_config(cfg: GridTopologyModel, rng_registry: RNGRegistry) -> Graph:
    builder = GridTopologyBuilder(
        node_count=cfg.node_count,
        grid_width=cfg.grid_width,
        spacing=cfg.spacing,
        diagonal_probability=cfg.diagonal_probability,
        origin=cfg.origin,
    )
    return builder.build(rng_registry.stream("topology"))


def build_engine(
    grid: GridTopologyModel, solver: SolverUnion, rng_registry: RNGRegistry
) -> RoutingEngine:
    graph = build_graph_from_config(grid, rng_registry)
    return RoutingEngine(graph=graph, solver=make_solver(solver))

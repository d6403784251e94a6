# gridroute/app/build.py
import logging
from collections.abc import Mapping
from dataclasses import dataclass

from gridroute.app.controllers.obstructions import ObstructionHandler
from gridroute.app.controllers.routing import RoutingHandler
from gridroute.app.events import NodeToggle, TripRequested
from gridroute.app.wiring import wire
from gridroute.config.models import ScenarioModel
from gridroute.domain.mechanics.mechanics_core import RoutingEngine
from gridroute.domain.mechanics.mechanics_factory import build_engine
from gridroute.io.kernel_logging import KernelLogging
from gridroute.io.recorder import JsonlSink, Recorder, Sink
from gridroute.sim.hooks import NoopHooks
from gridroute.sim.kernel import Kernel
from gridroute.sim.rng import RNGRegistry


@dataclass
class App:
    model: ScenarioModel
    kernel: Kernel
    rng: RNGRegistry
    engine: RoutingEngine
    routing: RoutingHandler
    obstructions: ObstructionHandler
    recorder: Recorder | None

    def run(self, until: float | None = None, max_events: int | None = None) -> int:
        if until is None:
            until = self.model.sim.duration
        return self.kernel.run(until=until, max_events=max_events)


def build(
    cfg: ScenarioModel | Mapping,
    *,
    use_logging: bool = True,
    sinks: list[Sink] | None = None,
    logger: logging.Logger | None = None,
) -> App:
    # 0) Validate config
    model = cfg if isinstance(cfg, ScenarioModel) else ScenarioModel.model_validate(cfg)

    # 1) RNG & graph
    rng_registry = RNGRegistry(model.sim.seed, scenario=model.name)
    engine = build_engine(model.grid, model.solver, rng_registry)

    # 2) Kernel (with hooks)
    recorder = Recorder(*(sinks if sinks is not None else [JsonlSink()])) if use_logging else None
    hooks = (
        KernelLogging(
            run_id=model.run_id,
            recorder=recorder,
            level=model.log.level,
            debug=model.log.debug,
            sample_every=model.log.sample_every,
            logger=logger,
        )
        if use_logging
        else NoopHooks()
    )
    kernel = Kernel(hooks=hooks)

    # 3) Handlers (inject deps explicitly)
    routing = RoutingHandler(
        engine,
        hop_s=model.follower.hop_s,
        reroute_delay_s=model.follower.reroute_delay_s,
        hooks=hooks,
        run_id=model.run_id,
    )
    obstructions = ObstructionHandler(engine, hooks=hooks, run_id=model.run_id)

    # 4) Wiring
    wire(kernel, routing=routing, obstructions=obstructions)

    # 5) Seed scripted inputs
    for ob in model.obstructions:
        kernel.schedule(NodeToggle(t=ob.t, node_id=ob.node_id))
    for trip in model.trips:
        kernel.schedule(
            TripRequested(t=trip.t, follower_id=trip.follower_id, start=trip.start, end=trip.end)
        )

    return App(model, kernel, rng_registry, engine, routing, obstructions, recorder)

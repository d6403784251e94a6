# gridroute/app/controllers/obstructions.py
from gridroute.app.events import NodeToggle
from gridroute.domain.mechanics.mechanics_core import RoutingEngine
from gridroute.io.business_events import ObstructionToggledBiz
from gridroute.sim.hooks import KernelHooks, NoopHooks


class ObstructionHandler:
    """
    Applies scripted or external toggles. Followers are not told directly: they
    look at their next hop before each departure and on each arrival.
    """

    def __init__(self, engine: RoutingEngine, hooks: KernelHooks | None = None, run_id="local"):
        self.engine = engine
        self.hooks = hooks or NoopHooks()
        self.run_id = run_id

    def on_node_toggle(self, ev: NodeToggle):
        if self.engine.get_node(ev.node_id) is None:
            return []  # unknown ids are absorbed, nothing to report
        blocked = self.engine.toggle_blocked(ev.node_id)
        self.hooks.biz(
            ObstructionToggledBiz(
                run_id=self.run_id,
                t=ev.t,
                name="ObstructionToggled",
                node_id=ev.node_id,
                blocked=blocked,
            )
        )
        return []

# gridroute/app/wiring.py
from gridroute.app.controllers.obstructions import ObstructionHandler
from gridroute.app.controllers.routing import RoutingHandler
from gridroute.app.events import HopArrive, NodeToggle, RerouteDue, TripCancel, TripRequested
from gridroute.sim.kernel import Kernel


def wire(kernel: Kernel, *, routing: RoutingHandler, obstructions: ObstructionHandler) -> None:
    k = kernel

    # obstruction state
    k.on(NodeToggle, obstructions.on_node_toggle)

    # followers
    k.on(TripRequested, routing.on_trip_requested)
    k.on(HopArrive, routing.on_hop_arrive)
    k.on(RerouteDue, routing.on_reroute_due)
    k.on(TripCancel, routing.on_trip_cancel)

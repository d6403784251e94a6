# gridroute/app/controllers/routing.py
from gridroute.app.events import (
    HopArrive,
    ObstacleDetected,
    RerouteDue,
    TripArrived,
    TripCancel,
    TripRequested,
    TripStuck,
)
from gridroute.domain.follower import FollowerState, RouteFollower
from gridroute.domain.mechanics.mechanics_core import RoutingEngine
from gridroute.io.business_events import RouteComputedBiz, TripArrivedBiz, TripStuckBiz
from gridroute.sim.hooks import KernelHooks, NoopHooks


class RoutingHandler:
    """Drives one RouteFollower per follower_id from kernel events."""

    def __init__(
        self,
        engine: RoutingEngine,
        hop_s: float = 1.0,
        reroute_delay_s: float = 1.0,
        hooks: KernelHooks | None = None,
        run_id: str = "local",
    ):
        self.engine = engine
        self.hop_s = hop_s
        self.reroute_delay_s = reroute_delay_s
        self.hooks = hooks or NoopHooks()
        self.run_id = run_id
        self.followers: dict[int, RouteFollower] = {}

    # --------------- Helpers -----------------------------

    def _follower(self, follower_id: int) -> RouteFollower:
        f = self.followers.get(follower_id)
        if f is None:
            f = RouteFollower(id=follower_id, source=self.engine)
            self.followers[follower_id] = f
        return f

    def _is_current(self, f: RouteFollower | None, task_id: int, state: FollowerState) -> bool:
        return f is not None and f.task_id == task_id and f.state is state

    def _route_biz(self, now: float, f: RouteFollower, origin: int, reroute: bool):
        res = f.last_result
        self.hooks.biz(
            RouteComputedBiz(
                run_id=self.run_id,
                t=now,
                name="RouteComputed",
                follower_id=f.id,
                origin=origin,
                destination=f.destination,
                path=list(res.path),
                total_distance=res.total_distance if res.reachable else None,
                reroute=reroute,
            )
        )

    def _settle(self, now: float, f: RouteFollower):
        """Events that follow from the follower's state after a solve or a hop."""
        if f.state is FollowerState.FOLLOWING:
            return self._depart(now, f)
        if f.state is FollowerState.ARRIVED:
            self.hooks.biz(
                TripArrivedBiz(
                    run_id=self.run_id,
                    t=now,
                    name="TripArrived",
                    follower_id=f.id,
                    node_id=f.position,
                    travelled=f.travelled,
                    reroutes=f.reroutes,
                )
            )
            return [TripArrived(t=now, follower_id=f.id, node_id=f.position)]
        if f.state is FollowerState.STUCK:
            self.hooks.biz(
                TripStuckBiz(
                    run_id=self.run_id,
                    t=now,
                    name="TripStuck",
                    follower_id=f.id,
                    node_id=f.position,
                    destination=f.destination,
                    reroutes=f.reroutes,
                )
            )
            return [TripStuck(t=now, follower_id=f.id, node_id=f.position)]
        return []

    def _depart(self, now: float, f: RouteFollower):
        # checked on departure; on_hop_arrive covers blocks that land mid-edge
        nxt = f.next_hop
        if self.engine.is_blocked(nxt):
            f.hop_blocked(nxt)
            return [
                ObstacleDetected(t=now, follower_id=f.id, node_id=nxt),
                RerouteDue(t=now + self.reroute_delay_s, follower_id=f.id, task_id=f.task_id),
            ]
        return [HopArrive(t=now + self.hop_s, follower_id=f.id, task_id=f.task_id)]

    # ------------ causal event handlers --------------

    def on_trip_requested(self, ev: TripRequested):
        f = self._follower(ev.follower_id)
        f.begin(ev.start, ev.end)
        self._route_biz(ev.t, f, ev.start, reroute=False)
        return self._settle(ev.t, f)

    def on_hop_arrive(self, ev: HopArrive):
        f = self.followers.get(ev.follower_id)
        if not self._is_current(f, ev.task_id, FollowerState.FOLLOWING):
            return []  # stale: route replaced or cancelled meanwhile
        target = f.next_hop
        f.advance()
        if f.state is FollowerState.REROUTING:
            # blocked while on the edge: stay put and retry after the delay
            return [
                ObstacleDetected(t=ev.t, follower_id=f.id, node_id=target),
                RerouteDue(t=ev.t + self.reroute_delay_s, follower_id=f.id, task_id=f.task_id),
            ]
        return self._settle(ev.t, f)

    def on_reroute_due(self, ev: RerouteDue):
        f = self.followers.get(ev.follower_id)
        if not self._is_current(f, ev.task_id, FollowerState.REROUTING):
            return []
        origin = f.position
        f.reroute()
        self._route_biz(ev.t, f, origin, reroute=True)
        return self._settle(ev.t, f)

    def on_trip_cancel(self, ev: TripCancel):
        f = self.followers.get(ev.follower_id)
        if f is None or f.state not in (FollowerState.FOLLOWING, FollowerState.REROUTING):
            return []
        f.cancel()
        return []

# gridroute/io/business_events.py

from dataclasses import dataclass


# Base type for analytics events (never scheduled in the kernel)
@dataclass
class BizEvent:
    run_id: str
    t: float  # simulation time
    name: str  # stable event name


@dataclass
class RouteComputedBiz(BizEvent):
    follower_id: int
    origin: int
    destination: int
    path: list[int]
    total_distance: float | None  # None when unreachable (JSON has no inf)
    reroute: bool = False


@dataclass
class TripArrivedBiz(BizEvent):
    follower_id: int
    node_id: int
    travelled: float
    reroutes: int


@dataclass
class TripStuckBiz(BizEvent):
    follower_id: int
    node_id: int | None
    destination: int | None
    reroutes: int


@dataclass
class ObstructionToggledBiz(BizEvent):
    node_id: int
    blocked: bool

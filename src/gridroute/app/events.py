# app/events.py
from dataclasses import dataclass

from gridroute.sim.event import BaseEvent


# Inputs
@dataclass(order=True)
class TripRequested(BaseEvent):
    follower_id: int
    start: int
    end: int


@dataclass(order=True)
class TripCancel(BaseEvent):
    follower_id: int
    reason: str | None = None


@dataclass(order=True)
class NodeToggle(BaseEvent):
    node_id: int


# Follower lifecycle
@dataclass(order=True)
class HopArrive(BaseEvent):
    follower_id: int
    task_id: int  # versioning makes events for an abandoned route harmless


@dataclass(order=True)
class RerouteDue(BaseEvent):
    follower_id: int
    task_id: int


# Observability
@dataclass(order=True)
class ObstacleDetected(BaseEvent):
    follower_id: int
    node_id: int


@dataclass(order=True)
class TripArrived(BaseEvent):
    follower_id: int
    node_id: int


@dataclass(order=True)
class TripStuck(BaseEvent):
    follower_id: int
    node_id: int | None

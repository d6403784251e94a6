import math
from dataclasses import dataclass, field


# Core geometry types shared by the builder, the solvers and consumers
@dataclass(frozen=True)
class Point:
    x: float  # canvas units, origin top-left
    y: float

    def distance_to(self, other: "Point") -> float:
        return math.hypot(other.x - self.x, other.y - self.y)


@dataclass(frozen=True)
class Segment:
    """One hop of a route, ready for a consumer to interpolate along."""

    start: Point
    end: Point
    length: float
    from_id: int
    to_id: int


@dataclass
class Node:
    id: int
    x: float
    y: float
    neighbors: list[int] = field(default_factory=list)  # directed, emission order kept
    blocked: bool = False

    @property
    def point(self) -> Point:
        return Point(self.x, self.y)

# sim/event.py
from dataclasses import dataclass


@dataclass(order=True)
class BaseEvent:
    """Anything the kernel can schedule. Subclasses add their payload after `t`."""

    t: float  # simulation seconds

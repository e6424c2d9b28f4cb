"""Force-directed layout: forces, simulation and frame scheduling."""

from ideagraph.layout.factory import (
    collide_radius,
    create_simulation,
    link_distance,
    link_strength,
    set_center,
)
from ideagraph.layout.forces import (
    CenterForce,
    CollideForce,
    Force,
    LinkForce,
    ManyBodyForce,
    PositionForce,
)
from ideagraph.layout.scheduler import (
    AsyncioFrameScheduler,
    FrameHandle,
    FrameScheduler,
    ManualFrameScheduler,
)
from ideagraph.layout.simulation import Simulation

__all__ = [
    # Forces
    "Force",
    "LinkForce",
    "ManyBodyForce",
    "CollideForce",
    "PositionForce",
    "CenterForce",
    # Simulation
    "Simulation",
    "create_simulation",
    "set_center",
    "link_distance",
    "link_strength",
    "collide_radius",
    # Scheduling
    "FrameScheduler",
    "FrameHandle",
    "ManualFrameScheduler",
    "AsyncioFrameScheduler",
]

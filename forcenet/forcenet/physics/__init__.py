"""Force-directed layout simulation."""

from .forces import CenterForce, LinkForce, ManyBodyForce
from .quadtree import QuadTree
from .simulation import ForceConfig, ForceSimulation, run

__all__ = [
    "ForceSimulation",
    "ForceConfig",
    "run",
    "LinkForce",
    "ManyBodyForce",
    "CenterForce",
    "QuadTree",
]

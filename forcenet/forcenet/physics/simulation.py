"""Iterative force-directed layout.

The simulation owns node positions. Each step decays `alpha` toward
`alpha_target`, lets every force add to node velocities, then integrates
velocities into positions. Pinned nodes (`fx`/`fy`) are held in place.

Steps are scheduled cooperatively on the running asyncio loop, one per frame,
until alpha falls below `alpha_min`. Without a running loop the caller drives
the simulation with `tick()` or `run_until_settled()`.
"""

from __future__ import annotations

import asyncio
import logging
import math
import random
from dataclasses import dataclass
from typing import Callable, Sequence

from ..models import Edge, Node
from ..style import StyleConfig
from .forces import CenterForce, Force, LinkForce, ManyBodyForce

logger = logging.getLogger(__name__)

INITIAL_RADIUS = 10.0
INITIAL_ANGLE = math.pi * (3 - math.sqrt(5))

TickListener = Callable[["ForceSimulation"], None]


@dataclass(frozen=True)
class ForceConfig:
    """Force parameters for one layout run."""

    link_distance: float = 70.0
    link_strength: float = 0.6
    charge: float = -180.0
    center_x: float = 400.0
    center_y: float = 300.0

    @classmethod
    def from_style(cls, style: StyleConfig) -> "ForceConfig":
        width, height = style.canvas
        return cls(
            link_distance=style.link_distance,
            charge=style.charge,
            center_x=width / 2,
            center_y=height / 2,
        )


class ForceSimulation:
    """Velocity-Verlet style simulation with a decaying temperature (alpha)."""

    def __init__(
        self,
        nodes: Sequence[Node],
        *,
        seed: int | None = None,
        frame_interval: float = 1 / 60,
    ):
        self.nodes = list(nodes)
        self.alpha = 1.0
        self.alpha_min = 0.001
        self.alpha_decay = 1 - self.alpha_min ** (1 / 300)
        self.alpha_target = 0.0
        self.velocity_decay = 0.4
        self.frame_interval = frame_interval
        self.steps = 0
        self.random = random.Random(seed)
        self._forces: dict[str, Force] = {}
        self._listeners: dict[str, list[TickListener]] = {"tick": [], "end": []}
        self._task: asyncio.Task | None = None
        self._initialize_nodes()

    def _initialize_nodes(self) -> None:
        for i, node in enumerate(self.nodes):
            node.index = i
            if node.fx is not None:
                node.x = node.fx
            if node.fy is not None:
                node.y = node.fy
            if node.x is None or node.y is None:
                radius = INITIAL_RADIUS * math.sqrt(0.5 + i)
                angle = i * INITIAL_ANGLE
                node.x = radius * math.cos(angle)
                node.y = radius * math.sin(angle)
            if math.isnan(node.vx) or math.isnan(node.vy):
                node.vx = node.vy = 0.0

    # Forces and listeners

    def force(self, name: str, force: Force | None = None) -> Force | None:
        """Register (and initialize) a named force, or return the registered one."""
        if force is None:
            return self._forces.get(name)
        force.initialize(self.nodes, self.random)
        self._forces[name] = force
        return force

    def remove_force(self, name: str) -> None:
        self._forces.pop(name, None)

    def on(self, event: str, listener: TickListener) -> "ForceSimulation":
        if event not in self._listeners:
            raise ValueError(f"Unknown simulation event: {event}")
        self._listeners[event].append(listener)
        return self

    def _emit(self, event: str) -> None:
        for listener in list(self._listeners[event]):
            listener(self)

    # Stepping

    @property
    def settled(self) -> bool:
        return self.alpha < self.alpha_min

    def step(self) -> float:
        """Advance one step without notifying listeners. Returns the new alpha."""
        self.alpha += (self.alpha_target - self.alpha) * self.alpha_decay

        for force in self._forces.values():
            force(self.alpha)

        keep = 1 - self.velocity_decay
        for node in self.nodes:
            if node.fx is None:
                node.vx *= keep
                node.x += node.vx
            else:
                node.x = node.fx
                node.vx = 0.0
            if node.fy is None:
                node.vy *= keep
                node.y += node.vy
            else:
                node.y = node.fy
                node.vy = 0.0

        self.steps += 1
        return self.alpha

    def tick(self, iterations: int = 1) -> "ForceSimulation":
        for _ in range(iterations):
            self.step()
        return self

    def _frame(self) -> bool:
        """One scheduled step: step, notify, and report whether to continue."""
        self.step()
        self._emit("tick")
        if self.settled:
            self._emit("end")
            return False
        return True

    def run_until_settled(self, max_steps: int | None = None) -> int:
        """Step synchronously (notifying listeners) until settled. Returns steps taken."""
        taken = 0
        while max_steps is None or taken < max_steps:
            taken += 1
            if not self._frame():
                break
        return taken

    # Scheduling

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def restart(self) -> "ForceSimulation":
        """Schedule steps on the running loop (no-op if already scheduled)."""
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.debug("No running event loop; simulation is stepped manually")
            return self
        if not self.running:
            self._task = loop.create_task(self._run())
        return self

    def stop(self) -> "ForceSimulation":
        """Cancel any pending steps."""
        if self._task is not None:
            self._task.cancel()
            self._task = None
        return self

    async def _run(self) -> None:
        while self._frame():
            await asyncio.sleep(self.frame_interval)
        logger.debug("Simulation settled after %d steps", self.steps)

    async def wait(self) -> None:
        """Wait until the scheduled run settles (or is stopped)."""
        task = self._task
        if task is None:
            return
        try:
            await asyncio.shield(task)
        except asyncio.CancelledError:
            if not task.cancelled():
                raise

    # Queries

    def find(self, x: float, y: float, radius: float | None = None) -> Node | None:
        """Closest node to (x, y), optionally within `radius`."""
        best: Node | None = None
        best_d2 = math.inf if radius is None else radius * radius
        for node in self.nodes:
            dx = x - node.x
            dy = y - node.y
            d2 = dx * dx + dy * dy
            if d2 < best_d2:
                best, best_d2 = node, d2
        return best


def run(
    nodes: Sequence[Node],
    edges: Sequence[Edge],
    config: ForceConfig,
    on_tick: TickListener | None = None,
    *,
    seed: int | None = None,
) -> ForceSimulation:
    """Create a simulation with link, charge and center forces and start it."""
    sim = ForceSimulation(nodes, seed=seed)
    sim.force("link", LinkForce(edges, distance=config.link_distance, strength=config.link_strength))
    sim.force("charge", ManyBodyForce(strength=config.charge))
    sim.force("center", CenterForce(config.center_x, config.center_y))
    if on_tick is not None:
        sim.on("tick", on_tick)
    return sim.restart()

"""One rendering instance: rebuilds graph, scales and simulation on every refresh."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

from ..errors import GraphBuildError
from ..graph.builder import build_graph
from ..graph.scales import Scales, make_scales
from ..models import Graph
from ..physics.simulation import ForceConfig, ForceSimulation, run
from ..style import StyleConfig
from ..table import Payload
from .interaction import DragController, PointerRouter, ZoomController
from .render import Frame, snapshot
from .tooltip import Tooltip

logger = logging.getLogger(__name__)

FrameListener = Callable[[Frame], None]


@dataclass
class Placeholder:
    """Informational state shown instead of a graph."""

    message: str
    reason: str  # class name of the build error


class NetworkView:
    """Renderer state for one embedding.

    `draw()` is the host's data callback. Each call discards the previous
    simulation (cancelling its pending steps) before building a new one, so
    stale steps never touch discarded nodes.
    """

    def __init__(self, *, seed: int | None = None, clamp_tooltip: bool = False):
        self.seed = seed
        self.clamp_tooltip = clamp_tooltip
        self.style = StyleConfig()
        self.graph: Graph | None = None
        self.scales: Scales | None = None
        self.simulation: ForceSimulation | None = None
        self.placeholder: Placeholder | None = None
        self.zoom = ZoomController()
        self.tooltip = Tooltip()
        self.drag: DragController | None = None
        self.pointer: PointerRouter | None = None
        self.frame: Frame | None = None
        self.refreshes = 0
        self._frame_listeners: list[FrameListener] = []

    def on_frame(self, listener: FrameListener) -> None:
        self._frame_listeners.append(listener)

    def discard(self) -> None:
        """Stop the current simulation and drop all per-refresh state."""
        if self.simulation is not None:
            self.simulation.stop()
        self.graph = None
        self.scales = None
        self.simulation = None
        self.drag = None
        self.pointer = None
        self.frame = None
        self.tooltip.hide()

    def draw(self, payload: Payload) -> None:
        """Handle one data/style refresh from the host."""
        self.discard()
        self.refreshes += 1
        self.style = payload.style
        self.tooltip.container = self.style.canvas
        self.tooltip.clamp = self.clamp_tooltip

        try:
            graph = build_graph(payload.rows, payload.field_map)
        except GraphBuildError as e:
            logger.info("Rendering placeholder: %s", e)
            self.placeholder = Placeholder(message=str(e), reason=type(e).__name__)
            return

        self.placeholder = None
        self.graph = graph
        self.scales = make_scales(graph.nodes, graph.edges, self.style)
        self.simulation = run(
            graph.nodes,
            graph.edges,
            ForceConfig.from_style(self.style),
            self._on_tick,
            seed=self.seed,
        )
        self.drag = DragController(self.simulation, self.zoom)
        self.pointer = PointerRouter(
            graph.nodes,
            graph.edges,
            radius_of=lambda n: self.scales.node_size(n.value),
            width_of=lambda e: self.scales.link_width(e.weight),
            drag=self.drag,
            zoom=self.zoom,
            tooltip=self.tooltip,
            uses_degree=graph.uses_degree,
        )
        logger.debug("Refresh %d: %d nodes, %d edges", self.refreshes, len(graph.nodes), len(graph.edges))

    def _on_tick(self, simulation: ForceSimulation) -> None:
        if simulation is not self.simulation:
            return
        self.frame = self.current_frame()
        for listener in list(self._frame_listeners):
            listener(self.frame)

    def current_frame(self) -> Frame | None:
        if self.graph is None or self.scales is None or self.simulation is None:
            return None
        return snapshot(
            self.graph,
            self.scales,
            self.style,
            transform=self.zoom.transform,
            alpha=self.simulation.alpha,
            step=self.simulation.steps,
        )

    def settle(self, max_steps: int | None = None) -> Frame | None:
        """Drive the current simulation synchronously to convergence."""
        if self.simulation is None:
            return None
        self.simulation.stop()
        self.simulation.run_until_settled(max_steps)
        return self.current_frame()

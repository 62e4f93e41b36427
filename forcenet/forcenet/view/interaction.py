"""Pointer interaction: drag-to-pin, zoom/pan, and hover routing.

Zoom/pan only changes the view transform; it never touches simulation
coordinates. Dragging writes a node's fixed position (`fx`/`fy`) and keeps the
simulation warm while the pointer is down.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable, Sequence

from ..models import Edge, Node
from ..physics.simulation import ForceSimulation
from .tooltip import Tooltip, edge_tooltip, node_tooltip

Point = tuple[float, float]

DRAG_ALPHA_TARGET = 0.2
SCALE_EXTENT = (0.08, 12.5)
WHEEL_STEP = 1.15
MIN_EDGE_HIT = 3.0


@dataclass(frozen=True)
class ZoomTransform:
    """Uniform scale `k` followed by translation (`x`, `y`): screen = k * scene + t."""

    k: float = 1.0
    x: float = 0.0
    y: float = 0.0

    def apply(self, point: Point) -> Point:
        return point[0] * self.k + self.x, point[1] * self.k + self.y

    def invert(self, point: Point) -> Point:
        return (point[0] - self.x) / self.k, (point[1] - self.y) / self.k

    def translate_by(self, dx: float, dy: float) -> "ZoomTransform":
        return ZoomTransform(self.k, self.x + dx, self.y + dy)

    def scale_to(self, k: float, anchor: Point) -> "ZoomTransform":
        """Rescale keeping the scene point under `anchor` (screen) fixed."""
        sx, sy = self.invert(anchor)
        return ZoomTransform(k, anchor[0] - sx * k, anchor[1] - sy * k)

    def scale_by(self, factor: float, anchor: Point) -> "ZoomTransform":
        return self.scale_to(self.k * factor, anchor)

    def to_svg(self) -> str:
        return f"translate({self.x:.3f},{self.y:.3f}) scale({self.k:.5f})"


IDENTITY = ZoomTransform()


class ZoomController:
    """Wheel zoom and background pan over a ZoomTransform."""

    def __init__(
        self,
        *,
        scale_extent: tuple[float, float] = SCALE_EXTENT,
        wheel_step: float = WHEEL_STEP,
    ):
        self.transform = IDENTITY
        self.scale_extent = scale_extent
        self.wheel_step = wheel_step
        self._pan_origin: tuple[Point, ZoomTransform] | None = None
        self._listeners: list[Callable[[ZoomTransform], None]] = []

    def on_change(self, listener: Callable[[ZoomTransform], None]) -> None:
        self._listeners.append(listener)

    def _set(self, transform: ZoomTransform) -> None:
        self.transform = transform
        for listener in self._listeners:
            listener(transform)

    def scale_by(self, factor: float, anchor: Point) -> ZoomTransform:
        lo, hi = self.scale_extent
        k = max(lo, min(hi, self.transform.k * factor))
        self._set(self.transform.scale_to(k, anchor))
        return self.transform

    def wheel(self, delta_y: float, anchor: Point) -> ZoomTransform:
        factor = 1 / self.wheel_step if delta_y > 0 else self.wheel_step
        return self.scale_by(factor, anchor)

    @property
    def panning(self) -> bool:
        return self._pan_origin is not None

    def pan_start(self, pointer: Point) -> None:
        self._pan_origin = (pointer, self.transform)

    def pan_move(self, pointer: Point) -> ZoomTransform:
        if self._pan_origin is None:
            return self.transform
        (x0, y0), start = self._pan_origin
        self._set(start.translate_by(pointer[0] - x0, pointer[1] - y0))
        return self.transform

    def pan_end(self) -> None:
        self._pan_origin = None

    def reset(self) -> None:
        self._pan_origin = None
        self._set(IDENTITY)


class DragController:
    """Pin a node to the pointer while dragging."""

    def __init__(self, simulation: ForceSimulation, zoom: ZoomController):
        self.simulation = simulation
        self.zoom = zoom
        self.active: set[int] = set()

    def start(self, node: Node) -> None:
        if not self.active:
            self.simulation.alpha_target = DRAG_ALPHA_TARGET
            self.simulation.restart()
        self.active.add(id(node))
        node.fx = node.x
        node.fy = node.y

    def move(self, node: Node, pointer: Point) -> None:
        node.fx, node.fy = self.zoom.transform.invert(pointer)

    def end(self, node: Node) -> None:
        self.active.discard(id(node))
        if not self.active:
            self.simulation.alpha_target = 0.0
        node.fx = None
        node.fy = None


def _segment_distance(p: Point, a: Point, b: Point) -> float:
    ax, ay = a
    bx, by = b
    dx, dy = bx - ax, by - ay
    length2 = dx * dx + dy * dy
    if length2 == 0:
        return math.hypot(p[0] - ax, p[1] - ay)
    t = max(0.0, min(1.0, ((p[0] - ax) * dx + (p[1] - ay) * dy) / length2))
    return math.hypot(p[0] - (ax + t * dx), p[1] - (ay + t * dy))


class PointerRouter:
    """Route pointer events to drag, pan, or hover.

    A press on a node starts a drag; a press elsewhere starts a pan. Hover
    shows the tooltip of the node (preferred) or edge under the pointer.
    """

    def __init__(
        self,
        nodes: Sequence[Node],
        edges: Sequence[Edge],
        *,
        radius_of: Callable[[Node], float],
        width_of: Callable[[Edge], float],
        drag: DragController,
        zoom: ZoomController,
        tooltip: Tooltip,
        uses_degree: bool,
    ):
        self.nodes = list(nodes)
        self.edges = list(edges)
        self.radius_of = radius_of
        self.width_of = width_of
        self.drag = drag
        self.zoom = zoom
        self.tooltip = tooltip
        self.uses_degree = uses_degree
        self.dragging: Node | None = None

    def node_at(self, pointer: Point) -> Node | None:
        """Topmost node whose circle contains the pointer."""
        sx, sy = self.zoom.transform.invert(pointer)
        # Later nodes are drawn on top.
        for node in reversed(self.nodes):
            if math.hypot(sx - node.x, sy - node.y) <= self.radius_of(node):
                return node
        return None

    def edge_at(self, pointer: Point) -> Edge | None:
        scene = self.zoom.transform.invert(pointer)
        for edge in reversed(self.edges):
            if edge.source is None or edge.target is None:
                continue
            reach = max(self.width_of(edge) / 2, MIN_EDGE_HIT / self.zoom.transform.k)
            a = (edge.source.x, edge.source.y)
            b = (edge.target.x, edge.target.y)
            if _segment_distance(scene, a, b) <= reach:
                return edge
        return None

    def pointer_down(self, pointer: Point) -> None:
        node = self.node_at(pointer)
        if node is not None:
            self.dragging = node
            self.drag.start(node)
        else:
            self.zoom.pan_start(pointer)

    def pointer_move(self, pointer: Point) -> None:
        if self.dragging is not None:
            self.drag.move(self.dragging, pointer)
            self.tooltip.show(node_tooltip(self.dragging, uses_degree=self.uses_degree), pointer)
            return
        if self.zoom.panning:
            self.zoom.pan_move(pointer)
            return
        self.hover(pointer)

    def pointer_up(self, pointer: Point) -> None:
        if self.dragging is not None:
            self.drag.end(self.dragging)
            self.dragging = None
        self.zoom.pan_end()

    def pointer_leave(self) -> None:
        self.tooltip.hide()

    def wheel(self, delta_y: float, pointer: Point) -> ZoomTransform:
        return self.zoom.wheel(delta_y, pointer)

    def hover(self, pointer: Point) -> None:
        node = self.node_at(pointer)
        if node is not None:
            self.tooltip.show(node_tooltip(node, uses_degree=self.uses_degree), pointer)
            return
        edge = self.edge_at(pointer)
        if edge is not None:
            self.tooltip.show(edge_tooltip(edge), pointer)
            return
        self.tooltip.hide()

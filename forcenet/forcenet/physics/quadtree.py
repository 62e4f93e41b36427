"""Point quadtree used by the many-body force (Barnes-Hut)."""

from __future__ import annotations

from typing import Callable, Iterator, Sequence

from ..models import Node

# Beyond this depth nearby points share a leaf instead of splitting further.
MAX_DEPTH = 32


class Quad:
    """A square cell. Leaves hold points; internal cells hold up to four children."""

    __slots__ = ("x0", "y0", "x1", "y1", "children", "points", "strength", "cx", "cy")

    def __init__(self, x0: float, y0: float, x1: float, y1: float):
        self.x0 = x0
        self.y0 = y0
        self.x1 = x1
        self.y1 = y1
        self.children: list[Quad | None] | None = None
        self.points: list[Node] = []
        self.strength = 0.0
        self.cx = (x0 + x1) / 2
        self.cy = (y0 + y1) / 2

    @property
    def is_leaf(self) -> bool:
        return self.children is None

    @property
    def width(self) -> float:
        return self.x1 - self.x0

    def _child_for(self, x: float, y: float) -> "Quad":
        xm = (self.x0 + self.x1) / 2
        ym = (self.y0 + self.y1) / 2
        right = x >= xm
        bottom = y >= ym
        i = (int(bottom) << 1) | int(right)
        if self.children is None:
            self.children = [None, None, None, None]
        child = self.children[i]
        if child is None:
            child = Quad(
                xm if right else self.x0,
                ym if bottom else self.y0,
                self.x1 if right else xm,
                self.y1 if bottom else ym,
            )
            self.children[i] = child
        return child

    def insert(self, node: Node, depth: int = 0) -> None:
        cell = self
        while True:
            if cell.children is None:
                if not cell.points:
                    cell.points.append(node)
                    return
                first = cell.points[0]
                if (first.x == node.x and first.y == node.y) or depth >= MAX_DEPTH:
                    cell.points.append(node)
                    return
                existing = cell.points
                cell.points = []
                for p in existing:
                    cell._child_for(p.x, p.y).insert(p, depth + 1)
            cell = cell._child_for(node.x, node.y)
            depth += 1

    def iter_children(self) -> Iterator["Quad"]:
        if self.children is not None:
            for child in self.children:
                if child is not None:
                    yield child


class QuadTree:
    """Quadtree over node positions, rebuilt on every many-body application."""

    def __init__(self, root: Quad, size: int):
        self.root = root
        self.size = size

    @classmethod
    def from_nodes(cls, nodes: Sequence[Node]) -> "QuadTree":
        if not nodes:
            return cls(Quad(0.0, 0.0, 1.0, 1.0), 0)
        xs = [n.x for n in nodes]
        ys = [n.y for n in nodes]
        x0, y0 = min(xs), min(ys)
        span = max(max(xs) - x0, max(ys) - y0, 1.0)
        # Pad so points on the far edge fall strictly inside.
        root = Quad(x0, y0, x0 + span * 1.0001, y0 + span * 1.0001)
        for n in nodes:
            root.insert(n)
        return cls(root, len(nodes))

    def accumulate(self, strength_of: Callable[[Node], float]) -> None:
        """Compute each cell's total strength and |strength|-weighted centroid."""
        order: list[Quad] = []
        stack = [self.root]
        while stack:
            quad = stack.pop()
            order.append(quad)
            stack.extend(quad.iter_children())

        for quad in reversed(order):
            if quad.is_leaf:
                total = weight = sx = sy = 0.0
                for p in quad.points:
                    s = strength_of(p)
                    total += s
                    weight += abs(s)
                    sx += abs(s) * p.x
                    sy += abs(s) * p.y
                quad.strength = total
                if weight:
                    quad.cx, quad.cy = sx / weight, sy / weight
                elif quad.points:
                    quad.cx, quad.cy = quad.points[0].x, quad.points[0].y
                continue

            total = weight = sx = sy = 0.0
            for child in quad.iter_children():
                c = abs(child.strength)
                total += child.strength
                weight += c
                sx += c * child.cx
                sy += c * child.cy
            quad.strength = total
            if weight:
                quad.cx, quad.cy = sx / weight, sy / weight

    def visit(self, callback: Callable[[Quad], bool]) -> None:
        """Pre-order traversal; returning True from `callback` skips the cell's children."""
        stack = [self.root]
        while stack:
            quad = stack.pop()
            if not callback(quad):
                stack.extend(quad.iter_children())

    def __len__(self) -> int:
        return self.size

"""Forces combined additively by the simulation on every step."""

from __future__ import annotations

import math
import random
from collections import Counter
from typing import Protocol, Sequence

from ..models import Edge, Node
from .quadtree import Quad, QuadTree


def jiggle(rng: random.Random) -> float:
    return (rng.random() - 0.5) * 1e-6


class Force(Protocol):
    def initialize(self, nodes: Sequence[Node], rng: random.Random) -> None: ...

    def __call__(self, alpha: float) -> None: ...


class LinkForce:
    """Spring between the endpoints of every edge, toward a target distance."""

    def __init__(
        self,
        edges: Sequence[Edge],
        *,
        distance: float = 30.0,
        strength: float | None = None,
        iterations: int = 1,
    ):
        self.edges = list(edges)
        self.distance = distance
        self.strength = strength  # None -> 1 / min(endpoint counts)
        self.iterations = iterations
        self._bias: list[float] = []
        self._strengths: list[float] = []
        self._rng = random.Random()

    def initialize(self, nodes: Sequence[Node], rng: random.Random) -> None:
        """Resolve edge keys to live nodes once and precompute bias/strength."""
        self._rng = rng
        by_id = {n.id: n for n in nodes}
        count: Counter[int] = Counter()
        for i, edge in enumerate(self.edges):
            edge.index = i
            try:
                edge.source = by_id[edge.source_key]
                edge.target = by_id[edge.target_key]
            except KeyError as e:
                raise KeyError(f"node not found: {e.args[0]!r}") from None
            count[edge.source.index] += 1
            count[edge.target.index] += 1

        self._bias = []
        self._strengths = []
        for edge in self.edges:
            cs = count[edge.source.index]
            ct = count[edge.target.index]
            self._bias.append(cs / (cs + ct))
            self._strengths.append(self.strength if self.strength is not None else 1.0 / min(cs, ct))

    def __call__(self, alpha: float) -> None:
        for _ in range(self.iterations):
            for i, edge in enumerate(self.edges):
                s, t = edge.source, edge.target
                x = (t.x + t.vx - s.x - s.vx) or jiggle(self._rng)
                y = (t.y + t.vy - s.y - s.vy) or jiggle(self._rng)
                length = math.sqrt(x * x + y * y)
                length = (length - self.distance) / length * alpha * self._strengths[i]
                x *= length
                y *= length
                b = self._bias[i]
                t.vx -= x * b
                t.vy -= y * b
                s.vx += x * (1 - b)
                s.vy += y * (1 - b)


class ManyBodyForce:
    """Pairwise repulsion (negative strength) or attraction, approximated with Barnes-Hut."""

    def __init__(
        self,
        *,
        strength: float = -30.0,
        theta: float = 0.9,
        distance_min: float = 1.0,
        distance_max: float = math.inf,
    ):
        self.strength = strength
        self.theta2 = theta * theta
        self.distance_min2 = distance_min * distance_min
        self.distance_max2 = distance_max * distance_max
        self.nodes: list[Node] = []
        self._rng = random.Random()

    def initialize(self, nodes: Sequence[Node], rng: random.Random) -> None:
        self.nodes = list(nodes)
        self._rng = rng

    def __call__(self, alpha: float) -> None:
        tree = QuadTree.from_nodes(self.nodes)
        tree.accumulate(lambda _node: self.strength)
        for node in self.nodes:
            tree.visit(lambda quad, node=node: self._apply(quad, node, alpha))

    def _apply(self, quad: Quad, node: Node, alpha: float) -> bool:
        if not quad.strength:
            return True

        dx = quad.cx - node.x
        dy = quad.cy - node.y
        w = quad.width
        dist2 = dx * dx + dy * dy

        # Far enough away: treat the whole cell as one body.
        if w * w / self.theta2 < dist2:
            if dist2 < self.distance_max2:
                if dx == 0:
                    dx = jiggle(self._rng)
                    dist2 += dx * dx
                if dy == 0:
                    dy = jiggle(self._rng)
                    dist2 += dy * dy
                if dist2 < self.distance_min2:
                    dist2 = math.sqrt(self.distance_min2 * dist2)
                node.vx += dx * quad.strength * alpha / dist2
                node.vy += dy * quad.strength * alpha / dist2
            return True

        if not quad.is_leaf:
            return False
        if dist2 >= self.distance_max2:
            return True

        others = [p for p in quad.points if p is not node]
        if not others:
            return True
        if dx == 0:
            dx = jiggle(self._rng)
            dist2 += dx * dx
        if dy == 0:
            dy = jiggle(self._rng)
            dist2 += dy * dy
        if dist2 < self.distance_min2:
            dist2 = math.sqrt(self.distance_min2 * dist2)
        for _ in others:
            scale = self.strength * alpha / dist2
            node.vx += dx * scale
            node.vy += dy * scale
        return True


class CenterForce:
    """Translate all nodes so their centroid sits at (x, y)."""

    def __init__(self, x: float = 0.0, y: float = 0.0, *, strength: float = 1.0):
        self.x = x
        self.y = y
        self.strength = strength
        self.nodes: list[Node] = []

    def initialize(self, nodes: Sequence[Node], rng: random.Random) -> None:
        self.nodes = list(nodes)

    def __call__(self, alpha: float) -> None:
        if not self.nodes:
            return
        n = len(self.nodes)
        sx = (sum(node.x for node in self.nodes) / n - self.x) * self.strength
        sy = (sum(node.y for node in self.nodes) / n - self.y) * self.strength
        for node in self.nodes:
            node.x -= sx
            node.y -= sy

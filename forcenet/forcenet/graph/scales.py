"""Visual encoding scales derived from data extents and style."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Callable, Hashable, Iterable, Sequence

from ..models import Edge, Node
from ..style import StyleConfig
from ..util import is_blank

TABLEAU10 = [
    "#4e79a7",
    "#f28e2c",
    "#e15759",
    "#76b7b2",
    "#59a14f",
    "#edc949",
    "#af7aa1",
    "#ff9da7",
    "#9c755f",
    "#bab0ab",
]
DEFAULT_NODE_COLOR = "#4e79a7"


class LinearScale:
    """Map a continuous domain onto a continuous range (unclamped)."""

    def __init__(self, domain: Sequence[float], range_: Sequence[float]):
        self.domain = (float(domain[0]), float(domain[1]))
        self.range = (float(range_[0]), float(range_[1]))

    def _transform(self, v: float) -> float:
        return v

    def __call__(self, value: float) -> float:
        t0 = self._transform(self.domain[0])
        t1 = self._transform(self.domain[1])
        r0, r1 = self.range
        if t1 == t0:
            return r0
        return r0 + (self._transform(float(value)) - t0) / (t1 - t0) * (r1 - r0)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(domain={self.domain}, range={self.range})"


class SqrtScale(LinearScale):
    """Area-proportional mapping: output is linear in sqrt(value)."""

    def _transform(self, v: float) -> float:
        return math.copysign(math.sqrt(abs(v)), v)


class OrdinalScale:
    """Map labels to palette entries by first-seen order, cycling the palette."""

    def __init__(self, domain: Iterable[Hashable], palette: Sequence[str]):
        if not palette:
            raise ValueError("palette must not be empty")
        self.palette = list(palette)
        self._index: dict[Hashable, int] = {}
        for label in domain:
            self._index.setdefault(label, len(self._index))

    @property
    def domain(self) -> list[Hashable]:
        return list(self._index)

    def __call__(self, label: Hashable) -> str:
        # Unknown labels extend the domain so repeated calls stay stable.
        idx = self._index.setdefault(label, len(self._index))
        return self.palette[idx % len(self.palette)]


class ConstantScale:
    """Single output regardless of input."""

    def __init__(self, value: Any):
        self.value = value

    def __call__(self, _: Any = None) -> Any:
        return self.value


@dataclass
class Scales:
    node_color: Callable[[Any], str]
    link_color: Callable[[Any], str]
    node_size: LinearScale
    link_width: LinearScale


def distinct_labels(values: Iterable[Any]) -> list[Any]:
    """Distinct non-empty labels in first-seen order."""
    seen: dict[Any, None] = {}
    for v in values:
        if not is_blank(v):
            seen.setdefault(v, None)
    return list(seen)


def nice_domain(values: Iterable[float]) -> tuple[float, float]:
    """Extent of `values`; a degenerate extent becomes [0, max or 1]."""
    vals = list(values)
    if not vals:
        return (0.0, 1.0)
    lo, hi = min(vals), max(vals)
    if lo == hi:
        return (0.0, hi or 1.0)
    return (lo, hi)


def make_scales(nodes: Sequence[Node], edges: Sequence[Edge], style: StyleConfig) -> Scales:
    """Build node/link color, node size and link width scales for one refresh."""
    node_groups = distinct_labels(n.group for n in nodes)
    node_color: Callable[[Any], str]
    if node_groups:
        node_color = OrdinalScale(node_groups, style.node_palette or TABLEAU10)
    else:
        node_color = ConstantScale(DEFAULT_NODE_COLOR)

    link_groups = distinct_labels(e.link_group for e in edges)
    link_color: Callable[[Any], str]
    if link_groups:
        link_color = OrdinalScale(link_groups, TABLEAU10)
    else:
        link_color = ConstantScale(style.link_color)

    node_size = SqrtScale(
        nice_domain(n.value for n in nodes),
        (style.node_size_min, style.node_size_max),
    )
    link_width = LinearScale(
        nice_domain(e.weight for e in edges),
        (style.link_width_min, style.link_width_max),
    )
    return Scales(node_color=node_color, link_color=link_color, node_size=node_size, link_width=link_width)

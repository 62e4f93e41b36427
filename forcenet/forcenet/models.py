"""Data models for the network graph."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Hashable, Iterable, Literal

# Host field ids for dimensions and metrics
DimensionId = Literal["source", "target", "group", "extraDim1", "extraDim2", "extraDim3", "extraDim4", "extraDim5"]
MetricId = Literal[
    "edgeWeight",
    "nodeValue",
    "extraMetric1",
    "extraMetric2",
    "extraMetric3",
    "extraMetric4",
    "extraMetric5",
]


@dataclass(eq=False)
class Node:
    """A graph node keyed by a distinct source/target value."""

    id: Hashable
    group: Any = None  # first-seen group label, may be None
    value: float = 0.0  # summed node metric, or degree when no metric is mapped
    degree: int = 0  # edge endpoints touching this node
    index: int = -1  # set by the simulation
    x: float | None = None
    y: float | None = None
    vx: float = 0.0
    vy: float = 0.0
    fx: float | None = None  # fixed position override (drag)
    fy: float | None = None

    @property
    def is_fixed(self) -> bool:
        return self.fx is not None or self.fy is not None

    def __repr__(self) -> str:
        return f"Node(id={self.id!r}, degree={self.degree}, value={self.value})"


@dataclass(eq=False)
class Edge:
    """One row of the edge list. Undirected for layout, directed for display."""

    source_key: Hashable
    target_key: Hashable
    weight: float = 1.0
    link_group: Any = None
    index: int = -1
    source: Node | None = None  # resolved by the link force
    target: Node | None = None

    def __repr__(self) -> str:
        return f"Edge({self.source_key!r} -> {self.target_key!r}, weight={self.weight})"


@dataclass(frozen=True)
class FieldMap:
    """Which row fields hold each graph attribute. Only source/target are required."""

    source: str | None = None
    target: str | None = None
    group: str | None = None
    link_group: str | None = None
    edge_weight: str | None = None
    node_value: str | None = None

    @property
    def is_complete(self) -> bool:
        return bool(self.source) and bool(self.target)

    @classmethod
    def from_payload_fields(
        cls, dimensions: Iterable[dict[str, Any]], metrics: Iterable[dict[str, Any]]
    ) -> "FieldMap":
        """Build from host field descriptors (fixed ids; only extraDim1 is used)."""
        dims = {f.get("id"): f.get("id") for f in dimensions or [] if isinstance(f, dict)}
        mets = {f.get("id"): f.get("id") for f in metrics or [] if isinstance(f, dict)}
        return cls(
            source=dims.get("source"),
            target=dims.get("target"),
            group=dims.get("group"),
            link_group=dims.get("extraDim1"),
            edge_weight=mets.get("edgeWeight"),
            node_value=mets.get("nodeValue"),
        )


@dataclass
class Graph:
    """Deduplicated nodes plus one edge per row."""

    nodes: list[Node] = field(default_factory=list)
    edges: list[Edge] = field(default_factory=list)
    uses_degree: bool = True  # value holds the degree fallback

    @property
    def value_label(self) -> str:
        return "Degree" if self.uses_degree else "Value"

    def node(self, key: Hashable) -> Node | None:
        for n in self.nodes:
            if n.id == key:
                return n
        return None

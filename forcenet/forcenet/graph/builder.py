"""Turn flat rows into a deduplicated node set and an edge list."""

from __future__ import annotations

import logging
from typing import Any, Hashable, Iterable, Mapping

from ..errors import ConfigurationIncomplete, EmptyDataset
from ..models import Edge, FieldMap, Graph, Node
from ..util import coerce_number, is_blank, unwrap_cell

logger = logging.getLogger(__name__)


def build_graph(rows: Iterable[Mapping[str, Any]], field_map: FieldMap) -> Graph:
    """Build a graph from rows in a single pass.

    Each row yields one edge. Nodes are created on first sight of a key and
    accumulate degree (and node value, when mapped) across rows.
    A blank source or target cell is still a key and becomes a node of its own.

    Raises:
        ConfigurationIncomplete: source or target field is not mapped
        EmptyDataset: there are no rows
    """
    if not field_map.is_complete:
        raise ConfigurationIncomplete()

    rows = list(rows or [])
    if not rows:
        raise EmptyDataset()

    by_key: dict[Hashable, Node] = {}
    edges: list[Edge] = []
    blank_rows = 0

    def get_or_create(key: Hashable, row: Mapping[str, Any]) -> Node:
        node = by_key.get(key)
        if node is None:
            group = unwrap_cell(row.get(field_map.group)) if field_map.group else None
            node = Node(id=key, group=None if is_blank(group) else group)
            by_key[key] = node
        return node

    for row in rows:
        source_key = unwrap_cell(row.get(field_map.source))
        target_key = unwrap_cell(row.get(field_map.target))
        if is_blank(source_key) or is_blank(target_key):
            blank_rows += 1
        source = get_or_create(source_key, row)
        target = get_or_create(target_key, row)
        source.degree += 1
        target.degree += 1

        if field_map.node_value:
            amount = coerce_number(unwrap_cell(row.get(field_map.node_value)), 0.0)
            source.value += amount
            target.value += amount

        weight = coerce_number(unwrap_cell(row.get(field_map.edge_weight)), 0.0) if field_map.edge_weight else 1.0
        link_group = unwrap_cell(row.get(field_map.link_group)) if field_map.link_group else None

        edges.append(
            Edge(
                source_key=source_key,
                target_key=target_key,
                weight=weight,
                link_group=None if is_blank(link_group) else link_group,
                index=len(edges),
            )
        )

    if blank_rows:
        logger.warning("%d row(s) have a blank source or target; kept as a blank node", blank_rows)

    nodes = list(by_key.values())

    # Degree is only final after the pass, so the fallback is applied here.
    uses_degree = not field_map.node_value
    if uses_degree:
        for node in nodes:
            node.value = float(node.degree)

    logger.debug("Built graph with %d nodes and %d edges", len(nodes), len(edges))
    return Graph(nodes=nodes, edges=edges, uses_degree=uses_degree)

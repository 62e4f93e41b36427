"""Pytest configuration and fixtures."""

from pathlib import Path

import pytest

from forcenet.graph.builder import build_graph
from forcenet.models import FieldMap, Graph
from forcenet.table import Payload


@pytest.fixture
def triangle_rows() -> list[dict]:
    """Three edges closing a triangle, weighted 2/4/4."""
    return [
        {"src": "A", "dst": "B", "w": "2", "kind": "x"},
        {"src": "B", "dst": "C", "w": "4", "kind": "y"},
        {"src": "A", "dst": "C", "w": "4", "kind": "x"},
    ]


@pytest.fixture
def field_map() -> FieldMap:
    return FieldMap(source="src", target="dst", edge_weight="w")


@pytest.fixture
def triangle_graph(triangle_rows: list[dict], field_map: FieldMap) -> Graph:
    return build_graph(triangle_rows, field_map)


@pytest.fixture
def triangle_payload(triangle_rows: list[dict], field_map: FieldMap) -> Payload:
    return Payload(field_map=field_map, rows=triangle_rows)


@pytest.fixture
def triangle_csv(tmp_path: Path) -> Path:
    """The triangle edge list written as CSV."""
    path = tmp_path / "edges.csv"
    path.write_text(
        "\n".join(
            [
                "src,dst,w,kind",
                "A,B,2,x",
                "B,C,4,y",
                "A,C,4,x",
                "",
            ]
        ),
        encoding="utf-8",
    )
    return path

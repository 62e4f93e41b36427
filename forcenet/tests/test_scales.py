import pytest

from forcenet.graph.builder import build_graph
from forcenet.graph.scales import (
    DEFAULT_NODE_COLOR,
    TABLEAU10,
    LinearScale,
    OrdinalScale,
    SqrtScale,
    make_scales,
    nice_domain,
)
from forcenet.models import FieldMap
from forcenet.style import StyleConfig


def test_sizes_and_widths_stay_within_style_range(triangle_rows) -> None:
    graph = build_graph(triangle_rows, FieldMap(source="src", target="dst", edge_weight="w", node_value="w"))
    style = StyleConfig()
    scales = make_scales(graph.nodes, graph.edges, style)

    for node in graph.nodes:
        assert style.node_size_min <= scales.node_size(node.value) <= style.node_size_max
    for edge in graph.edges:
        assert style.link_width_min <= scales.link_width(edge.weight) <= style.link_width_max

    # Extremes of the data land on the extremes of the range.
    assert scales.node_size(8.0) == pytest.approx(style.node_size_max)
    assert scales.link_width(2.0) == pytest.approx(style.link_width_min)
    assert scales.link_width(4.0) == pytest.approx(style.link_width_max)


def test_sqrt_scale_is_area_proportional() -> None:
    scale = SqrtScale((0, 16), (0, 10))
    assert scale(4) == pytest.approx(5.0)
    assert scale(16) == pytest.approx(10.0)
    # Quadrupling the value doubles the radius.
    assert scale(16) / scale(4) == pytest.approx(2.0)


def test_linear_scale_is_unclamped() -> None:
    scale = LinearScale((0, 10), (0, 1))
    assert scale(5) == pytest.approx(0.5)
    assert scale(20) == pytest.approx(2.0)


def test_degenerate_domains() -> None:
    assert nice_domain([3.0, 3.0]) == (0.0, 3.0)
    assert nice_domain([0.0, 0.0]) == (0.0, 1.0)
    assert nice_domain([]) == (0.0, 1.0)
    assert nice_domain([1.0, 5.0]) == (1.0, 5.0)


def test_equal_nonzero_values_map_to_top_of_range(triangle_graph) -> None:
    # Every node has degree 2, so the size domain becomes [0, 2].
    style = StyleConfig()
    scales = make_scales(triangle_graph.nodes, triangle_graph.edges, style)

    assert scales.node_size.domain == (0.0, 2.0)
    for node in triangle_graph.nodes:
        assert scales.node_size(node.value) == pytest.approx(style.node_size_max)


def test_all_zero_values_map_to_bottom_of_range() -> None:
    rows = [{"s": "A", "t": "B", "v": "0", "w": 0}, {"s": "B", "t": "C", "v": 0, "w": "0"}]
    graph = build_graph(rows, FieldMap(source="s", target="t", node_value="v", edge_weight="w"))
    style = StyleConfig()
    scales = make_scales(graph.nodes, graph.edges, style)

    assert scales.node_size.domain == (0.0, 1.0)
    for node in graph.nodes:
        assert scales.node_size(node.value) == style.node_size_min
    for edge in graph.edges:
        assert scales.link_width(edge.weight) == style.link_width_min


def test_ordinal_scale_cycles_palette_in_first_seen_order() -> None:
    scale = OrdinalScale(["a", "b", "c"], ["#111", "#222"])
    assert scale("a") == "#111"
    assert scale("b") == "#222"
    assert scale("c") == "#111"
    # Unknown labels extend the domain rather than failing.
    assert scale("d") == "#222"
    assert scale.domain == ["a", "b", "c", "d"]


def test_no_groups_means_constant_colors(triangle_graph) -> None:
    style = StyleConfig(link_color="#abc")
    scales = make_scales(triangle_graph.nodes, triangle_graph.edges, style)

    assert scales.node_color(None) == DEFAULT_NODE_COLOR
    assert scales.link_color(None) == "#abc"


def test_group_colors_use_palettes(triangle_rows) -> None:
    rows = [dict(r, grp=r["src"]) for r in triangle_rows]
    graph = build_graph(rows, FieldMap(source="src", target="dst", group="grp", link_group="kind"))
    style = StyleConfig(node_palette=("#000", "#fff"))
    scales = make_scales(graph.nodes, graph.edges, style)

    # Groups are first seen as "A" (row A->B) then "B" (row B->C).
    assert scales.node_color("A") == "#000"
    assert scales.node_color("B") == "#fff"
    # Link colors always come from the categorical palette.
    assert scales.link_color("x") == TABLEAU10[0]
    assert scales.link_color("y") == TABLEAU10[1]

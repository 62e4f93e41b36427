import json

from forcenet.graph.scales import make_scales
from forcenet.style import StyleConfig
from forcenet.view.interaction import ZoomTransform
from forcenet.view.render import node_title, placeholder_html, snapshot, to_json, to_svg, wrap_html


def _place(graph) -> None:
    for i, node in enumerate(graph.nodes):
        node.x, node.y = 100.0 * i, 50.0


def test_snapshot_reads_positions_and_encodings(triangle_graph) -> None:
    _place(triangle_graph)
    for edge in triangle_graph.edges:
        edge.source = triangle_graph.node(edge.source_key)
        edge.target = triangle_graph.node(edge.target_key)
    style = StyleConfig()
    scales = make_scales(triangle_graph.nodes, triangle_graph.edges, style)

    frame = snapshot(triangle_graph, scales, style, alpha=0.5, step=3)

    assert [(n.id, n.x, n.y) for n in frame.nodes] == [("A", 0.0, 50.0), ("B", 100.0, 50.0), ("C", 200.0, 50.0)]
    assert len(frame.links) == 3
    assert frame.links[1].x1 == 100.0 and frame.links[1].x2 == 200.0
    assert all(link.opacity == style.link_opacity for link in frame.links)
    assert all(node.r == scales.node_size(2.0) for node in frame.nodes)
    assert frame.alpha == 0.5 and frame.step == 3


def test_snapshot_skips_unresolved_links(triangle_graph) -> None:
    _place(triangle_graph)
    style = StyleConfig()
    scales = make_scales(triangle_graph.nodes, triangle_graph.edges, style)

    frame = snapshot(triangle_graph, scales, style)
    assert frame.links == []
    assert len(frame.nodes) == 3


def test_node_title_always_says_value(triangle_graph) -> None:
    node = triangle_graph.nodes[0]
    node.group = "team"
    assert node_title(node) == "A\nGroup: team\nValue: 2"


def _frame(triangle_graph):
    _place(triangle_graph)
    for edge in triangle_graph.edges:
        edge.source = triangle_graph.node(edge.source_key)
        edge.target = triangle_graph.node(edge.target_key)
    style = StyleConfig()
    scales = make_scales(triangle_graph.nodes, triangle_graph.edges, style)
    return snapshot(triangle_graph, scales, style, transform=ZoomTransform(k=2.0, x=5.0, y=6.0))


def test_svg_draws_links_under_nodes(triangle_graph) -> None:
    svg = to_svg(_frame(triangle_graph), width=800, height=600, title="Net")

    assert svg.count("<circle") == 3
    assert svg.count("<line") == 3
    assert svg.index("<line") < svg.index("<circle")
    assert 'stroke-opacity="0.35"' in svg
    assert 'stroke="#fff"' in svg
    assert "<title>A\nValue: 2</title>" in svg
    assert 'transform="translate(5.000,6.000) scale(2.00000)"' in svg
    assert "data-tip=" in svg


def test_html_includes_zoom_pan_and_tooltip_script(triangle_graph) -> None:
    svg = to_svg(_frame(triangle_graph), width=800, height=600)
    page = wrap_html(svg, title="t")

    assert "<svg" in page
    assert "wheel" in page
    assert "pointerdown" in page
    assert "12.5" in page and "0.08" in page
    assert "const pad = 12;" in page


def test_json_export_has_no_tooltip_markup(triangle_graph) -> None:
    data = json.loads(to_json(_frame(triangle_graph)))

    assert [n["id"] for n in data["nodes"]] == ["A", "B", "C"]
    assert len(data["links"]) == 3
    assert "tip" not in data["nodes"][0]
    assert data["transform"] == {"k": 2.0, "x": 5.0, "y": 6.0}


def test_placeholder_page_escapes_message() -> None:
    page = placeholder_html('Please map "Source Node" and "Target Node" dimensions.')
    assert "Please map &quot;Source Node&quot;" in page
    assert "<svg" not in page


def test_html_pan_ignores_presses_on_nodes(triangle_graph) -> None:
    page = wrap_html(to_svg(_frame(triangle_graph), width=800, height=600), title="t")

    down = page.index("addEventListener('pointerdown'")
    guard = page.index("if (e.target.closest('circle')) return;")
    start = page.index("panning = { x: e.clientX")
    assert down < guard < start

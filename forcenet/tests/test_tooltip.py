from forcenet.models import Edge, Node
from forcenet.view.tooltip import (
    Tooltip,
    edge_tooltip,
    format_value,
    node_tooltip,
    position_tooltip,
)


def test_node_tooltip_labels_degree_or_value() -> None:
    node = Node(id="A", group="team", value=2.0, degree=2)

    content = node_tooltip(node, uses_degree=True)
    assert content.title == "A"
    assert content.lines == ("Group: team", "Degree: 2")

    content = node_tooltip(Node(id="B", value=3.5), uses_degree=False)
    assert content.lines == ("Value: 3.5",)


def test_edge_tooltip() -> None:
    edge = Edge("A", "B", weight=4.0, link_group="road")
    content = edge_tooltip(edge)

    assert content.title == "A ⇄ B"
    assert content.lines == ("Weight: 4", "Link group: road")
    assert edge_tooltip(Edge("A", "B")).lines == ("Weight: 1",)


def test_tooltip_html_is_escaped() -> None:
    content = node_tooltip(Node(id="<b>", value=1.0), uses_degree=True)
    assert "&lt;b&gt;" in content.to_html()
    assert content.to_text() == "<b>\nDegree: 1"


def test_format_value() -> None:
    assert format_value(2.0) == "2"
    assert format_value(2.5) == "2.5"
    assert format_value("x") == "x"


def test_position_is_pointer_plus_offset() -> None:
    assert position_tooltip((100.0, 50.0)) == (112.0, 62.0)
    # Unclamped positions may overflow the container.
    assert position_tooltip((795.0, 595.0), container=(800.0, 600.0), size=(80.0, 40.0)) == (807.0, 607.0)


def test_clamped_position_stays_inside_container() -> None:
    left, top = position_tooltip((795.0, 595.0), container=(800.0, 600.0), size=(80.0, 40.0), clamp=True)
    assert (left, top) == (720.0, 560.0)


def test_tooltip_show_and_hide() -> None:
    tooltip = Tooltip()
    tooltip.show(edge_tooltip(Edge("A", "B")), (10.0, 10.0))
    assert tooltip.visible
    assert tooltip.position == (22.0, 22.0)

    tooltip.hide()
    assert not tooltip.visible

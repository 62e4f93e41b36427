"""Hover tooltip content and placement. Pure reads of node/edge attributes."""

from __future__ import annotations

import html
from dataclasses import dataclass, field
from typing import Any

from ..models import Edge, Node

TOOLTIP_OFFSET = 12.0
CHAR_WIDTH = 7.0
LINE_HEIGHT = 16.0
PADDING = (8.0, 6.0)


def format_value(value: Any) -> str:
    """Render numbers the way a dashboard shows them: 2.0 -> "2"."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


@dataclass(frozen=True)
class TooltipContent:
    title: str
    lines: tuple[str, ...] = ()

    def to_text(self) -> str:
        return "\n".join((self.title, *self.lines))

    def to_html(self) -> str:
        parts = [f"<div><strong>{html.escape(self.title)}</strong></div>"]
        parts.extend(f"<div>{html.escape(line)}</div>" for line in self.lines)
        return "".join(parts)


def node_tooltip(node: Node, *, uses_degree: bool) -> TooltipContent:
    lines = []
    if node.group:
        lines.append(f"Group: {node.group}")
    label = "Degree" if uses_degree else "Value"
    lines.append(f"{label}: {format_value(node.value)}")
    return TooltipContent(title=str(node.id), lines=tuple(lines))


def edge_tooltip(edge: Edge) -> TooltipContent:
    lines = [f"Weight: {format_value(edge.weight)}"]
    if edge.link_group:
        lines.append(f"Link group: {edge.link_group}")
    return TooltipContent(title=f"{edge.source_key} ⇄ {edge.target_key}", lines=tuple(lines))


def estimate_size(content: TooltipContent) -> tuple[float, float]:
    longest = max(len(line) for line in (content.title, *content.lines))
    return (
        longest * CHAR_WIDTH + 2 * PADDING[0],
        (1 + len(content.lines)) * LINE_HEIGHT + 2 * PADDING[1],
    )


def position_tooltip(
    pointer: tuple[float, float],
    *,
    offset: float = TOOLTIP_OFFSET,
    container: tuple[float, float] | None = None,
    size: tuple[float, float] = (0.0, 0.0),
    clamp: bool = False,
) -> tuple[float, float]:
    """Pointer position plus a fixed offset; optionally kept inside the container."""
    left = pointer[0] + offset
    top = pointer[1] + offset
    if clamp and container is not None:
        left = max(0.0, min(left, container[0] - size[0]))
        top = max(0.0, min(top, container[1] - size[1]))
    return left, top


@dataclass
class Tooltip:
    """Tooltip overlay state for one view."""

    container: tuple[float, float] = (800.0, 600.0)
    clamp: bool = False
    offset: float = TOOLTIP_OFFSET
    visible: bool = False
    content: TooltipContent | None = None
    position: tuple[float, float] = field(default=(0.0, 0.0))

    def show(self, content: TooltipContent, pointer: tuple[float, float]) -> None:
        self.content = content
        self.position = position_tooltip(
            pointer,
            offset=self.offset,
            container=self.container,
            size=estimate_size(content),
            clamp=self.clamp,
        )
        self.visible = True

    def hide(self) -> None:
        self.visible = False

"""Rendering contract and pointer interaction."""

from .interaction import DragController, PointerRouter, ZoomController, ZoomTransform
from .render import Frame, LinkGlyph, NodeGlyph, snapshot, to_json, to_svg, wrap_html
from .session import NetworkView, Placeholder
from .tooltip import Tooltip, TooltipContent, edge_tooltip, node_tooltip

__all__ = [
    "NetworkView",
    "Placeholder",
    "Frame",
    "NodeGlyph",
    "LinkGlyph",
    "snapshot",
    "to_json",
    "to_svg",
    "wrap_html",
    "ZoomTransform",
    "ZoomController",
    "DragController",
    "PointerRouter",
    "Tooltip",
    "TooltipContent",
    "node_tooltip",
    "edge_tooltip",
]

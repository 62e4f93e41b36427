"""Per-frame render snapshot plus SVG/HTML/JSON export of a layout."""

from __future__ import annotations

import html
import json
from dataclasses import asdict, dataclass, field
from typing import Any, Hashable

from ..graph.scales import Scales
from ..models import Graph
from ..style import StyleConfig
from .interaction import IDENTITY, ZoomTransform
from .tooltip import edge_tooltip, format_value, node_tooltip

NODE_STROKE = "#fff"
NODE_STROKE_WIDTH = 1.2
BACKGROUND = "#ffffff"


@dataclass(frozen=True)
class NodeGlyph:
    id: Hashable
    x: float
    y: float
    r: float
    fill: str
    title: str
    tip: str


@dataclass(frozen=True)
class LinkGlyph:
    source: Hashable
    target: Hashable
    x1: float
    y1: float
    x2: float
    y2: float
    width: float
    stroke: str
    opacity: float
    tip: str


@dataclass(frozen=True)
class Frame:
    """Values to draw with for one completed simulation step."""

    nodes: list[NodeGlyph] = field(default_factory=list)
    links: list[LinkGlyph] = field(default_factory=list)
    transform: ZoomTransform = IDENTITY
    alpha: float = 0.0
    step: int = 0


def node_title(node) -> str:
    """Accessibility title text for a node."""
    lines = [str(node.id)]
    if node.group:
        lines.append(f"Group: {node.group}")
    lines.append(f"Value: {format_value(node.value)}")
    return "\n".join(lines)


def snapshot(
    graph: Graph,
    scales: Scales,
    style: StyleConfig,
    *,
    transform: ZoomTransform = IDENTITY,
    alpha: float = 0.0,
    step: int = 0,
) -> Frame:
    """Read current positions and encodings into a Frame."""
    links = []
    for edge in graph.edges:
        s, t = edge.source, edge.target
        if s is None or t is None:
            continue
        links.append(
            LinkGlyph(
                source=edge.source_key,
                target=edge.target_key,
                x1=s.x,
                y1=s.y,
                x2=t.x,
                y2=t.y,
                width=scales.link_width(edge.weight),
                stroke=scales.link_color(edge.link_group),
                opacity=style.link_opacity,
                tip=edge_tooltip(edge).to_html(),
            )
        )

    nodes = [
        NodeGlyph(
            id=node.id,
            x=node.x,
            y=node.y,
            r=scales.node_size(node.value),
            fill=scales.node_color(node.group),
            title=node_title(node),
            tip=node_tooltip(node, uses_degree=graph.uses_degree).to_html(),
        )
        for node in graph.nodes
        if node.x is not None and node.y is not None
    ]
    return Frame(nodes=nodes, links=links, transform=transform, alpha=alpha, step=step)


def to_json(frame: Frame) -> str:
    def clean(d: dict[str, Any]) -> dict[str, Any]:
        d = dict(d)
        d.pop("tip", None)
        for key in ("id", "source", "target"):
            if key in d and not isinstance(d[key], (str, int, float)):
                d[key] = str(d[key])
        return d

    payload = {
        "alpha": frame.alpha,
        "step": frame.step,
        "transform": asdict(frame.transform),
        "nodes": [clean(asdict(n)) for n in frame.nodes],
        "links": [clean(asdict(l)) for l in frame.links],
    }
    return json.dumps(payload, indent=2) + "\n"


def to_svg(frame: Frame, *, width: float, height: float, title: str = "") -> str:
    """Render the frame as a standalone SVG (links under nodes)."""

    def esc(s: Any) -> str:
        return html.escape(str(s), quote=True)

    parts: list[str] = []
    parts.append(
        f'<svg xmlns="http://www.w3.org/2000/svg" width="{width:.0f}" height="{height:.0f}" '
        f'viewBox="0 0 {width:.0f} {height:.0f}" style="background:{BACKGROUND}">'
    )
    if title:
        parts.append(f"<title>{esc(title)}</title>")
    parts.append(f'<g id="scene" transform="{frame.transform.to_svg()}">')

    parts.append('<g id="links" stroke-linecap="round">')
    for link in frame.links:
        parts.append(
            f'<line x1="{link.x1:.2f}" y1="{link.y1:.2f}" x2="{link.x2:.2f}" y2="{link.y2:.2f}" '
            f'stroke="{esc(link.stroke)}" stroke-opacity="{link.opacity:g}" stroke-width="{link.width:.3f}" '
            f'data-tip="{esc(link.tip)}"/>'
        )
    parts.append("</g>")

    parts.append('<g id="nodes">')
    for node in frame.nodes:
        parts.append(
            f'<circle cx="{node.x:.2f}" cy="{node.y:.2f}" r="{node.r:.3f}" fill="{esc(node.fill)}" '
            f'stroke="{NODE_STROKE}" stroke-width="{NODE_STROKE_WIDTH}" data-tip="{esc(node.tip)}">'
            f"<title>{esc(node.title)}</title></circle>"
        )
    parts.append("</g>")

    parts.append("</g>")
    parts.append("</svg>")
    return "\n".join(parts) + "\n"


_PAGE_STYLE = (
    "    html, body { height: 100%; }\n"
    "    body { margin: 0; font-family: system-ui, -apple-system, Segoe UI, Roboto, Helvetica, Arial; }\n"
    "    .wrap { position: relative; height: 100vh; overflow: hidden; }\n"
    "    .placeholder { font: 12px sans-serif; padding: 8px; color: #666; }\n"
    "    .tip { position: absolute; pointer-events: none; padding: 6px 8px; background: rgba(0,0,0,0.75);\n"
    "           color: #fff; border-radius: 6px; font: 12px/1.3 sans-serif; opacity: 0; transition: opacity 120ms ease; }\n"
    "    svg { width: 100%; height: 100%; display: block; touch-action: none; user-select: none; }\n"
)


def placeholder_html(message: str, *, title: str = "forcenet") -> str:
    """Informational page shown instead of a graph."""
    t = html.escape(title, quote=True)
    return (
        "<!doctype html>\n"
        "<html>\n"
        "<head>\n"
        f"  <meta charset=\"utf-8\" />\n  <title>{t}</title>\n"
        f"  <style>\n{_PAGE_STYLE}  </style>\n"
        "</head>\n"
        "<body>\n"
        f"  <div class=\"placeholder\">{html.escape(message)}</div>\n"
        "</body>\n"
        "</html>\n"
    )


def wrap_html(svg: str, *, title: str, tooltip_offset: float = 12.0) -> str:
    """Standalone page: the SVG, wheel zoom, background pan, and hover tooltips.

    The exported layout is static. Presses on a node neither pan nor drag it.
    """
    t = html.escape(title, quote=True)
    return (
        "<!doctype html>\n"
        "<html>\n"
        "<head>\n"
        f"  <meta charset=\"utf-8\" />\n  <title>{t}</title>\n"
        "  <meta name=\"viewport\" content=\"width=device-width, initial-scale=1\" />\n"
        f"  <style>\n{_PAGE_STYLE}  </style>\n"
        "</head>\n"
        "<body>\n"
        "  <div class=\"wrap\" id=\"root\">\n"
        f"{svg}"
        "    <div class=\"tip\" id=\"tip\"></div>\n"
        "  </div>\n"
        "  <script>\n"
        "    (function () {\n"
        "      const root = document.getElementById('root');\n"
        "      const tip = document.getElementById('tip');\n"
        "      const svg = root.querySelector('svg');\n"
        "      const scene = svg && svg.querySelector('#scene');\n"
        "      if (!scene) return;\n"
        f"      const pad = {tooltip_offset:g};\n"
        "      let k = 1, tx = 0, ty = 0;\n"
        "      const apply = () => scene.setAttribute('transform', `translate(${tx},${ty}) scale(${k})`);\n"
        "\n"
        "      let panning = null;\n"
        "      svg.addEventListener('pointerdown', (e) => {\n"
        "        if (e.target.closest('circle')) return;\n"
        "        panning = { x: e.clientX, y: e.clientY, tx, ty };\n"
        "        svg.setPointerCapture(e.pointerId);\n"
        "      });\n"
        "      svg.addEventListener('pointerup', () => { panning = null; });\n"
        "      svg.addEventListener('pointercancel', () => { panning = null; });\n"
        "      svg.addEventListener('pointermove', (e) => {\n"
        "        if (!panning) return;\n"
        "        tx = panning.tx + (e.clientX - panning.x);\n"
        "        ty = panning.ty + (e.clientY - panning.y);\n"
        "        apply();\n"
        "      });\n"
        "\n"
        "      svg.addEventListener('wheel', (e) => {\n"
        "        e.preventDefault();\n"
        "        const rect = svg.getBoundingClientRect();\n"
        "        const px = e.clientX - rect.left, py = e.clientY - rect.top;\n"
        "        const factor = e.deltaY > 0 ? 1 / 1.15 : 1.15;\n"
        "        const nk = Math.max(0.08, Math.min(12.5, k * factor));\n"
        "        const sx = (px - tx) / k, sy = (py - ty) / k;\n"
        "        k = nk; tx = px - sx * k; ty = py - sy * k;\n"
        "        apply();\n"
        "      }, { passive: false });\n"
        "\n"
        "      scene.querySelectorAll('[data-tip]').forEach((el) => {\n"
        "        el.addEventListener('mousemove', (e) => {\n"
        "          const bounds = root.getBoundingClientRect();\n"
        "          tip.innerHTML = el.dataset.tip;\n"
        "          tip.style.left = `${e.clientX - bounds.left + pad}px`;\n"
        "          tip.style.top = `${e.clientY - bounds.top + pad}px`;\n"
        "          tip.style.opacity = '1';\n"
        "        });\n"
        "        el.addEventListener('mouseout', () => { tip.style.opacity = '0'; });\n"
        "      });\n"
        "    })();\n"
        "  </script>\n"
        "</body>\n"
        "</html>\n"
    )

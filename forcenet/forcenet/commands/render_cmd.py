"""Render command - lay out an edge list and export the settled diagram."""

from __future__ import annotations

import html
import json
from pathlib import Path

from rich.console import Console

from ..errors import ForcenetError
from ..host import FileHost
from ..models import FieldMap
from ..view.render import placeholder_html, to_json, to_svg, wrap_html
from ..view.session import NetworkView

DEFAULT_TITLE = "Force-directed network"


def render_view(view: NetworkView, *, fmt: str, title: str = DEFAULT_TITLE) -> str:
    """Serialize the view's current state (graph or placeholder) in `fmt`."""
    if view.placeholder is not None:
        message = view.placeholder.message
        if fmt == "json":
            return json.dumps({"placeholder": message, "reason": view.placeholder.reason}, indent=2) + "\n"
        if fmt == "svg":
            width, height = view.style.canvas
            return (
                f'<svg xmlns="http://www.w3.org/2000/svg" width="{width:.0f}" height="{height:.0f}">'
                f'<text x="8" y="20" font-family="sans-serif" font-size="12" fill="#666">{html.escape(message)}</text>'
                "</svg>\n"
            )
        return placeholder_html(message, title=title)

    frame = view.current_frame()
    if frame is None:
        raise ForcenetError("Nothing to render: no data has been drawn")
    if fmt == "json":
        return to_json(frame)
    width, height = view.style.canvas
    svg = to_svg(frame, width=width, height=height, title=title)
    if fmt == "svg":
        return svg
    return wrap_html(svg, title=title)


def run_render(
    data_path: Path,
    *,
    field_map: FieldMap | None = None,
    style_path: Path | None = None,
    fmt: str = "html",
    out: Path | None = None,
    max_steps: int | None = None,
    seed: int | None = None,
    title: str = DEFAULT_TITLE,
) -> int:
    """Run the layout to convergence and write it out.

    Returns 0 for a rendered graph and 1 when a placeholder was written instead.
    """
    console = Console(stderr=True)

    host = FileHost(data_path, field_map=field_map, style_path=style_path)
    view = NetworkView(seed=seed)
    host.subscribe_to_data(view.draw)

    if view.placeholder is None:
        with console.status("Running layout..."):
            view.settle(max_steps)
        sim = view.simulation
        console.print(
            f"Layout: {len(view.graph.nodes)} nodes, {len(view.graph.edges)} edges, "
            f"{sim.steps} steps (alpha {sim.alpha:.4f})",
            style="dim",
        )
    else:
        console.print(f"[yellow]{view.placeholder.message}[/yellow]")

    text = render_view(view, fmt=fmt, title=title)
    if out:
        out.write_text(text, encoding="utf-8")
        console.print(f"Wrote {fmt} output to {out}", style="green")
    else:
        print(text, end="" if text.endswith("\n") else "\n")

    return 0 if view.placeholder is None else 1

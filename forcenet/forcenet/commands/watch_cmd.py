"""Watch command - re-render the diagram whenever the data or style file changes."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

from rich.console import Console

from ..host import FileHost
from ..models import FieldMap
from ..table import Payload
from ..view.session import NetworkView
from .render_cmd import DEFAULT_TITLE, render_view


def run_watch(
    data_path: Path,
    out: Path,
    *,
    field_map: FieldMap | None = None,
    style_path: Path | None = None,
    fmt: str = "html",
    max_steps: int | None = None,
    seed: int | None = None,
    title: str = DEFAULT_TITLE,
) -> int:
    """
    Render `data_path` to `out`, then re-render on every content change.

    This is a blocking command that runs until interrupted (Ctrl+C). Each
    refresh discards the previous layout and starts a fresh simulation.
    """
    console = Console(stderr=True)
    host = FileHost(data_path, field_map=field_map, style_path=style_path)
    view = NetworkView(seed=seed)

    console.print(f"[bold]Watching[/bold] {data_path}")
    if style_path:
        console.print(f"  Style: {style_path}")
    console.print(f"  Output: {out} ({fmt})")
    console.print()
    console.print("[dim]Press Ctrl+C to stop watching[/dim]")
    console.print()

    def on_payload(payload: Payload) -> None:
        view.draw(payload)
        view.settle(max_steps)
        out.write_text(render_view(view, fmt=fmt, title=title), encoding="utf-8")

        timestamp = datetime.now().strftime("%H:%M:%S")
        if view.placeholder is not None:
            console.print(f"[dim]{timestamp}[/dim] [yellow]{view.placeholder.message}[/yellow]")
        else:
            console.print(
                f"[dim]{timestamp}[/dim] Rendered {len(view.graph.nodes)} nodes, "
                f"{len(view.graph.edges)} edges"
            )

    host.subscribe_to_data(on_payload)

    try:
        host.run_forever()
    except KeyboardInterrupt:
        console.print()
        console.print(f"[bold]Stopped.[/bold] Rendered {view.refreshes} refreshes.")
    return 0

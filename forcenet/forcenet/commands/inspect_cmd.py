"""Inspect command - summarize the graph built from an edge list."""

from __future__ import annotations

import json
from pathlib import Path

from rich.console import Console
from rich.table import Table

from ..errors import GraphBuildError
from ..graph.builder import build_graph
from ..graph.scales import distinct_labels, make_scales
from ..host import FileHost
from ..models import FieldMap, Graph
from ..style import StyleConfig
from ..view.tooltip import format_value


def run_inspect(
    data_path: Path,
    *,
    field_map: FieldMap | None = None,
    style_path: Path | None = None,
    fmt: str = "md",
    out: Path | None = None,
    top: int = 10,
) -> int:
    """Print node/edge counts, top nodes, and the encoding domains."""
    console = Console(stderr=True)

    payload = FileHost(data_path, field_map=field_map, style_path=style_path).load()
    try:
        graph = build_graph(payload.rows, payload.field_map)
    except GraphBuildError as e:
        console.print(f"[yellow]{e}[/yellow]")
        return 1

    summary = summarize_graph(graph, payload.style, title=data_path.name, top=top)

    if fmt == "rich":
        if out:
            rich_console = Console(record=True)
            _print_rich(summary, console=rich_console)
            out.write_text(rich_console.export_text(), encoding="utf-8")
            console.print(f"Wrote summary to {out}", style="green")
        else:
            _print_rich(summary, console=Console())
        return 0

    text = json.dumps(summary, indent=2, sort_keys=True, default=str) + "\n" if fmt == "json" else _to_markdown(summary)
    if out:
        out.write_text(text, encoding="utf-8")
        console.print(f"Wrote summary to {out}", style="green")
    else:
        print(text, end="" if text.endswith("\n") else "\n")
    return 0


def summarize_graph(graph: Graph, style: StyleConfig, *, title: str, top: int) -> dict:
    scales = make_scales(graph.nodes, graph.edges, style)

    def row(n) -> dict:
        return {"id": str(n.id), "group": n.group, "degree": n.degree, "value": n.value}

    by_degree = sorted(graph.nodes, key=lambda n: (-n.degree, str(n.id)))
    by_value = sorted(graph.nodes, key=lambda n: (-n.value, str(n.id)))

    return {
        "title": title,
        "node_count": len(graph.nodes),
        "edge_count": len(graph.edges),
        "value_label": graph.value_label,
        "node_groups": [str(g) for g in distinct_labels(n.group for n in graph.nodes)],
        "link_groups": [str(g) for g in distinct_labels(e.link_group for e in graph.edges)],
        "node_size_domain": list(scales.node_size.domain),
        "link_width_domain": list(scales.link_width.domain),
        "top_degree": [row(n) for n in by_degree[: max(0, top)]],
        "top_value": [row(n) for n in by_value[: max(0, top)]],
    }


def _to_markdown(summary: dict) -> str:
    lines: list[str] = []
    lines.append(f"## {summary['title']}")
    lines.append("")
    lines.append(f"- Nodes: {summary['node_count']}")
    lines.append(f"- Edges: {summary['edge_count']}")
    lines.append(f"- Node size from: {summary['value_label'].lower()}")
    lo, hi = summary["node_size_domain"]
    lines.append(f"- Node size domain: [{format_value(lo)}, {format_value(hi)}]")
    lo, hi = summary["link_width_domain"]
    lines.append(f"- Link width domain: [{format_value(lo)}, {format_value(hi)}]")
    if summary["node_groups"]:
        lines.append(f"- Node groups: {', '.join(summary['node_groups'])}")
    if summary["link_groups"]:
        lines.append(f"- Link groups: {', '.join(summary['link_groups'])}")
    lines.append("")

    def table(title: str, rows: list[dict]) -> None:
        lines.append(f"### {title}")
        lines.append("")
        lines.append(f"| Node | Group | Degree | {summary['value_label']} |")
        lines.append("|---|---|---:|---:|")
        for r in rows:
            lines.append(f"| `{r['id']}` | {r['group'] or ''} | {r['degree']} | {format_value(r['value'])} |")
        lines.append("")

    table("Top degree", summary["top_degree"])
    if summary["value_label"] == "Value":
        table("Top value", summary["top_value"])

    return "\n".join(lines).rstrip() + "\n"


def _print_rich(summary: dict, *, console: Console) -> None:
    console.print(f"[bold]{summary['title']}[/bold]")
    console.print(f"Nodes: {summary['node_count']}  Edges: {summary['edge_count']}")
    console.print()

    def render_table(title: str, rows: list[dict]) -> None:
        t = Table(title=title, show_header=True, header_style="bold")
        t.add_column("Node", style="cyan", no_wrap=True)
        t.add_column("Group")
        t.add_column("Degree", justify="right")
        t.add_column(summary["value_label"], justify="right")
        for r in rows:
            t.add_row(r["id"], str(r["group"] or ""), str(r["degree"]), format_value(r["value"]))
        console.print(t)
        console.print()

    render_table("Top degree", summary["top_degree"])
    if summary["value_label"] == "Value":
        render_table("Top value", summary["top_value"])

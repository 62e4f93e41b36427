"""CLI entrypoint for forcenet."""

import logging
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler

from . import __version__
from .errors import ForcenetError
from .models import FieldMap


def _field_options(f):
    """Options that map row fields onto graph attributes."""
    options = [
        click.option("--source", default=None, metavar="FIELD", help="Field holding the source node key"),
        click.option("--target", default=None, metavar="FIELD", help="Field holding the target node key"),
        click.option("--group", default=None, metavar="FIELD", help="Field holding the node group (colors nodes)"),
        click.option("--link-group", default=None, metavar="FIELD", help="Field holding the link group (colors links)"),
        click.option("--weight", default=None, metavar="FIELD", help="Numeric field for edge weight (link width)"),
        click.option("--value", default=None, metavar="FIELD", help="Numeric field summed into node value (node size)"),
        click.option(
            "--style",
            "style_path",
            type=click.Path(exists=True, dir_okay=False, path_type=Path),
            default=None,
            help="YAML or TOML style file",
        ),
    ]
    for option in reversed(options):
        f = option(f)
    return f


def _field_map(
    source: str | None,
    target: str | None,
    group: str | None,
    link_group: str | None,
    weight: str | None,
    value: str | None,
) -> FieldMap | None:
    """FieldMap from CLI options, or None to keep the mapping carried by the data file."""
    if not any((source, target, group, link_group, weight, value)):
        return None
    return FieldMap(
        source=source,
        target=target,
        group=group,
        link_group=link_group,
        edge_weight=weight,
        node_value=value,
    )


_DATA_ARG = click.argument("data", type=click.Path(exists=True, dir_okay=False, path_type=Path))


@click.group()
@click.version_option(__version__, prog_name="forcenet")
@click.option("--verbose", is_flag=True, help="Enable debug logging")
def cli(verbose: bool) -> None:
    """forcenet - Force-directed network diagrams from edge-list tables.

    Each row of DATA (CSV, or JSON rows / host payload) is one edge. Nodes are
    deduplicated by key, sized by value or degree, and laid out with a
    link/charge/center force simulation.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


@cli.command()
@_DATA_ARG
@_field_options
@click.option(
    "--format",
    "fmt",
    type=click.Choice(["html", "svg", "json"]),
    default="html",
    show_default=True,
    help="Output format",
)
@click.option("--out", type=click.Path(dir_okay=False, path_type=Path), default=None, help="Write output to a file")
@click.option("--max-steps", type=int, default=None, help="Stop the layout after this many steps")
@click.option("--seed", type=int, default=None, help="Random seed for a reproducible layout")
def render(
    data: Path,
    source: str | None,
    target: str | None,
    group: str | None,
    link_group: str | None,
    weight: str | None,
    value: str | None,
    style_path: Path | None,
    fmt: str,
    out: Path | None,
    max_steps: int | None,
    seed: int | None,
) -> None:
    """Run the layout to convergence and export the diagram."""
    from .commands.render_cmd import run_render

    try:
        exit_code = run_render(
            data,
            field_map=_field_map(source, target, group, link_group, weight, value),
            style_path=style_path,
            fmt=fmt,
            out=out,
            max_steps=max_steps,
            seed=seed,
        )
    except ForcenetError as e:
        raise click.ClickException(str(e)) from e
    sys.exit(exit_code)


@cli.command()
@_DATA_ARG
@_field_options
@click.option(
    "--format",
    "fmt",
    type=click.Choice(["md", "json", "rich"]),
    default="md",
    show_default=True,
    help="Output format",
)
@click.option("--top", type=int, default=10, show_default=True, help="Show top N nodes")
@click.option("--out", type=click.Path(dir_okay=False, path_type=Path), default=None, help="Write output to a file")
def inspect(
    data: Path,
    source: str | None,
    target: str | None,
    group: str | None,
    link_group: str | None,
    weight: str | None,
    value: str | None,
    style_path: Path | None,
    fmt: str,
    top: int,
    out: Path | None,
) -> None:
    """Summarize nodes, edges, top nodes and encoding domains."""
    from .commands.inspect_cmd import run_inspect

    try:
        exit_code = run_inspect(
            data,
            field_map=_field_map(source, target, group, link_group, weight, value),
            style_path=style_path,
            fmt=fmt,
            out=out,
            top=top,
        )
    except ForcenetError as e:
        raise click.ClickException(str(e)) from e
    sys.exit(exit_code)


@cli.command()
@_DATA_ARG
@_field_options
@click.option(
    "--format",
    "fmt",
    type=click.Choice(["html", "svg", "json"]),
    default="html",
    show_default=True,
    help="Output format",
)
@click.option("--out", type=click.Path(dir_okay=False, path_type=Path), required=True, help="File to re-render")
@click.option("--max-steps", type=int, default=None, help="Stop each layout after this many steps")
@click.option("--seed", type=int, default=None, help="Random seed for a reproducible layout")
def watch(
    data: Path,
    source: str | None,
    target: str | None,
    group: str | None,
    link_group: str | None,
    weight: str | None,
    value: str | None,
    style_path: Path | None,
    fmt: str,
    out: Path,
    max_steps: int | None,
    seed: int | None,
) -> None:
    """Re-render OUT whenever DATA or the style file changes.

    Runs until interrupted (Ctrl+C).
    """
    from .commands.watch_cmd import run_watch

    try:
        exit_code = run_watch(
            data,
            out,
            field_map=_field_map(source, target, group, link_group, weight, value),
            style_path=style_path,
            fmt=fmt,
            max_steps=max_steps,
            seed=seed,
        )
    except ForcenetError as e:
        raise click.ClickException(str(e)) from e
    sys.exit(exit_code)


def main() -> None:
    cli()


if __name__ == "__main__":
    main()

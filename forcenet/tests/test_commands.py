import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from forcenet.cli import cli
from forcenet.commands.inspect_cmd import run_inspect
from forcenet.commands.render_cmd import render_view, run_render
from forcenet.errors import ForcenetError
from forcenet.models import FieldMap
from forcenet.view.session import NetworkView


def test_render_html(triangle_csv: Path, field_map: FieldMap, tmp_path: Path) -> None:
    out = tmp_path / "net.html"
    code = run_render(triangle_csv, field_map=field_map, fmt="html", out=out, seed=1)

    assert code == 0
    page = out.read_text(encoding="utf-8")
    assert page.startswith("<!doctype html>")
    assert page.count("<circle") == 3
    assert "wheel" in page


def test_render_json_is_reproducible(triangle_csv: Path, field_map: FieldMap, tmp_path: Path) -> None:
    first = tmp_path / "a.json"
    second = tmp_path / "b.json"
    run_render(triangle_csv, field_map=field_map, fmt="json", out=first, seed=3)
    run_render(triangle_csv, field_map=field_map, fmt="json", out=second, seed=3)

    data = json.loads(first.read_text(encoding="utf-8"))
    assert len(data["nodes"]) == 3
    assert data["alpha"] < 0.001
    assert first.read_text(encoding="utf-8") == second.read_text(encoding="utf-8")


def test_render_placeholder_for_incomplete_mapping(triangle_csv: Path, tmp_path: Path) -> None:
    out = tmp_path / "net.html"
    code = run_render(triangle_csv, field_map=FieldMap(source="src"), fmt="html", out=out)

    assert code == 1
    page = out.read_text(encoding="utf-8")
    assert "Please map &quot;Source Node&quot;" in page
    assert "<circle" not in page


def test_render_svg_placeholder_for_empty_data(tmp_path: Path, field_map: FieldMap) -> None:
    data = tmp_path / "empty.csv"
    data.write_text("src,dst,w\n", encoding="utf-8")
    out = tmp_path / "net.svg"

    assert run_render(data, field_map=field_map, fmt="svg", out=out) == 1
    assert "No data." in out.read_text(encoding="utf-8")


def test_inspect_markdown(triangle_csv: Path, field_map: FieldMap, tmp_path: Path) -> None:
    out = tmp_path / "summary.md"
    assert run_inspect(triangle_csv, field_map=field_map, fmt="md", out=out, top=2) == 0

    text = out.read_text(encoding="utf-8")
    assert "- Nodes: 3" in text
    assert "- Edges: 3" in text
    assert "- Node size from: degree" in text
    assert "### Top degree" in text
    assert "### Top value" not in text


def test_inspect_json_with_value_field(triangle_csv: Path, tmp_path: Path) -> None:
    out = tmp_path / "summary.json"
    fm = FieldMap(source="src", target="dst", node_value="w", link_group="kind")
    assert run_inspect(triangle_csv, field_map=fm, fmt="json", out=out, top=1) == 0

    summary = json.loads(out.read_text(encoding="utf-8"))
    assert summary["value_label"] == "Value"
    assert summary["link_groups"] == ["x", "y"]
    assert summary["node_size_domain"] == [6.0, 8.0]
    assert [r["id"] for r in summary["top_value"]] == ["C"]


def test_inspect_incomplete_mapping(triangle_csv: Path) -> None:
    assert run_inspect(triangle_csv, field_map=FieldMap(target="dst")) == 1


def test_cli_render_and_inspect(triangle_csv: Path, tmp_path: Path) -> None:
    runner = CliRunner()
    out = tmp_path / "net.svg"

    result = runner.invoke(
        cli,
        ["render", str(triangle_csv), "--source", "src", "--target", "dst", "--weight", "w",
         "--format", "svg", "--out", str(out), "--seed", "1"],
    )
    assert result.exit_code == 0, result.output
    assert out.read_text(encoding="utf-8").startswith("<svg")

    result = runner.invoke(cli, ["inspect", str(triangle_csv), "--source", "src", "--target", "dst", "--format", "json"])
    assert result.exit_code == 0, result.output
    assert '"node_count": 3' in result.output


def test_cli_uses_mapping_from_host_payload(tmp_path: Path) -> None:
    data = tmp_path / "payload.json"
    data.write_text(
        json.dumps(
            {
                "fields": {"dimensions": [{"id": "source"}, {"id": "target"}], "metrics": []},
                "tables": {"DEFAULT": [{"source": ["A"], "target": ["B"]}]},
            }
        ),
        encoding="utf-8",
    )
    result = CliRunner().invoke(cli, ["inspect", str(data), "--format", "json"])
    assert result.exit_code == 0, result.output
    assert '"edge_count": 1' in result.output


def test_cli_reports_unreadable_data(tmp_path: Path) -> None:
    data = tmp_path / "bad.json"
    data.write_text("{nope", encoding="utf-8")

    result = CliRunner().invoke(cli, ["render", str(data)])
    assert result.exit_code == 1
    assert "Cannot read data file" in result.output


def test_render_view_requires_a_drawn_view() -> None:
    with pytest.raises(ForcenetError, match="Nothing to render"):
        render_view(NetworkView(), fmt="svg")

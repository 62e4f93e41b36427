"""Host payloads and tabular row loading."""

from __future__ import annotations

import csv
import json
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any

from .errors import ForcenetError
from .models import FieldMap
from .style import StyleConfig

DEFAULT_TABLE = "DEFAULT"


@dataclass
class Payload:
    """One data refresh: field mapping, rows, and resolved style."""

    field_map: FieldMap
    rows: list[dict[str, Any]] = field(default_factory=list)
    style: StyleConfig = field(default_factory=StyleConfig)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Payload":
        """
        Build from the host table shape:

            {"fields": {"dimensions": [{"id": "source"}, ...], "metrics": [...]},
             "tables": {"DEFAULT": [row, ...]},
             "style": {"nodeSizeMin": {"value": 4}, ...}}
        """
        fields_ = data.get("fields") or {}
        tables = data.get("tables") or {}
        rows = tables.get(DEFAULT_TABLE) or []
        return cls(
            field_map=FieldMap.from_payload_fields(fields_.get("dimensions") or [], fields_.get("metrics") or []),
            rows=[r for r in rows if isinstance(r, dict)],
            style=StyleConfig.from_mapping(data.get("style")),
        )


def read_csv_rows(path: Path) -> list[dict[str, Any]]:
    """Load rows from a CSV file with a header line."""
    with path.open("r", encoding="utf-8-sig", newline="") as f:
        reader = csv.DictReader(f)
        return [dict(row) for row in reader]


def load_payload(
    data_path: Path,
    *,
    field_map: FieldMap | None = None,
    style: StyleConfig | None = None,
) -> Payload:
    """
    Load a refresh from disk.

    `.json` files may hold a full host payload or a plain list of rows; any
    other file is read as CSV. Explicit `field_map`/`style` override the
    payload's own.
    """
    try:
        if data_path.suffix.lower() == ".json":
            data = json.loads(data_path.read_text(encoding="utf-8"))
            if isinstance(data, dict):
                payload = Payload.from_dict(data)
            elif isinstance(data, list):
                payload = Payload(field_map=FieldMap(), rows=[r for r in data if isinstance(r, dict)])
            else:
                raise ForcenetError(f"{data_path} must contain a payload object or a list of rows")
        else:
            payload = Payload(field_map=FieldMap(), rows=read_csv_rows(data_path))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError, csv.Error) as e:
        raise ForcenetError(f"Cannot read data file {data_path}: {e}") from e

    if field_map is not None:
        payload = replace(payload, field_map=field_map)
    if style is not None:
        payload = replace(payload, style=style)
    return payload

"""Style configuration: control-panel values with their defaults."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Mapping

from .errors import StyleError
from .util import coerce_number

# snake_case field -> host style id
_STYLE_IDS = {
    "node_size_min": "nodeSizeMin",
    "node_size_max": "nodeSizeMax",
    "link_width_min": "linkWidthMin",
    "link_width_max": "linkWidthMax",
    "link_opacity": "linkOpacity",
    "link_distance": "linkDistance",
    "charge": "charge",
    "link_color": "linkColor",
    "node_palette": "nodeColorScale",
    "width": "width",
    "height": "height",
}

MIN_CANVAS = 100.0


@dataclass(frozen=True)
class StyleConfig:
    """Resolved style values. Numeric entries fall back to their defaults."""

    node_size_min: float = 4.0
    node_size_max: float = 26.0
    link_width_min: float = 0.5
    link_width_max: float = 6.0
    link_opacity: float = 0.35
    link_distance: float = 70.0
    charge: float = -180.0
    link_color: str = "#999"
    node_palette: tuple[str, ...] = field(default_factory=tuple)
    width: float = 800.0
    height: float = 600.0

    @property
    def canvas(self) -> tuple[float, float]:
        return max(MIN_CANVAS, self.width or 0.0), max(MIN_CANVAS, self.height or 0.0)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None) -> "StyleConfig":
        """
        Resolve a host style object.

        Entries may be raw values or `{"value": ...}` objects, keyed by the
        host id (`nodeSizeMin`) or the field name (`node_size_min`).
        """
        data = data or {}
        defaults = cls()
        kwargs: dict[str, Any] = {}
        for f in fields(cls):
            raw = _lookup(data, f.name)
            if raw is None:
                continue
            default = getattr(defaults, f.name)
            if f.name == "node_palette":
                kwargs[f.name] = _palette(raw)
            elif f.name == "link_color":
                text = str(raw).strip()
                kwargs[f.name] = text or default
            else:
                kwargs[f.name] = coerce_number(raw, default)
        return cls(**kwargs)


def _lookup(data: Mapping[str, Any], name: str) -> Any:
    for key in (_STYLE_IDS[name], name):
        if key in data:
            raw = data[key]
            if isinstance(raw, Mapping):
                return raw.get("value")
            return raw
    return None


def _palette(raw: Any) -> tuple[str, ...]:
    if isinstance(raw, str):
        raw = raw.split(",")
    if not isinstance(raw, (list, tuple)):
        return ()
    return tuple(str(c).strip() for c in raw if isinstance(c, str) and c.strip())


def load_style(path: Path) -> StyleConfig:
    """Load a style file (YAML or TOML) into a StyleConfig."""
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise StyleError(f"Cannot read style file {path}: {e}") from e

    if path.suffix.lower() == ".toml":
        import tomllib

        try:
            data = tomllib.loads(text)
        except tomllib.TOMLDecodeError as e:
            raise StyleError(f"Invalid TOML in {path}: {e}") from e
    else:
        import yaml

        try:
            data = yaml.safe_load(text) or {}
        except yaml.YAMLError as e:
            raise StyleError(f"Invalid YAML in {path}: {e}") from e

    if not isinstance(data, dict):
        raise StyleError(f"Style file {path} must contain a mapping")
    # Allow the style block to sit under a top-level `style:` key.
    if isinstance(data.get("style"), dict):
        data = data["style"]
    return StyleConfig.from_mapping(data)

"""
Small utilities shared by the ingestion points.

This module intentionally avoids third-party dependencies.
"""

from __future__ import annotations

import math
from decimal import Decimal
from typing import Any


def coerce_number(value: Any, default: float = 0.0) -> float:
    """
    Parse a cell as a finite float.

    Missing cells, blank or non-numeric strings, NaN and infinities all yield
    `default`. Never raises.
    """
    if value is None:
        return default
    if isinstance(value, bool):
        return 1.0 if value else 0.0
    if isinstance(value, (int, float, Decimal)):
        number = float(value)
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return default
        try:
            number = float(text)
        except ValueError:
            return default
    else:
        return default
    if not math.isfinite(number):
        return default
    return number


def unwrap_cell(value: Any) -> Any:
    """Normalize a host cell: `["a"]` -> `"a"`, longer lists -> tuples."""
    if isinstance(value, (list, tuple)):
        if len(value) == 1:
            return unwrap_cell(value[0])
        return tuple(unwrap_cell(v) for v in value)
    return value


def is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and value.strip() == "")

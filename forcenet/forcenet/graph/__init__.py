"""Graph construction and visual encoding."""

from .builder import build_graph
from .scales import LinearScale, OrdinalScale, Scales, SqrtScale, make_scales

__all__ = [
    "build_graph",
    "make_scales",
    "Scales",
    "LinearScale",
    "SqrtScale",
    "OrdinalScale",
]

"""forcenet - force-directed network rendering for tabular edge lists."""

__version__ = "0.1.0"

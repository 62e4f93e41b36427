"""Error types raised by forcenet.

Graph build errors are recoverable: the view turns them into a placeholder
state and the next data refresh starts from scratch.
"""

from __future__ import annotations


class ForcenetError(Exception):
    """Base class for all forcenet errors."""


class GraphBuildError(ForcenetError):
    """The rows could not be turned into a graph."""

    placeholder = "Unable to build graph."

    def __init__(self, message: str | None = None):
        super().__init__(message or self.placeholder)


class ConfigurationIncomplete(GraphBuildError):
    """The source or target field is not mapped."""

    placeholder = 'Please map "Source Node" and "Target Node" dimensions.'


class EmptyDataset(GraphBuildError):
    """There are no usable rows."""

    placeholder = "No data."


class StyleError(ForcenetError):
    """A style file could not be read or is not a mapping."""


class HostAlreadyAttached(ForcenetError):
    """A host bridge was attached more than once."""

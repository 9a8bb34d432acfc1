"""Exception types raised by the analysis engine."""

from __future__ import annotations


class HeapGraphError(Exception):
    """Base class for all heap graph analysis failures."""


class InvalidArgumentError(HeapGraphError, ValueError):
    """A report argument was rejected before touching the graph."""


class GraphLoadError(HeapGraphError):
    """The graph provider could not produce a valid object graph."""

    def __init__(self, message: str = "failed to load heap graph", source: str | None = None):
        if source:
            message = f"{message} from '{source}'"
        super().__init__(message)
        self.source = source


class GraphNotLoadedError(HeapGraphError):
    """A report was requested from a session that has no graph."""

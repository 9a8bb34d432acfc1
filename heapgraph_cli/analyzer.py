"""Analysis session tying the graph provider to the report operations."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, List, Optional

from .aggregation import aggregate_types, filter_by_name, rank_types
from .errors import GraphLoadError, GraphNotLoadedError, InvalidArgumentError
from .graph import ObjectGraph
from .hot_path import extract_hot_path
from .loader import load_graph
from .models import (
    COUNT_COLUMN,
    INCLUSIVE_COLUMN,
    PATH_COLUMNS,
    SIZE_COLUMN,
    TABLE_COLUMNS,
    TYPE_COLUMN,
    PathSegment,
    Report,
    SortMode,
    TreeNode,
    TypeAggregate,
)
from .retention import build_retention_tree, propagate_retained_sizes

logger = logging.getLogger(__name__)


def _check_rows(rows: int) -> None:
    if isinstance(rows, bool) or not isinstance(rows, int) or rows <= 0:
        raise InvalidArgumentError(f"rows must be greater than zero, got {rows!r}")


def _check_name(name: str) -> None:
    if not isinstance(name, str) or not name.strip():
        raise InvalidArgumentError("Search string must be non-empty.")


def _table(aggregates: List[TypeAggregate]) -> Report:
    rows = [
        {
            TYPE_COLUMN: a.name,
            COUNT_COLUMN: a.count,
            SIZE_COLUMN: a.size,
            INCLUSIVE_COLUMN: a.inclusive,
        }
        for a in aggregates
    ]
    return Report(columns=list(TABLE_COLUMNS), rows=rows)


def _chain_tree(chain: List[PathSegment]) -> List[TreeNode]:
    forest: List[TreeNode] = []
    siblings = forest
    for segment in chain:
        node = TreeNode(segment.label, segment.count)
        siblings.append(node)
        siblings = node.children
    return forest


class HeapAnalyzer:
    """One analysis session over one heap graph.

    Every report call rebuilds the retention tree and aggregates from
    scratch; nothing is cached between calls except the loaded graph.
    """

    def __init__(
        self,
        graph: Optional[ObjectGraph] = None,
        loader: Optional[Callable[[], ObjectGraph]] = None,
        source: Optional[str] = None,
    ) -> None:
        self._graph = graph
        self._loader = loader
        self._load_error: Optional[BaseException] = None
        self.source = source

    @classmethod
    def open(cls, path) -> "HeapAnalyzer":
        """Open a snapshot file; the graph is loaded on the first report."""
        if path is None or not str(path).strip():
            raise InvalidArgumentError("Path must be a non-empty string.")
        resolved = Path(path)
        if not resolved.is_file():
            raise FileNotFoundError(f"File not found: {resolved}")
        return cls(loader=lambda: load_graph(resolved), source=str(resolved))

    @classmethod
    def from_graph(cls, graph: ObjectGraph) -> "HeapAnalyzer":
        return cls(graph=graph)

    def __enter__(self) -> "HeapAnalyzer":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def close(self) -> None:
        self._graph = None
        self._loader = None

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def _ensure_loaded(self) -> ObjectGraph:
        if self._graph is not None:
            return self._graph
        if self._load_error is not None:
            raise GraphLoadError(source=self.source) from self._load_error
        if self._loader is None:
            raise GraphNotLoadedError("No heap graph loaded for this session.")

        try:
            self._graph = self._loader()
        except GraphLoadError as exc:
            self._load_error = exc.__cause__ or exc
            raise
        except Exception as exc:
            self._load_error = exc
            raise GraphLoadError(source=self.source) from exc
        return self._graph

    # ------------------------------------------------------------------
    # Reports
    # ------------------------------------------------------------------

    def _ranked(self, mode: SortMode, limit: Optional[int]) -> List[TypeAggregate]:
        graph = self._ensure_loaded()
        tree = build_retention_tree(graph)
        retained = propagate_retained_sizes(graph, tree)
        aggregates = aggregate_types(graph, tree, retained)
        return rank_types(aggregates, mode, limit)

    def top_by_inclusive_size(self, rows: int) -> Report:
        """Types ordered by retained (inclusive) size."""
        _check_rows(rows)
        return _table(self._ranked(SortMode.INCLUSIVE_SIZE, rows))

    def top_by_size(self, rows: int) -> Report:
        """Types ordered by shallow size."""
        _check_rows(rows)
        return _table(self._ranked(SortMode.SIZE, rows))

    def top_by_count(self, rows: int) -> Report:
        """Types ordered by instance count."""
        _check_rows(rows)
        return _table(self._ranked(SortMode.COUNT, rows))

    def by_name(self, name: str, rows: Optional[int] = None) -> Report:
        """Types whose name contains *name* (any case), by inclusive size."""
        _check_name(name)
        if rows is not None:
            _check_rows(rows)
        matched = filter_by_name(self._ranked(SortMode.INCLUSIVE_SIZE, None), name)
        if rows is not None:
            matched = matched[:rows]
        return _table(matched)

    def hot_path(self, name: str) -> List[PathSegment]:
        _check_name(name)
        graph = self._ensure_loaded()
        tree = build_retention_tree(graph)
        return extract_hot_path(graph, tree, name)

    def paths_to_root(self, name: str) -> Report:
        """The dominant retention chain for types matching *name*."""
        return Report(columns=list(PATH_COLUMNS), tree=_chain_tree(self.hot_path(name)), layout="tree")

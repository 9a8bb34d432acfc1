"""Core data models shared by the engine, renderers and tool layers."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class ColumnKind(str, Enum):
    TEXT = "text"
    NUMERIC = "numeric"


class SortMode(str, Enum):
    INCLUSIVE_SIZE = "inclusive_size"
    SIZE = "size"
    COUNT = "count"


@dataclass(frozen=True)
class Column:
    name: str
    kind: ColumnKind = ColumnKind.TEXT


@dataclass
class TreeNode:
    label: str
    value: Optional[int] = None
    children: List["TreeNode"] = field(default_factory=list)


@dataclass
class TypeAggregate:
    """Per-type statistics over all reachable, non-root nodes."""
    name: str
    count: int = 0
    size: int = 0
    inclusive: int = 0


@dataclass(frozen=True)
class PathSegment:
    label: str
    count: int


# Column names used by every table report.
TYPE_COLUMN = "Object Type"
COUNT_COLUMN = "Count"
SIZE_COLUMN = "Size (Bytes)"
INCLUSIVE_COLUMN = "Inclusive Size (Bytes)"
REFERENCE_COUNT_COLUMN = "Reference Count"

TABLE_COLUMNS = [
    Column(TYPE_COLUMN, ColumnKind.TEXT),
    Column(COUNT_COLUMN, ColumnKind.NUMERIC),
    Column(SIZE_COLUMN, ColumnKind.NUMERIC),
    Column(INCLUSIVE_COLUMN, ColumnKind.NUMERIC),
]

PATH_COLUMNS = [
    Column(TYPE_COLUMN, ColumnKind.TEXT),
    Column(REFERENCE_COUNT_COLUMN, ColumnKind.NUMERIC),
]


@dataclass
class Report:
    """Ordered columns plus either flat rows or a small forest, never both."""
    columns: List[Column]
    rows: List[Dict[str, Any]] = field(default_factory=list)
    tree: List[TreeNode] = field(default_factory=list)
    layout: str = "table"

    def __post_init__(self) -> None:
        if self.tree and self.layout != "tree":
            self.layout = "tree"
        if self.layout not in ("table", "tree"):
            raise ValueError(f"Unknown report layout: {self.layout!r}")
        if self.layout == "tree" and self.rows:
            raise ValueError("A report holds either rows or a tree, not both")
        names = [c.name for c in self.columns]
        if len(set(names)) != len(names):
            raise ValueError(f"Duplicate column names: {names}")

    @property
    def is_tree(self) -> bool:
        return self.layout == "tree"

    @property
    def column_names(self) -> List[str]:
        return [c.name for c in self.columns]

    def chain(self) -> List[PathSegment]:
        """Flatten a single-chain tree back into its ordered segments."""
        segments: List[PathSegment] = []
        nodes = self.tree
        while nodes:
            node = nodes[0]
            segments.append(PathSegment(node.label, node.value or 0))
            nodes = node.children
        return segments

    def to_markdown(self) -> str:
        from .markdown import render

        return render(self)

    def __str__(self) -> str:
        return self.to_markdown()

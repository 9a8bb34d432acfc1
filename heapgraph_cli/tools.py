"""Tool-calling interface: snapshot path in, markdown report out.

Each tool validates its arguments with a pydantic schema, opens a fresh
analysis session for the call and returns rendered markdown.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from .analyzer import HeapAnalyzer
from .markdown import render


# ═══════════════════════════════════════════════════════════════
# Tool input schemas (Pydantic v2)
# ═══════════════════════════════════════════════════════════════

class SnapshotInput(BaseModel):
    path: str = Field(..., description="Path to the heap graph snapshot file")

    @field_validator("path")
    @classmethod
    def _path_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Path must be a non-empty string.")
        return value


class RowsInput(SnapshotInput):
    rows: int = Field(..., gt=0, description="Number of rows to include")


class NameInput(SnapshotInput):
    name: str = Field(..., description="Case-insensitive substring to match in type names")

    @field_validator("name")
    @classmethod
    def _name_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Search string must be non-empty.")
        return value


# ═══════════════════════════════════════════════════════════════
# Tools
# ═══════════════════════════════════════════════════════════════

def analyze_top_by_inclusive_size(path: str, rows: int) -> str:
    """Analyze a heap snapshot and return a markdown table of the top types by inclusive size."""
    args = RowsInput(path=path, rows=rows)
    with HeapAnalyzer.open(args.path) as session:
        return render(session.top_by_inclusive_size(args.rows))


def analyze_top_by_size(path: str, rows: int) -> str:
    """Analyze a heap snapshot and return a markdown table of the top types by size (non-inclusive)."""
    args = RowsInput(path=path, rows=rows)
    with HeapAnalyzer.open(args.path) as session:
        return render(session.top_by_size(args.rows))


def analyze_top_by_count(path: str, rows: int) -> str:
    """Analyze a heap snapshot and return a markdown table of the top types by count."""
    args = RowsInput(path=path, rows=rows)
    with HeapAnalyzer.open(args.path) as session:
        return render(session.top_by_count(args.rows))


def analyze_by_name(path: str, name: str) -> str:
    """Search for types by name (case-insensitive contains) and return a markdown table sorted by inclusive size."""
    args = NameInput(path=path, name=name)
    with HeapAnalyzer.open(args.path) as session:
        return render(session.by_name(args.name))


def paths_to_root(path: str, name: str) -> str:
    """Return the dominant retention path to the GC roots for matching types as a tree."""
    args = NameInput(path=path, name=name)
    with HeapAnalyzer.open(args.path) as session:
        return render(session.paths_to_root(args.name))


TOOLS = [
    analyze_top_by_inclusive_size,
    analyze_top_by_size,
    analyze_top_by_count,
    analyze_by_name,
    paths_to_root,
]

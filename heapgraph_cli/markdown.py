"""Markdown table and box-drawing tree rendering for reports."""

from __future__ import annotations

import io
from typing import Any, Dict, List, TextIO

from .models import ColumnKind, Report, TreeNode


def format_value(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, int) and not isinstance(value, bool):
        return f"{value:,}"
    return str(value)


def write_table(report: Report, stream: TextIO) -> None:
    """Write *report* rows as a padded markdown table."""
    widths: Dict[str, int] = {c.name: len(c.name) for c in report.columns}
    cells: List[Dict[str, str]] = []
    for row in report.rows:
        formatted = {c.name: format_value(row.get(c.name)) for c in report.columns}
        for name, text in formatted.items():
            widths[name] = max(widths[name], len(text))
        cells.append(formatted)

    def pad(text: str, column) -> str:
        width = widths[column.name]
        return text.rjust(width) if column.kind == ColumnKind.NUMERIC else text.ljust(width)

    stream.write(" | ".join(pad(c.name, c) for c in report.columns) + "\n")
    separators = [
        "-" * (widths[c.name] - 1) + ":" if c.kind == ColumnKind.NUMERIC else "-" * widths[c.name]
        for c in report.columns
    ]
    stream.write(" | ".join(separators) + "\n")
    for formatted in cells:
        stream.write(" | ".join(pad(formatted[c.name], c) for c in report.columns) + "\n")


def write_tree(report: Report, stream: TextIO) -> None:
    """Write *report*'s forest using box-drawing connectors."""
    _write_nodes(report.tree, stream, "")


def _write_nodes(nodes: List[TreeNode], stream: TextIO, prefix: str) -> None:
    top_level = prefix == ""
    for index, node in enumerate(nodes):
        last = index == len(nodes) - 1
        connector = "├── " if top_level or not last else "└── "
        suffix = f" (Count: {format_value(node.value)})" if node.value is not None else ""
        stream.write(f"{prefix}{connector}{node.label}{suffix}\n")
        if node.children:
            _write_nodes(node.children, stream, prefix + ("│   " if top_level or not last else "    "))


def render(report: Report) -> str:
    buffer = io.StringIO()
    if report.is_tree:
        write_tree(report, buffer)
    else:
        write_table(report, buffer)
    return buffer.getvalue()

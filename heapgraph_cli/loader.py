"""JSON heap-graph snapshot provider.

Snapshot layout::

    {
      "version": 1,
      "root": 0,
      "types": ["[root]", "App.Page", ...],
      "nodes": [{"size": 0, "type": 0, "refs": [1, 2]}, ...]
    }

Files ending in ``.gz`` are read and written gzip-compressed.
"""

from __future__ import annotations

import gzip
import json
import logging
from pathlib import Path
from typing import Any, Dict, List

from .errors import GraphLoadError
from .graph import ObjectGraph

logger = logging.getLogger(__name__)

FORMAT_VERSION = 1


def _open_text(path: Path, mode: str):
    if path.suffix == ".gz":
        return gzip.open(path, mode + "t", encoding="utf-8")
    return open(path, mode, encoding="utf-8")


def graph_from_payload(payload: Dict[str, Any]) -> ObjectGraph:
    """Materialize an :class:`ObjectGraph` from a decoded snapshot payload."""
    if not isinstance(payload, dict):
        raise ValueError("Snapshot must be a JSON object")

    version = payload.get("version", FORMAT_VERSION)
    if version != FORMAT_VERSION or isinstance(version, bool):
        raise ValueError(f"Unsupported snapshot version {version!r}, expected {FORMAT_VERSION}")

    types = payload.get("types")
    nodes = payload.get("nodes")
    if not isinstance(types, list) or not isinstance(nodes, list):
        raise ValueError("Snapshot requires 'types' and 'nodes' arrays")

    sizes: List[int] = []
    type_ids: List[int] = []
    edges: List[List[int]] = []
    for index, node in enumerate(nodes):
        if not isinstance(node, dict):
            raise ValueError(f"Node {index} is not an object")
        if "size" not in node or "type" not in node:
            raise ValueError(f"Node {index} is missing 'size' or 'type'")
        refs = node.get("refs", [])
        if not isinstance(refs, list):
            raise ValueError(f"Node {index} has non-list 'refs'")
        sizes.append(node["size"])
        type_ids.append(node["type"])
        edges.append(refs)

    return ObjectGraph(sizes, type_ids, edges, types, root_index=payload.get("root", 0))


def graph_to_payload(graph: ObjectGraph) -> Dict[str, Any]:
    nodes = []
    for index in range(graph.node_count):
        entry: Dict[str, Any] = {"size": graph.size(index), "type": graph.type_id(index)}
        refs = graph.children(index)
        if refs:
            entry["refs"] = list(refs)
        nodes.append(entry)
    return {
        "version": FORMAT_VERSION,
        "root": graph.root_index,
        "types": [graph.type_name(t) for t in range(graph.type_count)],
        "nodes": nodes,
    }


def load_graph(path: Path) -> ObjectGraph:
    """Load a snapshot file, wrapping every failure in :class:`GraphLoadError`."""
    path = Path(path)
    try:
        with _open_text(path, "r") as fh:
            payload = json.load(fh)
        graph = graph_from_payload(payload)
    except (OSError, EOFError, ValueError, TypeError) as exc:
        # json.JSONDecodeError and gzip.BadGzipFile are both covered here.
        raise GraphLoadError(source=str(path)) from exc

    logger.info(
        "Loaded heap graph from %s: %d nodes, %d edges, %d types",
        path,
        graph.node_count,
        graph.edge_count,
        graph.type_count,
    )
    return graph


def save_graph(graph: ObjectGraph, path: Path) -> None:
    path = Path(path)
    with _open_text(path, "w") as fh:
        json.dump(graph_to_payload(graph), fh, indent=1)
    logger.debug("Saved %r to %s", graph, path)

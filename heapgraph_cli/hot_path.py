"""Hot-path extraction: the dominant retention chain for a set of types."""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Dict, List

from .graph import ObjectGraph
from .models import PathSegment
from .retention import RetentionTree

logger = logging.getLogger(__name__)


def is_pseudo_type(name: str) -> bool:
    """Synthetic bookkeeping nodes have no name or a bracketed one."""
    return not name or name.startswith("[")


def matching_nodes(graph: ObjectGraph, tree: RetentionTree, substring: str) -> List[int]:
    needle = substring.lower()
    matches = []
    for node in range(graph.node_count):
        if node == tree.root or not tree.is_reachable(node):
            continue
        if needle in graph.node_type_name(node).lower():
            matches.append(node)
    return matches


def path_to_root(graph: ObjectGraph, tree: RetentionTree, node: int) -> List[str]:
    """Type names from *node* up to, but excluding, the root."""
    names: List[str] = []
    current = node
    while current is not None and current != tree.root:
        name = graph.node_type_name(current)
        if not is_pseudo_type(name):
            names.append(name)
        current = tree.parents[current]
    return names


def majority_chain(paths: List[List[str]]) -> List[PathSegment]:
    """Reduce many leaf-to-root paths to one by voting at each depth.

    At every depth the most common type name among the surviving paths wins
    (ties go to the smaller name) and only the paths that voted for it
    survive into the next depth.
    """
    chain: List[PathSegment] = []
    live = [p for p in paths if p]
    depth = 0
    while live:
        groups: Dict[str, List[List[str]]] = defaultdict(list)
        for path in live:
            if len(path) > depth:
                groups[path[depth]].append(path)
        if not groups:
            break
        name, members = min(groups.items(), key=lambda item: (-len(item[1]), item[0]))
        chain.append(PathSegment(name, len(members)))
        live = members
        depth += 1
    return chain


def extract_hot_path(graph: ObjectGraph, tree: RetentionTree, substring: str) -> List[PathSegment]:
    matches = matching_nodes(graph, tree, substring)
    paths = [p for p in (path_to_root(graph, tree, n) for n in matches) if p]
    logger.debug("Hot path for %r: %d matches, %d usable paths", substring, len(matches), len(paths))
    return majority_chain(paths)

"""Retention tree construction and retained size propagation.

The retention tree is a first-discovery spanning tree over the object
graph: an iterative depth-first walk from the root records, for every node,
the node it was first reached from. This approximates the dominator tree
the way common heap-snapshot tooling does. A node reachable along several
paths is attributed to whichever path the walk explores first, so a
different edge order can produce a different (equally valid) tree.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional

from .graph import ObjectGraph

logger = logging.getLogger(__name__)


@dataclass
class RetentionTree:
    """Parent links plus the postorder the walk produced.

    ``parents[n]`` is ``None`` for the root and for unreached nodes.
    ``postorder`` lists every reached node with children before their
    parent; the root is always last.
    """
    root: int
    parents: List[Optional[int]]
    postorder: List[int]

    def parent(self, node: int) -> Optional[int]:
        return self.parents[node]

    def is_reachable(self, node: int) -> bool:
        return node == self.root or self.parents[node] is not None

    @property
    def reachable_count(self) -> int:
        return len(self.postorder)


def build_retention_tree(graph: ObjectGraph) -> RetentionTree:
    """Walk the graph from its root and assign each node one retainer."""
    node_count = graph.node_count
    root = graph.root_index
    parents: List[Optional[int]] = [None] * node_count
    visited = bytearray(node_count)
    postorder: List[int] = []

    visited[root] = 1
    # Each frame is [node, index of the next child to examine].
    stack = [[root, 0]]
    while stack:
        frame = stack[-1]
        node, position = frame
        children = graph.children(node)
        if position < len(children):
            frame[1] = position + 1
            child = children[position]
            if visited[child]:
                continue
            visited[child] = 1
            parents[child] = node
            stack.append([child, 0])
        else:
            postorder.append(node)
            stack.pop()

    logger.debug("Retention tree reached %d of %d nodes", len(postorder), node_count)
    return RetentionTree(root=root, parents=parents, postorder=postorder)


def propagate_retained_sizes(graph: ObjectGraph, tree: RetentionTree) -> List[int]:
    """Return the inclusive size of every node's retention subtree.

    Unreached nodes keep their shallow size; they are never summed into
    anything and the aggregators skip them.
    """
    retained = [graph.size(n) for n in range(graph.node_count)]
    for node in tree.postorder:
        parent = tree.parents[node]
        if parent is not None:
            retained[parent] += retained[node]
    return retained

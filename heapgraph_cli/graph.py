"""Read-only object graph consumed by the analysis engine.

The graph is a dense, index-addressed view of a heap snapshot: every node
has a shallow size in bytes, a type id and an ordered list of outgoing
references. One designated root node anchors reachability.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Sequence, Tuple

logger = logging.getLogger(__name__)


class ObjectGraph:
    """Immutable node/edge/type view of a heap snapshot."""

    def __init__(
        self,
        sizes: Sequence[int],
        type_ids: Sequence[int],
        edges: Sequence[Sequence[int]],
        type_names: Sequence[str],
        root_index: int = 0,
    ) -> None:
        node_count = len(sizes)
        if len(type_ids) != node_count or len(edges) != node_count:
            raise ValueError(
                f"Node arrays disagree: {node_count} sizes, {len(type_ids)} type ids, {len(edges)} edge lists"
            )
        if isinstance(root_index, bool) or not isinstance(root_index, int):
            raise ValueError(f"Root index must be an integer, got {root_index!r}")
        if not 0 <= root_index < node_count:
            raise ValueError(f"Root index {root_index} outside [0, {node_count})")
        for type_id, name in enumerate(type_names):
            if not isinstance(name, str):
                raise ValueError(f"Type {type_id} has non-string name {name!r}")

        for index, size in enumerate(sizes):
            if isinstance(size, bool) or not isinstance(size, int) or size < 0:
                raise ValueError(f"Node {index} has invalid size {size!r}")
        for index, type_id in enumerate(type_ids):
            if isinstance(type_id, bool) or not isinstance(type_id, int) or not 0 <= type_id < len(type_names):
                raise ValueError(f"Node {index} references unknown type id {type_id!r}")
        for index, targets in enumerate(edges):
            for target in targets:
                if isinstance(target, bool) or not isinstance(target, int) or not 0 <= target < node_count:
                    raise ValueError(f"Node {index} references unknown node {target!r}")

        self._sizes: Tuple[int, ...] = tuple(sizes)
        self._type_ids: Tuple[int, ...] = tuple(type_ids)
        self._edges: Tuple[Tuple[int, ...], ...] = tuple(tuple(t) for t in edges)
        self._type_names: Tuple[str, ...] = tuple(type_names)
        self._root_index = root_index

    @property
    def node_count(self) -> int:
        return len(self._sizes)

    @property
    def root_index(self) -> int:
        return self._root_index

    @property
    def type_count(self) -> int:
        return len(self._type_names)

    def size(self, node: int) -> int:
        return self._sizes[node]

    def type_id(self, node: int) -> int:
        return self._type_ids[node]

    def children(self, node: int) -> Tuple[int, ...]:
        return self._edges[node]

    def type_name(self, type_id: int) -> str:
        return self._type_names[type_id]

    def node_type_name(self, node: int) -> str:
        return self._type_names[self._type_ids[node]]

    @property
    def edge_count(self) -> int:
        return sum(len(t) for t in self._edges)

    def __repr__(self) -> str:
        return (
            f"ObjectGraph(nodes={self.node_count}, edges={self.edge_count}, "
            f"types={self.type_count}, root={self._root_index})"
        )


class GraphBuilder:
    """Incrementally assemble an :class:`ObjectGraph`.

    Type names are interned: adding the same name twice returns the same id.
    The first node added becomes the root unless ``root`` is passed to
    :meth:`build`.
    """

    def __init__(self) -> None:
        self._type_names: List[str] = []
        self._type_index: dict = {}
        self._sizes: List[int] = []
        self._type_ids: List[int] = []
        self._edges: List[List[int]] = []

    def add_type(self, name: str) -> int:
        if name not in self._type_index:
            self._type_index[name] = len(self._type_names)
            self._type_names.append(name)
        return self._type_index[name]

    def add_node(self, type_name: str, size: int = 0, refs: Iterable[int] = ()) -> int:
        self._sizes.append(size)
        self._type_ids.append(self.add_type(type_name))
        self._edges.append(list(refs))
        return len(self._sizes) - 1

    def add_edge(self, src: int, dst: int) -> None:
        self._edges[src].append(dst)

    def build(self, root: int = 0) -> ObjectGraph:
        graph = ObjectGraph(self._sizes, self._type_ids, self._edges, self._type_names, root_index=root)
        logger.debug("Built %r", graph)
        return graph

"""Per-type aggregation of counts, shallow sizes and retained sizes."""

from __future__ import annotations

import logging
from typing import Callable, Dict, List, Optional, Tuple

from .graph import ObjectGraph
from .models import SortMode, TypeAggregate
from .retention import RetentionTree

logger = logging.getLogger(__name__)


def aggregate_types(graph: ObjectGraph, tree: RetentionTree, retained: List[int]) -> Dict[str, TypeAggregate]:
    """Group every reached, non-root node by type name.

    A node contributes its retained size to its type's inclusive total only
    when its retainer has a different type name. In a run of same-typed
    objects (linked list cells, nested dictionaries) only the outermost one
    counts, so the run's subtree is not summed once per link.
    """
    by_type: Dict[str, TypeAggregate] = {}
    for node in tree.postorder:
        if node == tree.root:
            continue
        name = graph.node_type_name(node)
        agg = by_type.get(name)
        if agg is None:
            agg = by_type[name] = TypeAggregate(name=name)
        agg.count += 1
        agg.size += graph.size(node)

        parent = tree.parents[node]
        if parent is not None and graph.node_type_name(parent) == name:
            continue
        agg.inclusive += retained[node]

    logger.debug("Aggregated %d reachable nodes into %d types", tree.reachable_count - 1, len(by_type))
    return by_type


_SORT_KEYS: Dict[SortMode, Callable[[TypeAggregate], Tuple]] = {
    SortMode.INCLUSIVE_SIZE: lambda a: (-a.inclusive, -a.size, a.name),
    SortMode.SIZE: lambda a: (-a.size, -a.inclusive, a.name),
    SortMode.COUNT: lambda a: (-a.count, -a.size, -a.inclusive, a.name),
}


def rank_types(
    aggregates: Dict[str, TypeAggregate],
    mode: SortMode = SortMode.INCLUSIVE_SIZE,
    limit: Optional[int] = None,
) -> List[TypeAggregate]:
    """Sort aggregates for *mode*, then keep at most *limit* rows."""
    ranked = sorted(aggregates.values(), key=_SORT_KEYS[SortMode(mode)])
    if limit is not None:
        ranked = ranked[:limit]
    return ranked


def filter_by_name(ranked: List[TypeAggregate], substring: str) -> List[TypeAggregate]:
    """Keep aggregates whose name contains *substring*, ignoring case."""
    needle = substring.lower()
    return [a for a in ranked if needle in a.name.lower()]

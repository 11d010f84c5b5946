"""Shortest-path computation using Dijkstra's algorithm.

The priority queue is a ``heapq`` binary heap with lazy deletion: an
improved distance pushes a new entry and stale entries are skipped when
popped. Heap entries carry an insertion counter so that equal distances
are settled in discovery order.
"""

from __future__ import annotations

import heapq
import itertools
import math
from typing import Dict, List, Optional, Set, Tuple

from ..domain.errors import DataIntegrityError, NegativeWeightError, NodeNotFoundError
from ..domain.models import Graph, ShortestPathResult, ShortestPathTree
from .path import reconstruct_path


def shortest_path_tree(
    graph: Graph, source: int, target: Optional[int] = None
) -> ShortestPathTree:
    """Compute best distances and predecessors from ``source``.

    Parameters
    ----------
    graph:
        Route graph, possibly congestion-adjusted.
    source:
        Identifier of the departure node.
    target:
        Optional node at which to stop once its distance is final.

    Returns
    -------
    ShortestPathTree
        Distances for every vertex (``math.inf`` if not reached) and the
        predecessor of each reached vertex.

    Raises
    ------
    NodeNotFoundError
        If ``source`` is not a vertex of the graph.
    NegativeWeightError
        If an edge cost is negative or not finite.
    DataIntegrityError
        If an edge leads to a node that is not a vertex of the graph.
    """
    if source not in graph:
        raise NodeNotFoundError(f"Source node not in graph: {source}", node_id=source)

    distances: Dict[int, float] = {node_id: math.inf for node_id in graph}
    previous: Dict[int, Tuple[int, int]] = {}
    distances[source] = 0.0

    counter = itertools.count()
    heap: List[Tuple[float, int, int]] = [(0.0, next(counter), source)]
    settled: Set[int] = set()

    while heap:
        current_distance, _, u = heapq.heappop(heap)

        if u in settled:
            continue

        settled.add(u)

        if u == target:
            break

        for edge in graph[u]:
            if not edge.cost >= 0 or math.isinf(edge.cost):
                raise NegativeWeightError(
                    f"Invalid cost {edge.cost} on link {edge.link_id}",
                    link_id=edge.link_id,
                    cost=edge.cost,
                )
            v = edge.to_node_id
            if v not in distances:
                raise DataIntegrityError(
                    f"Link {edge.link_id} leads to unknown node {v}",
                    link_id=edge.link_id,
                    node_id=v,
                )
            new_distance = current_distance + edge.cost
            if new_distance < distances[v]:
                distances[v] = new_distance
                previous[v] = (u, edge.link_id)
                heapq.heappush(heap, (new_distance, next(counter), v))

    return ShortestPathTree(
        source=source,
        distances=distances,
        predecessors=previous,
        settled=frozenset(settled),
    )


def dijkstra(
    graph: Graph, start: int, end: int, early_exit: bool = True
) -> ShortestPathResult:
    """Compute the shortest path between two nodes.

    If no path exists, returns a result with ``total_cost == math.inf``
    and no steps.
    """
    if end not in graph:
        raise NodeNotFoundError(f"Target node not in graph: {end}", node_id=end)

    tree = shortest_path_tree(graph, start, end if early_exit else None)
    total = tree.distance_to(end)
    if math.isinf(total):
        return ShortestPathResult(source_id=start, target_id=end, total_cost=math.inf)

    return ShortestPathResult(
        source_id=start,
        target_id=end,
        total_cost=total,
        steps=reconstruct_path(tree, end),
    )

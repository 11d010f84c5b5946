"""Path reconstruction from a shortest-path tree."""

from __future__ import annotations

from typing import List

from ..domain.errors import GraphInvariantError
from ..domain.models import PathStep, ShortestPathTree


def reconstruct_path(tree: ShortestPathTree, target: int) -> tuple[PathStep, ...]:
    """Walk predecessors from ``target`` back to the tree's source.

    Returns the steps ordered from source to target, or an empty tuple
    when ``target`` is unreachable. Each step's cost is the distance
    gained over that step, so step costs add up to the target distance.
    """
    if target == tree.source or not tree.reaches(target):
        return ()

    steps: List[PathStep] = []
    current = target
    seen = {current}

    while current != tree.source:
        entry = tree.predecessors.get(current)
        if entry is None:
            return ()
        previous, link_id = entry
        if previous in seen:
            raise GraphInvariantError(
                f"Predecessor cycle detected at node {previous}"
            )
        seen.add(previous)
        steps.append(
            PathStep(
                from_node_id=previous,
                to_node_id=current,
                link_id=link_id,
                segment_cost=tree.distances[current] - tree.distances[previous],
            )
        )
        current = previous

    steps.reverse()
    return tuple(steps)

"""Congestion-aware re-weighting of the route graph.

Edges leading into a node that hosts a point of interest get their cost
scaled by ``1 + ratio * penalty_factor`` where ``ratio`` is the spot's
occupancy over its capacity. Topology is never changed.
"""

from __future__ import annotations

from typing import Dict, Iterable, List

from ..domain.errors import DataIntegrityError
from ..domain.models import Edge, Graph, PointOfInterest

DEFAULT_PENALTY_FACTOR = 0.5


def congestion_multiplier(
    spot: PointOfInterest, penalty_factor: float = DEFAULT_PENALTY_FACTOR
) -> float:
    """Cost multiplier for edges entering the node of ``spot``.

    Spots without a known capacity are not penalised. The ratio is
    clamped to [0, 1] so an over-reported occupancy cannot push the
    penalty beyond ``penalty_factor``.
    """
    ratio = spot.occupancy_ratio
    if ratio is None:
        return 1.0
    ratio = min(max(ratio, 0.0), 1.0)
    return 1.0 + ratio * penalty_factor


def apply_congestion(
    graph: Graph,
    points_of_interest: Iterable[PointOfInterest],
    penalty_factor: float = DEFAULT_PENALTY_FACTOR,
) -> Graph:
    """Return a copy of ``graph`` with congestion-adjusted edge costs.

    Parameters
    ----------
    graph:
        Base graph as produced by ``build_graph``.
    points_of_interest:
        Occupancy snapshot. Spots without a node are ignored.
    penalty_factor:
        Maximum relative penalty for a fully occupied destination.

    Returns
    -------
    Graph
        New graph with the same vertices and edges; only costs differ.

    Raises
    ------
    DataIntegrityError
        If a spot references a node that is not a vertex of ``graph``.
    """
    if penalty_factor < 0:
        raise ValueError(f"Penalty factor must be non-negative, got {penalty_factor}")

    multipliers: Dict[int, float] = {}
    for spot in points_of_interest:
        if spot.node_id is None:
            continue
        if spot.node_id not in graph:
            raise DataIntegrityError(
                f"Point of interest {spot.id} references unknown node {spot.node_id}",
                node_id=spot.node_id,
            )
        multiplier = congestion_multiplier(spot, penalty_factor)
        if multiplier != 1.0:
            multipliers[spot.node_id] = multiplier

    adjusted: Dict[int, List[Edge]] = {}
    for node_id, edges in graph.items():
        adjusted[node_id] = [
            Edge(edge.to_node_id, edge.cost * multipliers[edge.to_node_id], edge.link_id)
            if edge.to_node_id in multipliers
            else edge
            for edge in edges
        ]
    return adjusted

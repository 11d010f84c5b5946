"""Graph-related utilities for representing the venue map.

This subpackage contains modules to build an in-memory graph from node
and link records, re-weight it for congestion, and run path-finding
algorithms on top of that graph.
"""

from .builder import build_graph, outgoing_edges, summarize_graph
from .congestion import DEFAULT_PENALTY_FACTOR, apply_congestion, congestion_multiplier
from .dijkstra import dijkstra, shortest_path_tree
from .path import reconstruct_path

__all__ = [
    "build_graph",
    "outgoing_edges",
    "summarize_graph",
    "apply_congestion",
    "congestion_multiplier",
    "DEFAULT_PENALTY_FACTOR",
    "dijkstra",
    "shortest_path_tree",
    "reconstruct_path",
]

"""Routing ports - Abstraction for shortest-path computation."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from ..domain.models import Graph, ShortestPathResult


class RouteSolverPort(Protocol):
    """Port for route computation.

    Implementation: adapters/graph/dijkstra_solver.py

    The solver computes optimal paths through the route graph.
    """

    def solve(self, graph: Graph, source: int, target: int) -> ShortestPathResult:
        """Find the shortest path between two nodes.

        Args:
            graph: The route graph, possibly congestion-adjusted.
            source: Source node id.
            target: Target node id.

        Returns:
            ShortestPathResult; ``found`` is False when no path exists.
        """
        ...

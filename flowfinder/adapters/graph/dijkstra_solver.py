"""Dijkstra Route Solver adapter.

This adapter wraps the engine in graph/dijkstra.py and adds logging.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from ...domain.models import Graph, ShortestPathResult
from ...graph.dijkstra import dijkstra


@dataclass
class DijkstraRouteSolver:
    """Route solver using Dijkstra's shortest path algorithm.

    This adapter implements RouteSolverPort.

    Attributes:
        early_exit: Stop as soon as the target distance is final
    """

    early_exit: bool = True
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def solve(self, graph: Graph, source: int, target: int) -> ShortestPathResult:
        """Find the shortest path between two nodes.

        Args:
            graph: The route graph.
            source: Source node id.
            target: Target node id.

        Returns:
            ShortestPathResult; ``found`` is False when no path exists.

        Raises:
            NodeNotFoundError: If source or target is not in the graph.
            NegativeWeightError: If the graph has an invalid edge cost.
        """
        self._logger.debug(
            "Solving route",
            extra={"source": source, "target": target, "nodes": len(graph)},
        )

        result = dijkstra(graph, source, target, early_exit=self.early_exit)

        if not result.found:
            self._logger.info(
                "No route found",
                extra={"source": source, "target": target},
            )
            return result

        self._logger.info(
            "Route found",
            extra={
                "source": source,
                "target": target,
                "steps": len(result.steps),
                "total_cost": result.total_cost,
            },
        )
        return result

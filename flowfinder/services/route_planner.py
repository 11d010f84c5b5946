"""Route planner service - Main orchestrator.

Each planning request reads one snapshot of the map records, builds the
route graph, optionally re-weights it for congestion, solves it and
decorates the result for display. No state is shared between requests.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field, replace
from typing import Dict, Optional

from ..config import RoutingConfig, get_config
from ..domain.errors import (
    DataIntegrityError,
    FlowFinderError,
    InvalidRouteRequestError,
    NodeNotFoundError,
    PointOfInterestNotFoundError,
)
from ..domain.models import (
    AvailableLink,
    DistanceComparison,
    GraphSummary,
    Link,
    MapSnapshot,
    Node,
    PlannedRoute,
    PointOfInterest,
    ShortestPathResult,
)
from ..graph.builder import build_graph, outgoing_edges, summarize_graph
from ..graph.congestion import apply_congestion
from ..ports.records import MapRecordRepositoryPort
from ..ports.routing import RouteSolverPort


def find_nearest_node(snapshot: MapSnapshot, x: float, y: float) -> Optional[Node]:
    """Node closest to ``(x, y)`` by straight-line distance.

    A linear scan; ties go to the node listed first.
    """
    nearest: Optional[Node] = None
    best = math.inf
    for node in snapshot.nodes:
        distance = node.distance_to(x, y)
        if distance < best:
            best = distance
            nearest = node
    return nearest


@dataclass
class RoutePlannerService:
    """Main service for planning routes across the venue.

    This service orchestrates a planning request:
    1. Request validation
    2. Graph construction from a record snapshot
    3. Optional congestion weighting
    4. Route computation and reconstruction
    5. Decoration with node names and walking time

    Attributes:
        repository: Supplies node, link and point-of-interest records
        route_solver: Computes shortest paths
        config: Routing policy (congestion penalty, walking speed)
    """

    repository: MapRecordRepositoryPort
    route_solver: RouteSolverPort
    config: RoutingConfig = field(default_factory=lambda: get_config().routing)

    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def plan_route(
        self,
        source_id: int,
        target_id: int,
        congestion_aware: bool = False,
    ) -> PlannedRoute:
        """Plan a route between two nodes.

        Args:
            source_id: Departure node.
            target_id: Arrival node.
            congestion_aware: Penalise edges into crowded points of interest.

        Returns:
            PlannedRoute; ``found`` is False when the target is unreachable.

        Raises:
            InvalidRouteRequestError: If source equals target.
            NodeNotFoundError: If either node does not exist.
            DataIntegrityError: If a link references a missing node.
        """
        self._logger.info(
            "Planning route",
            extra={
                "source": source_id,
                "target": target_id,
                "congestion_aware": congestion_aware,
            },
        )
        self._require_distinct(source_id, target_id)

        snapshot = self.repository.snapshot()
        nodes = snapshot.node_index()
        self._require_node(nodes, source_id, "Source")
        self._require_node(nodes, target_id, "Target")

        return self._plan(snapshot, nodes, source_id, target_id, congestion_aware)

    def plan_route_to_point_of_interest(
        self,
        source_id: int,
        point_of_interest_id: int,
        congestion_aware: bool = False,
    ) -> PlannedRoute:
        """Plan a route from a node to a point of interest.

        The target is the node associated with the point of interest or,
        when it has none, the node nearest to its map coordinates.

        Raises:
            PointOfInterestNotFoundError: If the point of interest is unknown
                or the map has no nodes.
            InvalidRouteRequestError: If the source is already the target node.
            NodeNotFoundError: If the source node does not exist.
        """
        snapshot = self.repository.snapshot()
        nodes = snapshot.node_index()
        self._require_node(nodes, source_id, "Source")

        spot = self._require_point_of_interest(snapshot, point_of_interest_id)
        target = self._resolve_point_of_interest_node(snapshot, nodes, spot)
        self._require_distinct(source_id, target.id)

        route = self._plan(snapshot, nodes, source_id, target.id, congestion_aware)
        return replace(route, point_of_interest=spot)

    def plan_route_between_points_of_interest(
        self,
        start_point_of_interest_id: int,
        end_point_of_interest_id: int,
        congestion_aware: bool = False,
    ) -> PlannedRoute:
        """Plan a route between the nodes of two points of interest."""
        if start_point_of_interest_id == end_point_of_interest_id:
            raise InvalidRouteRequestError(
                "Start and end points of interest must differ",
                source_id=start_point_of_interest_id,
                target_id=end_point_of_interest_id,
            )

        snapshot = self.repository.snapshot()
        nodes = snapshot.node_index()
        start = self._resolve_point_of_interest_node(
            snapshot, nodes, self._require_point_of_interest(snapshot, start_point_of_interest_id)
        )
        end_spot = self._require_point_of_interest(snapshot, end_point_of_interest_id)
        end = self._resolve_point_of_interest_node(snapshot, nodes, end_spot)
        self._require_distinct(start.id, end.id)

        route = self._plan(snapshot, nodes, start.id, end.id, congestion_aware)
        return replace(route, point_of_interest=end_spot)

    def plan_route_safe(
        self,
        source_id: int,
        target_id: int,
        congestion_aware: bool = False,
    ) -> tuple[Optional[PlannedRoute], Optional[str]]:
        """Plan a route, returning an error message instead of raising.

        Returns:
            Tuple of (PlannedRoute or None, error message or None).
        """
        try:
            route = self.plan_route(source_id, target_id, congestion_aware)
        except InvalidRouteRequestError as e:
            return None, f"Invalid request: {e.message}"
        except NodeNotFoundError as e:
            return None, f"Unknown node: {e.node_id}"
        except DataIntegrityError as e:
            return None, f"Map data error: {e.message}"
        except FlowFinderError as e:
            self._logger.exception("Route planning failed")
            return None, f"Error: {e}"

        if not route.found:
            return route, f"No path found between {source_id} and {target_id}"
        return route, None

    def nearest_node(self, x: float, y: float) -> Node:
        """Node nearest to a map coordinate.

        Raises:
            NodeNotFoundError: If the map has no nodes.
        """
        node = find_nearest_node(self.repository.snapshot(), x, y)
        if node is None:
            raise NodeNotFoundError("Map has no nodes")
        return node

    def available_links(self, node_id: int) -> tuple[AvailableLink, ...]:
        """Links a visitor standing at ``node_id`` can walk along."""
        snapshot = self.repository.snapshot()
        nodes = snapshot.node_index()
        self._require_node(nodes, node_id, "Node")

        links = {link.id: link for link in snapshot.links}
        graph = build_graph(snapshot.nodes, snapshot.links)
        return tuple(
            AvailableLink(
                link_id=edge.link_id,
                to_node=nodes[edge.to_node_id],
                distance=links[edge.link_id].distance,
                cost=edge.cost,
            )
            for edge in outgoing_edges(graph, node_id)
        )

    def compare_distance(self, from_node_id: int, to_node_id: int) -> DistanceComparison:
        """Compare the straight-line distance with a direct link, if any."""
        snapshot = self.repository.snapshot()
        nodes = snapshot.node_index()
        from_node = self._require_node(nodes, from_node_id, "Source")
        to_node = self._require_node(nodes, to_node_id, "Target")

        direct_link: Optional[Link] = None
        for link in snapshot.links:
            forward = link.from_node_id == from_node_id and link.to_node_id == to_node_id
            backward = (
                not link.is_directed
                and link.from_node_id == to_node_id
                and link.to_node_id == from_node_id
            )
            if forward or backward:
                direct_link = link
                break

        return DistanceComparison(
            from_node=from_node,
            to_node=to_node,
            direct_distance=from_node.distance_to(to_node.x, to_node.y),
            link_id=direct_link.id if direct_link else None,
            link_distance=direct_link.distance if direct_link else None,
        )

    def describe_graph(self) -> GraphSummary:
        """Summarise the route graph built from the current records."""
        snapshot = self.repository.snapshot()
        graph = build_graph(snapshot.nodes, snapshot.links)
        summary = summarize_graph(graph, link_count=len(snapshot.links))
        return replace(
            summary,
            points_of_interest_with_node=tuple(
                spot.id for spot in snapshot.points_of_interest if spot.node_id is not None
            ),
        )

    def format_route(self, route: PlannedRoute) -> str:
        """Format a planned route as a human-readable string."""
        if not route.found:
            return (
                f"No path found between {route.result.source_id} "
                f"and {route.result.target_id}"
            )

        names = " -> ".join(node.name for node in route.nodes)
        lines = [f"Shortest path: {names}", f"Total distance: {route.base_distance:g}"]
        if route.congestion_aware:
            lines.append(f"Weighted cost: {route.total_cost:g}")
            extra = route.extra_cost
            if extra:
                lines.append(f"Avoids congestion, adding {extra:g} to the route cost")
        if route.estimated_walking_time_hours is not None:
            minutes = route.estimated_walking_time_hours * 60
            lines.append(f"Estimated walking time: {minutes:.0f} min")
        return "\n".join(lines)

    def _plan(
        self,
        snapshot: MapSnapshot,
        nodes: Dict[int, Node],
        source_id: int,
        target_id: int,
        congestion_aware: bool,
    ) -> PlannedRoute:
        base_graph = build_graph(snapshot.nodes, snapshot.links)
        self._logger.debug(
            "Graph built",
            extra={"nodes": len(base_graph), "links": len(snapshot.links)},
        )

        graph = base_graph
        if congestion_aware:
            graph = apply_congestion(
                base_graph,
                snapshot.points_of_interest,
                penalty_factor=self.config.congestion_penalty,
            )

        result = self.route_solver.solve(graph, source_id, target_id)

        baseline_cost: Optional[float] = None
        if congestion_aware:
            baseline_cost = self.route_solver.solve(base_graph, source_id, target_id).total_cost

        if not result.found:
            self._logger.info(
                "No route",
                extra={"source": source_id, "target": target_id},
            )
            return PlannedRoute(
                result=result,
                congestion_aware=congestion_aware,
                baseline_cost=baseline_cost,
            )

        result = self._decorate(result, nodes)
        links = {link.id: link for link in snapshot.links}
        base_distance = float(sum(links[step.link_id].distance for step in result.steps))
        base_cost = float(sum(links[step.link_id].cost for step in result.steps))
        route = PlannedRoute(
            result=result,
            nodes=tuple(nodes[node_id] for node_id in result.node_ids),
            congestion_aware=congestion_aware,
            base_distance=base_distance,
            base_cost=base_cost,
            baseline_cost=baseline_cost,
            estimated_walking_time_hours=base_distance / self.config.walking_speed,
        )
        self._logger.info(
            "Route planned",
            extra={
                "source": source_id,
                "target": target_id,
                "steps": len(result.steps),
                "total_cost": result.total_cost,
                "base_distance": base_distance,
            },
        )
        return route

    @staticmethod
    def _decorate(result: ShortestPathResult, nodes: Dict[int, Node]) -> ShortestPathResult:
        steps = tuple(
            replace(
                step,
                from_name=nodes[step.from_node_id].name,
                to_name=nodes[step.to_node_id].name,
            )
            for step in result.steps
        )
        return replace(result, steps=steps)

    @staticmethod
    def _require_distinct(source_id: int, target_id: int) -> None:
        if source_id == target_id:
            raise InvalidRouteRequestError(
                "Source and target must differ",
                source_id=source_id,
                target_id=target_id,
            )

    @staticmethod
    def _require_node(nodes: Dict[int, Node], node_id: int, role: str) -> Node:
        node = nodes.get(node_id)
        if node is None:
            raise NodeNotFoundError(f"{role} node not found: {node_id}", node_id=node_id)
        return node

    @staticmethod
    def _require_point_of_interest(snapshot: MapSnapshot, spot_id: int) -> PointOfInterest:
        spot = snapshot.point_of_interest_index().get(spot_id)
        if spot is None:
            raise PointOfInterestNotFoundError(
                f"Point of interest not found: {spot_id}",
                point_of_interest_id=spot_id,
            )
        return spot

    def _resolve_point_of_interest_node(
        self,
        snapshot: MapSnapshot,
        nodes: Dict[int, Node],
        spot: PointOfInterest,
    ) -> Node:
        if spot.node_id is not None:
            node = nodes.get(spot.node_id)
            if node is None:
                raise DataIntegrityError(
                    f"Point of interest {spot.id} references unknown node {spot.node_id}",
                    node_id=spot.node_id,
                )
            return node

        node = find_nearest_node(snapshot, spot.x, spot.y)
        if node is None:
            raise PointOfInterestNotFoundError(
                f"No node to place point of interest {spot.id} on",
                point_of_interest_id=spot.id,
            )
        self._logger.debug(
            "Point of interest resolved to nearest node",
            extra={"point_of_interest_id": spot.id, "node_id": node.id},
        )
        return node

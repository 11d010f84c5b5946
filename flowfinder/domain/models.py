"""Immutable domain models for the venue route planner.

All models are frozen dataclasses with slots. Nodes, links and points of
interest are read-only snapshots of the records owned by the surrounding
CRUD layer; the routing types are created per planning request and
discarded afterwards.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Mapping, Optional, Sequence

from .errors import CapacityExceededError


class CongestionLevel(Enum):
    """Coarse occupancy label for a point of interest."""

    UNKNOWN = "unknown"
    EMPTY = "empty"
    QUIET = "quiet"
    MODERATE = "moderate"
    CROWDED = "crowded"
    VERY_CROWDED = "very_crowded"
    FULL = "full"

    @classmethod
    def from_ratio(cls, ratio: Optional[float]) -> CongestionLevel:
        if ratio is None:
            return cls.UNKNOWN
        if ratio >= 1.0:
            return cls.FULL
        if ratio >= 0.8:
            return cls.VERY_CROWDED
        if ratio >= 0.6:
            return cls.CROWDED
        if ratio >= 0.4:
            return cls.MODERATE
        if ratio >= 0.2:
            return cls.QUIET
        return cls.EMPTY


@dataclass(frozen=True, slots=True)
class Node:
    """A point on the venue map.

    Attributes:
        id: Unique node identifier
        name: Display name shown to visitors
        x: Horizontal map coordinate
        y: Vertical map coordinate
        congestion: Informational congestion indicator
        point_of_interest_id: Associated point of interest, if any
    """

    id: int
    name: str
    x: float = 0.0
    y: float = 0.0
    congestion: int = 0
    point_of_interest_id: Optional[int] = None

    def distance_to(self, x: float, y: float) -> float:
        """Straight-line distance to a map coordinate."""
        return math.hypot(x - self.x, y - self.y)


@dataclass(frozen=True, slots=True)
class Link:
    """A weighted connection between two nodes.

    Attributes:
        id: Link identifier
        from_node_id: Source node
        to_node_id: Destination node
        distance: Base walking distance
        weight: Routing weight, defaults to ``distance`` when unset
        is_directed: When False the link is walkable both ways at equal cost
    """

    id: int
    from_node_id: int
    to_node_id: int
    distance: float
    weight: Optional[float] = None
    is_directed: bool = False

    def __post_init__(self) -> None:
        """Validate that distance and weight are positive and finite."""
        if not math.isfinite(self.distance) or self.distance <= 0:
            raise ValueError(
                f"Link {self.id} distance must be positive, got {self.distance}"
            )
        if self.weight is not None and (
            not math.isfinite(self.weight) or self.weight <= 0
        ):
            raise ValueError(
                f"Link {self.id} weight must be positive, got {self.weight}"
            )

    @property
    def cost(self) -> float:
        """Effective routing cost of the link."""
        return self.distance if self.weight is None else self.weight


@dataclass(frozen=True, slots=True)
class PointOfInterest:
    """An attraction with an occupancy/capacity pair.

    Attributes:
        id: Point of interest identifier
        name: Display name
        node_id: Node hosting this point of interest, if associated
        x: Horizontal map coordinate
        y: Vertical map coordinate
        current_occupancy: Visitors currently present
        max_capacity: Maximum number of visitors (0 means unknown)
        is_open: Whether the attraction is currently open
    """

    id: int
    name: str
    node_id: Optional[int] = None
    x: float = 0.0
    y: float = 0.0
    current_occupancy: int = 0
    max_capacity: int = 0
    is_open: bool = True

    def __post_init__(self) -> None:
        if self.current_occupancy < 0:
            raise ValueError(
                f"Occupancy cannot be negative, got {self.current_occupancy}"
            )

    @property
    def occupancy_ratio(self) -> Optional[float]:
        """Occupancy divided by capacity, or None when capacity is unknown."""
        if self.max_capacity <= 0:
            return None
        return self.current_occupancy / self.max_capacity

    @property
    def occupancy_percent(self) -> float:
        ratio = self.occupancy_ratio
        return 0.0 if ratio is None else ratio * 100

    @property
    def congestion_level(self) -> CongestionLevel:
        return CongestionLevel.from_ratio(self.occupancy_ratio)

    def with_visitors_added(self, count: int) -> PointOfInterest:
        """Return a copy with ``count`` more visitors.

        Raises:
            CapacityExceededError: If the new occupancy exceeds capacity.
        """
        if count < 0:
            raise ValueError(f"Visitor count must be non-negative, got {count}")
        if self.current_occupancy + count > self.max_capacity:
            raise CapacityExceededError(
                f"Capacity of {self.name} exceeded",
                point_of_interest_id=self.id,
                current=self.current_occupancy,
                requested=count,
                capacity=self.max_capacity,
            )
        return replace(self, current_occupancy=self.current_occupancy + count)

    def with_visitors_removed(self, count: int) -> PointOfInterest:
        """Return a copy with ``count`` fewer visitors.

        Raises:
            ValueError: If the occupancy would drop below zero.
        """
        if count < 0:
            raise ValueError(f"Visitor count must be non-negative, got {count}")
        if self.current_occupancy - count < 0:
            raise ValueError(
                f"Cannot remove {count} visitors from {self.name}, "
                f"only {self.current_occupancy} present"
            )
        return replace(self, current_occupancy=self.current_occupancy - count)


@dataclass(frozen=True, slots=True)
class Edge:
    """Outgoing adjacency entry of the route graph."""

    to_node_id: int
    cost: float
    link_id: int


# Maps node id -> outgoing edges, in link order
Graph = Mapping[int, Sequence[Edge]]


@dataclass(frozen=True, slots=True)
class MapSnapshot:
    """Node, link and point-of-interest records read for one request."""

    nodes: tuple[Node, ...] = field(default_factory=tuple)
    links: tuple[Link, ...] = field(default_factory=tuple)
    points_of_interest: tuple[PointOfInterest, ...] = field(default_factory=tuple)

    def node_index(self) -> dict[int, Node]:
        return {node.id: node for node in self.nodes}

    def point_of_interest_index(self) -> dict[int, PointOfInterest]:
        return {spot.id: spot for spot in self.points_of_interest}


@dataclass(frozen=True, slots=True)
class PathStep:
    """One traversal step of a route.

    Attributes:
        from_node_id: Node the step starts at
        to_node_id: Node the step ends at
        link_id: Link traversed
        segment_cost: Cost of this step
        from_name: Display name of the start node, when resolved
        to_name: Display name of the end node, when resolved
    """

    from_node_id: int
    to_node_id: int
    link_id: int
    segment_cost: float
    from_name: Optional[str] = None
    to_name: Optional[str] = None


@dataclass(frozen=True, slots=True)
class ShortestPathTree:
    """Distances and predecessors computed from a single source.

    Attributes:
        source: Source node id
        distances: Best known distance per node (``math.inf`` if unreached)
        predecessors: node -> (previous node, link id) along the best path
        settled: Nodes whose distance is final
    """

    source: int
    distances: Mapping[int, float]
    predecessors: Mapping[int, tuple[int, int]]
    settled: frozenset[int] = field(default_factory=frozenset)

    def distance_to(self, node_id: int) -> float:
        return self.distances.get(node_id, math.inf)

    def reaches(self, node_id: int) -> bool:
        return math.isfinite(self.distance_to(node_id))


@dataclass(frozen=True, slots=True)
class ShortestPathResult:
    """Result of a shortest-path computation between two nodes.

    Attributes:
        source_id: Source node
        target_id: Target node
        total_cost: Total cost, ``math.inf`` when no path exists
        steps: Ordered steps from source to target
    """

    source_id: int
    target_id: int
    total_cost: float
    steps: tuple[PathStep, ...] = field(default_factory=tuple)

    @property
    def found(self) -> bool:
        """Check if a path to the target exists."""
        return math.isfinite(self.total_cost)

    @property
    def node_ids(self) -> tuple[int, ...]:
        """Node ids visited in order, source included."""
        if not self.steps:
            return (self.source_id,) if self.found else ()
        return (self.steps[0].from_node_id,) + tuple(s.to_node_id for s in self.steps)

    @property
    def link_ids(self) -> tuple[int, ...]:
        return tuple(step.link_id for step in self.steps)


@dataclass(frozen=True, slots=True)
class PlannedRoute:
    """Route returned by the planning service.

    Attributes:
        result: Raw shortest-path result (costs possibly congestion-weighted)
        nodes: Resolved nodes along the path, source first
        congestion_aware: Whether congestion weighting was applied
        base_distance: Physical length of the chosen path (sum of link distances)
        base_cost: Routing cost of the chosen path without congestion weighting
        baseline_cost: Cost of the best path without congestion weighting,
            reported for congestion-aware queries
        estimated_walking_time_hours: ``base_distance`` / walking speed
        point_of_interest: Destination point of interest, for POI queries
    """

    result: ShortestPathResult
    nodes: tuple[Node, ...] = field(default_factory=tuple)
    congestion_aware: bool = False
    base_distance: float = math.inf
    base_cost: float = math.inf
    baseline_cost: Optional[float] = None
    estimated_walking_time_hours: Optional[float] = None
    point_of_interest: Optional[PointOfInterest] = None

    @property
    def found(self) -> bool:
        return self.result.found

    @property
    def total_cost(self) -> float:
        return self.result.total_cost

    @property
    def steps(self) -> tuple[PathStep, ...]:
        return self.result.steps

    @property
    def extra_cost(self) -> Optional[float]:
        """Routing cost added by avoiding congestion, compared to the baseline."""
        if self.baseline_cost is None or not self.found:
            return None
        if not math.isfinite(self.baseline_cost):
            return None
        return self.base_cost - self.baseline_cost


@dataclass(frozen=True, slots=True)
class AvailableLink:
    """An outgoing link from a node, resolved for display."""

    link_id: int
    to_node: Node
    distance: float
    cost: float


@dataclass(frozen=True, slots=True)
class DistanceComparison:
    """Straight-line distance versus direct link distance between two nodes."""

    from_node: Node
    to_node: Node
    direct_distance: float
    link_id: Optional[int] = None
    link_distance: Optional[float] = None

    @property
    def link_exists(self) -> bool:
        return self.link_id is not None

    @property
    def difference(self) -> Optional[float]:
        if self.link_distance is None:
            return None
        return self.link_distance - self.direct_distance


@dataclass(frozen=True, slots=True)
class GraphSummary:
    """Size of the route graph built from a snapshot."""

    node_count: int
    link_count: int
    edge_count: int
    isolated_node_ids: tuple[int, ...] = field(default_factory=tuple)
    points_of_interest_with_node: tuple[int, ...] = field(default_factory=tuple)

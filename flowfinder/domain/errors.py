"""Typed domain errors for the venue route planner.

All errors inherit from FlowFinderError and can optionally wrap a root
cause exception for debugging. A missing path between two nodes is not
an error: it is reported through ShortestPathResult.found.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass
class FlowFinderError(Exception):
    """Base error for the route planner domain.

    Attributes:
        message: Human-readable error description
        cause: Optional underlying exception that caused this error
    """

    message: str
    cause: Optional[Exception] = field(default=None, repr=False)

    def __str__(self) -> str:
        if self.cause:
            return f"{self.message}: {self.cause}"
        return self.message

    def __post_init__(self) -> None:
        super().__init__(self.message)


@dataclass
class InvalidRouteRequestError(FlowFinderError):
    """The route request is malformed (e.g. source equals target).

    Attributes:
        source_id: Requested source node
        target_id: Requested target node
    """

    source_id: Optional[int] = None
    target_id: Optional[int] = None


@dataclass
class NodeNotFoundError(FlowFinderError):
    """Node id not present in the node table.

    Attributes:
        node_id: The node id that was not found
    """

    node_id: Optional[int] = None


@dataclass
class PointOfInterestNotFoundError(FlowFinderError):
    """Point of interest id not present, or it cannot be placed on the map.

    Attributes:
        point_of_interest_id: The point of interest that was requested
    """

    point_of_interest_id: Optional[int] = None


@dataclass
class DataIntegrityError(FlowFinderError):
    """Link or point-of-interest records reference nodes that do not exist.

    Distinct from an unreachable target: this signals corrupt upstream
    data rather than a legitimately disconnected graph.

    Attributes:
        link_id: Offending link, if known
        node_id: Missing node referenced by the record
    """

    link_id: Optional[int] = None
    node_id: Optional[int] = None


@dataclass
class GraphInvariantError(FlowFinderError):
    """Internal invariant of the shortest-path engine was violated."""


@dataclass
class NegativeWeightError(GraphInvariantError):
    """An edge cost is negative or not a finite number.

    Attributes:
        link_id: Link carrying the invalid cost
        cost: The offending cost
    """

    link_id: Optional[int] = None
    cost: Optional[float] = None


@dataclass
class CapacityExceededError(FlowFinderError):
    """Occupancy update would push a point of interest above capacity.

    Attributes:
        point_of_interest_id: Point of interest being updated
        current: Occupancy before the update
        requested: Number of visitors requested
        capacity: Maximum capacity
    """

    point_of_interest_id: Optional[int] = None
    current: int = 0
    requested: int = 0
    capacity: int = 0


@dataclass
class RecordLoadError(FlowFinderError):
    """Map records could not be read or parsed.

    Attributes:
        file_path: Path to the record file if relevant
        line: Line number of the malformed row, if known
    """

    file_path: Optional[str] = None
    line: Optional[int] = None


"""Domain layer - Core map records, routing results and errors.

This module contains immutable domain models and typed errors
used throughout the application. No external dependencies.
"""

from .errors import (
    CapacityExceededError,
    DataIntegrityError,
    FlowFinderError,
    GraphInvariantError,
    InvalidRouteRequestError,
    NegativeWeightError,
    NodeNotFoundError,
    PointOfInterestNotFoundError,
    RecordLoadError,
)
from .models import (
    AvailableLink,
    CongestionLevel,
    DistanceComparison,
    Edge,
    Graph,
    GraphSummary,
    Link,
    MapSnapshot,
    Node,
    PathStep,
    PlannedRoute,
    PointOfInterest,
    ShortestPathResult,
    ShortestPathTree,
)

__all__ = [
    # Models
    "Node",
    "Link",
    "PointOfInterest",
    "CongestionLevel",
    "Edge",
    "Graph",
    "MapSnapshot",
    "PathStep",
    "ShortestPathTree",
    "ShortestPathResult",
    "PlannedRoute",
    "AvailableLink",
    "DistanceComparison",
    "GraphSummary",
    # Errors
    "FlowFinderError",
    "InvalidRouteRequestError",
    "NodeNotFoundError",
    "PointOfInterestNotFoundError",
    "DataIntegrityError",
    "GraphInvariantError",
    "NegativeWeightError",
    "CapacityExceededError",
    "RecordLoadError",
]

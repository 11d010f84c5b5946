"""Services layer - Application orchestration.

Available services:
- RoutePlannerService: Plans routes between nodes and points of interest
"""

from .route_planner import RoutePlannerService, find_nearest_node

__all__ = ["RoutePlannerService", "find_nearest_node"]

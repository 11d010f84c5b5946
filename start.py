"""Simple console launcher for the venue route planner.

This script asks for a departure and an arrival node, whether to avoid
crowded attractions, then prints the planned route using the records
found in the configured data directory.
"""

from __future__ import annotations

import sys

from flowfinder.container import get_container
from flowfinder.domain.errors import FlowFinderError
from flowfinder.logging_setup import configure_logging
from flowfinder.services import RoutePlannerService


def _ask_int(prompt: str) -> int:
    raw = input(prompt).strip()
    try:
        return int(raw)
    except ValueError:
        print(f"Not a node id: {raw!r}")
        sys.exit(1)


def main() -> None:
    container = get_container()
    configure_logging(container.config.observability)
    planner: RoutePlannerService = container.resolve(RoutePlannerService)

    print("=== Venue route planner ===")
    try:
        summary = planner.describe_graph()
    except FlowFinderError as e:
        print(f"Cannot load the map: {e}")
        sys.exit(1)
    print(f"{summary.node_count} nodes, {summary.link_count} links")

    source = _ask_int("Departure node id: ")
    target = _ask_int("Arrival node id: ")
    choice = input("Avoid crowded attractions? (y/N): ").strip().lower()
    congestion_aware = choice in {"y", "yes", "o", "oui"}

    route, error = planner.plan_route_safe(source, target, congestion_aware)
    if route is None or not route.found:
        print(error)
        sys.exit(1)

    print(planner.format_route(route))


if __name__ == "__main__":
    main()

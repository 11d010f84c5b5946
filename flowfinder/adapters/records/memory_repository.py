"""In-memory map record repository.

Holds node, link and point-of-interest records supplied by the caller,
for embedding the planner next to an existing store and for tests.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field, replace
from typing import Dict, Iterable, Optional

from ...domain.errors import PointOfInterestNotFoundError
from ...domain.models import Link, MapSnapshot, Node, PointOfInterest


@dataclass
class InMemoryMapRecordRepository:
    """Thread-safe in-memory map record store.

    Records are keyed by id; ``snapshot`` returns them in insertion order,
    which fixes edge order and thus tie-breaking in the route graph.

    Example:
        repo = InMemoryMapRecordRepository.from_records(nodes, links)
        repo.update_occupancy(3, 8)
    """

    _nodes: Dict[int, Node] = field(default_factory=dict, repr=False)
    _links: Dict[int, Link] = field(default_factory=dict, repr=False)
    _spots: Dict[int, PointOfInterest] = field(default_factory=dict, repr=False)
    _lock: threading.RLock = field(default_factory=threading.RLock, repr=False)
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    @classmethod
    def from_records(
        cls,
        nodes: Iterable[Node] = (),
        links: Iterable[Link] = (),
        points_of_interest: Iterable[PointOfInterest] = (),
    ) -> InMemoryMapRecordRepository:
        repo = cls()
        for node in nodes:
            repo.put_node(node)
        for link in links:
            repo.put_link(link)
        for spot in points_of_interest:
            repo.put_point_of_interest(spot)
        return repo

    def snapshot(self) -> MapSnapshot:
        with self._lock:
            return MapSnapshot(
                nodes=tuple(self._nodes.values()),
                links=tuple(self._links.values()),
                points_of_interest=tuple(self._spots.values()),
            )

    def put_node(self, node: Node) -> None:
        with self._lock:
            self._nodes[node.id] = node

    def put_link(self, link: Link) -> None:
        with self._lock:
            self._links[link.id] = link

    def put_point_of_interest(self, spot: PointOfInterest) -> None:
        with self._lock:
            self._spots[spot.id] = spot

    def remove_link(self, link_id: int) -> Optional[Link]:
        with self._lock:
            return self._links.pop(link_id, None)

    def update_occupancy(self, spot_id: int, occupancy: int) -> PointOfInterest:
        """Set the current occupancy of a point of interest.

        Raises:
            PointOfInterestNotFoundError: If the spot is unknown.
            CapacityExceededError: If ``occupancy`` exceeds capacity.
        """
        with self._lock:
            spot = self._spots.get(spot_id)
            if spot is None:
                raise PointOfInterestNotFoundError(
                    f"Point of interest not found: {spot_id}",
                    point_of_interest_id=spot_id,
                )
            emptied = replace(spot, current_occupancy=0)
            updated = emptied.with_visitors_added(occupancy)
            self._spots[spot_id] = updated
            self._logger.debug(
                "Occupancy updated",
                extra={"point_of_interest_id": spot_id, "occupancy": occupancy},
            )
            return updated

"""Record ports - Abstractions for reading map records.

The repository exposes read-only snapshots of the node, link and
point-of-interest tables owned by the surrounding CRUD layer.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from ..domain.models import MapSnapshot


class MapRecordRepositoryPort(Protocol):
    """Port for loading map records.

    Implementations:
    - adapters/records/csv_repository.py (CSVMapRecordRepository)
    - adapters/records/memory_repository.py (InMemoryMapRecordRepository)

    Each call to ``snapshot`` reads the current records afresh; callers
    take one snapshot per planning request.
    """

    def snapshot(self) -> MapSnapshot:
        """Read the current node, link and point-of-interest records.

        Returns:
            Immutable snapshot of all map records.
        """
        ...

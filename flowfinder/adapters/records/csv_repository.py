"""CSV map record repository adapter.

Reads node, link and point-of-interest tables from CSV files. Files are
re-read on every snapshot so that a record change is visible to the very
next planning request.
"""

from __future__ import annotations

import csv
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Dict, List, Optional, TypeVar

from ...config import DataConfig, get_config
from ...domain.errors import RecordLoadError
from ...domain.models import Link, MapSnapshot, Node, PointOfInterest

T = TypeVar("T")

_TRUE_VALUES = {"1", "true", "yes", "y", "t"}
_FALSE_VALUES = {"0", "false", "no", "n", "f", ""}


def _optional_int(value: str) -> Optional[int]:
    value = value.strip()
    return int(value) if value else None


def _optional_float(value: str) -> Optional[float]:
    value = value.strip()
    return float(value) if value else None


def _flag(value: str, default: bool) -> bool:
    value = value.strip().lower()
    if not value:
        return default
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ValueError(f"Invalid boolean value: {value!r}")


def _parse_node(row: Dict[str, str]) -> Node:
    return Node(
        id=int(row["id"]),
        name=row.get("name", "").strip() or f"Node {row['id'].strip()}",
        x=float(row.get("x", "") or 0.0),
        y=float(row.get("y", "") or 0.0),
        congestion=int(row.get("congestion", "") or 0),
        point_of_interest_id=_optional_int(row.get("point_of_interest_id", "")),
    )


def _parse_link(row: Dict[str, str]) -> Link:
    return Link(
        id=int(row["id"]),
        from_node_id=int(row["from_node_id"]),
        to_node_id=int(row["to_node_id"]),
        distance=float(row["distance"]),
        weight=_optional_float(row.get("weight", "")),
        is_directed=_flag(row.get("is_directed", ""), default=False),
    )


def _parse_point_of_interest(row: Dict[str, str]) -> PointOfInterest:
    return PointOfInterest(
        id=int(row["id"]),
        name=row.get("name", "").strip(),
        node_id=_optional_int(row.get("node_id", "")),
        x=float(row.get("x", "") or 0.0),
        y=float(row.get("y", "") or 0.0),
        current_occupancy=int(row.get("current_occupancy", "") or 0),
        max_capacity=int(row.get("max_capacity", "") or 0),
        is_open=_flag(row.get("is_open", ""), default=True),
    )


@dataclass
class CSVMapRecordRepository:
    """Map record repository that loads from CSV files.

    This adapter implements MapRecordRepositoryPort. The points of
    interest file is optional; a missing file yields no points of
    interest.

    Attributes:
        config: Data configuration (directory, file names)
    """

    config: DataConfig = field(default_factory=lambda: get_config().data)
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def snapshot(self) -> MapSnapshot:
        """Read all map records.

        Raises:
            RecordLoadError: If a file cannot be read or a row is malformed.
        """
        self._logger.debug(
            "Loading map records",
            extra={
                "nodes_path": str(self.config.nodes_path),
                "links_path": str(self.config.links_path),
            },
        )

        nodes = self._read(self.config.nodes_path, _parse_node)
        links = self._read(self.config.links_path, _parse_link)

        spots_path = self.config.points_of_interest_path
        if spots_path.exists():
            spots = self._read(spots_path, _parse_point_of_interest)
        else:
            self._logger.info(
                "No points of interest file",
                extra={"path": str(spots_path)},
            )
            spots = []

        self._logger.info(
            "Map records loaded",
            extra={
                "nodes": len(nodes),
                "links": len(links),
                "points_of_interest": len(spots),
            },
        )
        return MapSnapshot(
            nodes=tuple(nodes),
            links=tuple(links),
            points_of_interest=tuple(spots),
        )

    def _read(self, path: Path, parse: Callable[[Dict[str, str]], T]) -> List[T]:
        records: List[T] = []
        try:
            with path.open(newline="", encoding="utf-8") as f:
                reader = csv.DictReader(f)
                for row in reader:
                    if not any(isinstance(value, str) and value.strip() for value in row.values()):
                        continue
                    try:
                        records.append(parse(row))
                    except (AttributeError, KeyError, TypeError, ValueError) as e:
                        raise RecordLoadError(
                            f"Malformed record in {path.name} line {reader.line_num}",
                            file_path=str(path),
                            line=reader.line_num,
                            cause=e,
                        )
        except OSError as e:
            raise RecordLoadError(
                f"Failed to read {path.name}",
                file_path=str(path),
                cause=e,
            )
        return records

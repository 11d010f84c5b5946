"""Tests for the in-memory map record repository."""

import pytest

from flowfinder.adapters.records import InMemoryMapRecordRepository
from flowfinder.domain import (
    CapacityExceededError,
    Link,
    Node,
    PointOfInterest,
    PointOfInterestNotFoundError,
)


@pytest.fixture
def repo():
    return InMemoryMapRecordRepository.from_records(
        nodes=[Node(id=2, name="B"), Node(id=1, name="A")],
        links=[Link(id=1, from_node_id=1, to_node_id=2, distance=4)],
        points_of_interest=[PointOfInterest(id=7, name="Wheel", node_id=2, max_capacity=10)],
    )


def test_snapshot_keeps_insertion_order(repo):
    assert [node.id for node in repo.snapshot().nodes] == [2, 1]


def test_put_replaces_record_with_same_id(repo):
    repo.put_node(Node(id=2, name="B2"))

    nodes = repo.snapshot().node_index()
    assert nodes[2].name == "B2"
    assert len(nodes) == 2


def test_snapshot_is_detached_from_later_changes(repo):
    snapshot = repo.snapshot()

    repo.remove_link(1)

    assert len(snapshot.links) == 1
    assert repo.snapshot().links == ()


def test_remove_unknown_link_returns_none(repo):
    assert repo.remove_link(99) is None


def test_update_occupancy(repo):
    updated = repo.update_occupancy(7, 8)

    assert updated.current_occupancy == 8
    assert repo.snapshot().point_of_interest_index()[7].current_occupancy == 8


def test_update_occupancy_above_capacity_rejected(repo):
    with pytest.raises(CapacityExceededError):
        repo.update_occupancy(7, 11)

    assert repo.snapshot().points_of_interest[0].current_occupancy == 0


def test_update_occupancy_unknown_spot(repo):
    with pytest.raises(PointOfInterestNotFoundError):
        repo.update_occupancy(8, 1)

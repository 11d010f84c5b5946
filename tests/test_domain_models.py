import math

import pytest

from flowfinder.domain import (
    CapacityExceededError,
    CongestionLevel,
    DistanceComparison,
    FlowFinderError,
    Link,
    Node,
    PathStep,
    PlannedRoute,
    PointOfInterest,
    ShortestPathResult,
)


class TestLink:
    def test_cost_defaults_to_distance(self):
        assert Link(id=1, from_node_id=1, to_node_id=2, distance=12.5).cost == 12.5

    def test_weight_overrides_distance(self):
        assert Link(id=1, from_node_id=1, to_node_id=2, distance=12.5, weight=3).cost == 3

    @pytest.mark.parametrize("distance", [0, -1, float("nan"), float("inf")])
    def test_invalid_distance_rejected(self, distance):
        with pytest.raises(ValueError):
            Link(id=1, from_node_id=1, to_node_id=2, distance=distance)

    @pytest.mark.parametrize("weight", [0, -2.0, float("nan")])
    def test_invalid_weight_rejected(self, weight):
        with pytest.raises(ValueError):
            Link(id=1, from_node_id=1, to_node_id=2, distance=1, weight=weight)


class TestPointOfInterest:
    def test_occupancy_ratio(self):
        spot = PointOfInterest(id=1, name="Wheel", current_occupancy=8, max_capacity=10)

        assert spot.occupancy_ratio == pytest.approx(0.8)
        assert spot.occupancy_percent == pytest.approx(80.0)

    def test_zero_capacity_has_no_ratio(self):
        spot = PointOfInterest(id=1, name="Wheel", current_occupancy=3)

        assert spot.occupancy_ratio is None
        assert spot.occupancy_percent == 0.0
        assert spot.congestion_level is CongestionLevel.UNKNOWN

    def test_negative_occupancy_rejected(self):
        with pytest.raises(ValueError):
            PointOfInterest(id=1, name="Wheel", current_occupancy=-1, max_capacity=10)

    @pytest.mark.parametrize(
        "occupancy,level",
        [
            (0, CongestionLevel.EMPTY),
            (2, CongestionLevel.QUIET),
            (4, CongestionLevel.MODERATE),
            (6, CongestionLevel.CROWDED),
            (8, CongestionLevel.VERY_CROWDED),
            (10, CongestionLevel.FULL),
        ],
    )
    def test_congestion_level(self, occupancy, level):
        spot = PointOfInterest(id=1, name="Wheel", current_occupancy=occupancy, max_capacity=10)

        assert spot.congestion_level is level

    def test_add_visitors_within_capacity(self):
        spot = PointOfInterest(id=1, name="Wheel", current_occupancy=8, max_capacity=10)

        updated = spot.with_visitors_added(2)

        assert updated.current_occupancy == 10
        assert spot.current_occupancy == 8

    def test_add_visitors_beyond_capacity_rejected(self):
        spot = PointOfInterest(id=1, name="Wheel", current_occupancy=8, max_capacity=10)

        with pytest.raises(CapacityExceededError) as exc_info:
            spot.with_visitors_added(3)

        assert exc_info.value.capacity == 10
        assert exc_info.value.requested == 3
        assert isinstance(exc_info.value, FlowFinderError)

    def test_remove_visitors(self):
        spot = PointOfInterest(id=1, name="Wheel", current_occupancy=5, max_capacity=10)

        assert spot.with_visitors_removed(5).current_occupancy == 0
        with pytest.raises(ValueError):
            spot.with_visitors_removed(6)


def test_node_distance_to():
    assert Node(id=1, name="Gate", x=0, y=0).distance_to(3, 4) == 5.0


def test_shortest_path_result_not_found():
    result = ShortestPathResult(source_id=1, target_id=2, total_cost=math.inf)

    assert not result.found
    assert result.node_ids == ()


def test_planned_route_extra_cost():
    result = ShortestPathResult(
        source_id=1,
        target_id=4,
        total_cost=21.0,
        steps=(PathStep(1, 3, 3, 11.0), PathStep(3, 4, 4, 10.0)),
    )
    route = PlannedRoute(result=result, congestion_aware=True, base_cost=21.0, baseline_cost=20.0)

    assert route.extra_cost == 1.0
    assert PlannedRoute(result=result, base_cost=21.0).extra_cost is None


def test_distance_comparison_without_link():
    a = Node(id=1, name="A")
    b = Node(id=2, name="B", x=3, y=4)
    comparison = DistanceComparison(from_node=a, to_node=b, direct_distance=5.0)

    assert not comparison.link_exists
    assert comparison.difference is None


def test_error_str_includes_cause():
    error = FlowFinderError("Failed", cause=ValueError("boom"))

    assert str(error) == "Failed: boom"
    assert str(FlowFinderError("Failed")) == "Failed"

"""Tests for configuration loading and the DI container."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from flowfinder.config import AppConfig, DataConfig, RoutingConfig, get_config, reset_config
from flowfinder.container import Container, get_container, reset_container
from flowfinder.ports import MapRecordRepositoryPort, RouteSolverPort
from flowfinder.services import RoutePlannerService


@pytest.fixture(autouse=True)
def fresh_config():
    reset_config()
    reset_container()
    yield
    reset_config()
    reset_container()


def test_defaults():
    config = get_config()

    assert config.routing.congestion_penalty == 0.5
    assert config.routing.walking_speed == 5.0
    assert config.routing.early_exit is True
    assert config.data.links_path.name == "links.csv"
    assert config.observability.structured is False


def test_get_config_is_cached():
    assert get_config() is get_config()


def test_environment_overrides(monkeypatch, tmp_path):
    monkeypatch.setenv("FLOWFINDER_ROUTING_CONGESTION_PENALTY", "0.8")
    monkeypatch.setenv("FLOWFINDER_DATA_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("FLOWFINDER_LOG_STRUCTURED", "true")

    config = get_config()

    assert config.routing.congestion_penalty == 0.8
    assert config.data.nodes_path == tmp_path / "nodes.csv"
    assert config.observability.structured is True


@pytest.mark.parametrize(
    "kwargs",
    [{"congestion_penalty": -0.1}, {"walking_speed": 0}],
)
def test_invalid_routing_values_rejected(kwargs):
    with pytest.raises(ValidationError):
        RoutingConfig(**kwargs)


def test_data_config_paths():
    config = DataConfig(data_dir=Path("/srv/venue"), points_of_interest_file="spots.csv")

    assert config.points_of_interest_path == Path("/srv/venue/spots.csv")


class TestContainer:
    def test_default_bindings(self):
        container = Container.create_default(AppConfig())

        planner = container.resolve(RoutePlannerService)

        assert isinstance(planner, RoutePlannerService)
        assert planner.repository is container.resolve(MapRecordRepositoryPort)
        assert planner.route_solver is container.resolve(RouteSolverPort)

    def test_default_container_plans_on_bundled_map(self):
        planner = get_container().resolve(RoutePlannerService)

        route = planner.plan_route(1, 3)

        assert route.found
        assert route.total_cost == 15.0

    def test_register_override(self):
        container = Container.create_default(AppConfig())
        sentinel = object()

        container.register(RouteSolverPort, lambda: sentinel)

        assert container.resolve(RouteSolverPort) is sentinel

    def test_non_singleton_factory(self):
        container = Container()
        container.register(list, list, singleton=False)

        assert container.resolve(list) is not container.resolve(list)

    def test_unregistered_type(self):
        with pytest.raises(KeyError):
            Container().resolve(dict)

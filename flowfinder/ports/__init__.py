"""Ports - Protocols decoupling the route planner from its collaborators."""

from .records import MapRecordRepositoryPort
from .routing import RouteSolverPort

__all__ = ["MapRecordRepositoryPort", "RouteSolverPort"]

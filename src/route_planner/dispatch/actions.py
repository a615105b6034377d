"""
route_planner.dispatch.actions

The action catalog: immutable intent records published on the event bus.

Responsibilities:
- One frozen dataclass per intent (UI commands and results arriving from the network).
- `Action`, the closed union handlers match against.
"""

from __future__ import annotations

from dataclasses import dataclass

from route_planner.query.state import Coordinate, Waypoint
from route_planner.routing_client.models import ApiInfo, Profile, RouteResult


@dataclass(frozen=True, slots=True)
class InfoReceived:
    result: ApiInfo


@dataclass(frozen=True, slots=True)
class SetPoint:
    point: Waypoint


@dataclass(frozen=True, slots=True)
class SetVehicle:
    vehicle: Profile


@dataclass(frozen=True, slots=True)
class AddPoint:
    at_index: int
    coordinate: Coordinate
    is_initialized: bool


@dataclass(frozen=True, slots=True)
class ClearPoints:
    pass


@dataclass(frozen=True, slots=True)
class RemovePoint:
    point: Waypoint


@dataclass(frozen=True, slots=True)
class InvalidatePoint:
    point: Waypoint


@dataclass(frozen=True, slots=True)
class RouteReceived:
    result: RouteResult


@dataclass(frozen=True, slots=True)
class ClearRoute:
    pass


Action = (
    InfoReceived
    | SetPoint
    | SetVehicle
    | AddPoint
    | ClearPoints
    | RemovePoint
    | InvalidatePoint
    | RouteReceived
    | ClearRoute
)


# --- Module Notes -----------------------------------------------------------
# `InfoReceived` and `RouteReceived` are published by the routing client as side
# effects of store transitions; the bus guards against them re-entering themselves.

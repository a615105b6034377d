"""
route_planner.query.state

Typed state owned by the query store.

Responsibilities:
- Waypoint and coordinate value types.
- Position-derived role and marker color assignment.
- The initial query state of a session.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field

from route_planner.routing_client.models import Profile


class WaypointRole(enum.StrEnum):
    start = "START"
    end = "END"
    via = "VIA"


MARKER_COLORS: dict[WaypointRole, str] = {
    WaypointRole.start: "#417900",
    WaypointRole.end: "#F97777",
    WaypointRole.via: "#76D0F7",
}


def marker_color(role: WaypointRole) -> str:
    return MARKER_COLORS[role]


def format_coordinate(coordinate: Coordinate) -> str:
    # "lng, lat" as typed into the search box; integral values lose the ".0".
    return f"{_format_number(coordinate.lng)}, {_format_number(coordinate.lat)}"


def _format_number(value: float) -> str:
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


def role_for_index(index: int, count: int) -> WaypointRole:
    # Index 0 wins over "last", so a lone waypoint is a start.
    if index == 0:
        return WaypointRole.start
    if index == count - 1:
        return WaypointRole.end
    return WaypointRole.via


@dataclass(frozen=True, slots=True)
class Coordinate:
    lat: float = 0.0
    lng: float = 0.0


@dataclass(frozen=True, slots=True)
class Waypoint:
    coordinate: Coordinate
    query_text: str
    is_initialized: bool
    color: str
    id: int
    role: WaypointRole

    @classmethod
    def empty(cls, id: int, role: WaypointRole) -> Waypoint:
        return cls(
            coordinate=Coordinate(),
            query_text="",
            is_initialized=False,
            color=marker_color(role),
            id=id,
            role=role,
        )


@dataclass(frozen=True, slots=True)
class QueryState:
    waypoints: tuple[Waypoint, ...]
    next_id: int
    selected_profile: Profile = field(default_factory=Profile)

    @classmethod
    def initial(cls) -> QueryState:
        return cls(
            waypoints=(
                Waypoint.empty(0, WaypointRole.start),
                Waypoint.empty(1, WaypointRole.end),
            ),
            next_id=2,
        )

    @property
    def is_route_ready(self) -> bool:
        return len(self.waypoints) > 1 and all(w.is_initialized for w in self.waypoints)

    def find(self, waypoint_id: int) -> Waypoint | None:
        for waypoint in self.waypoints:
            if waypoint.id == waypoint_id:
                return waypoint
        return None


# --- Module Notes -----------------------------------------------------------
# States are immutable; reducers build new tuples instead of editing in place.

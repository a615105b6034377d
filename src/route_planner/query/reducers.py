"""
route_planner.query.reducers

Pure transition functions for the session stores.

Responsibilities:
- `reduce_query`: waypoint/profile transitions.
- `route_request_for`: decide whether a transition warrants a route request.
- `reduce_route` / `reduce_info`: ingest results arriving from the routing client.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Any

from route_planner.dispatch.actions import (
    AddPoint,
    ClearPoints,
    ClearRoute,
    InfoReceived,
    InvalidatePoint,
    RemovePoint,
    RouteReceived,
    SetPoint,
    SetVehicle,
)
from route_planner.query.state import (
    Coordinate,
    QueryState,
    Waypoint,
    WaypointRole,
    format_coordinate,
    marker_color,
    role_for_index,
)
from route_planner.routing_client.models import ApiInfo, RouteRequest, RouteResult

DEFAULT_PREFERRED_PROFILE = "car"

# Transitions after which a complete query is sent to the routing service.
ROUTING_ACTIONS = (SetPoint, AddPoint, RemovePoint, SetVehicle)


def reduce_query(
    state: QueryState,
    action: Any,
    *,
    preferred_profile: str = DEFAULT_PREFERRED_PROFILE,
) -> QueryState:
    if isinstance(action, SetPoint):
        return replace(state, waypoints=_replace_by_id(state.waypoints, action.point))

    if isinstance(action, InvalidatePoint):
        invalidated = replace(action.point, is_initialized=False)
        return replace(state, waypoints=_replace_by_id(state.waypoints, invalidated))

    if isinstance(action, ClearPoints):
        cleared = tuple(
            replace(w, query_text="", coordinate=Coordinate(), is_initialized=False)
            for w in state.waypoints
        )
        return replace(state, waypoints=cleared)

    if isinstance(action, AddPoint):
        new_point = Waypoint(
            coordinate=action.coordinate,
            query_text=format_coordinate(action.coordinate) if action.is_initialized else "",
            is_initialized=action.is_initialized,
            color="",
            id=state.next_id,
            role=WaypointRole.via,
        )
        waypoints = list(state.waypoints)
        waypoints.insert(action.at_index, new_point)
        return replace(state, waypoints=_assign_roles(waypoints), next_id=state.next_id + 1)

    if isinstance(action, RemovePoint):
        remaining = [w for w in state.waypoints if w.id != action.point.id]
        return replace(state, waypoints=_assign_roles(remaining))

    if isinstance(action, SetVehicle):
        return replace(state, selected_profile=action.vehicle)

    if isinstance(action, InfoReceived):
        profiles = action.result.profiles
        if not profiles:
            return state
        selected = action.result.find_profile(preferred_profile) or profiles[0]
        return replace(state, selected_profile=selected)

    return state


def route_request_for(state: QueryState, action: Any) -> RouteRequest | None:
    """
    Returns the route request implied by `state` (already reduced with `action`),
    or None when the action does not route or the query is incomplete.
    """

    if not isinstance(action, ROUTING_ACTIONS) or not state.is_route_ready:
        return None
    profile = state.selected_profile
    return RouteRequest(
        points=tuple((w.coordinate.lng, w.coordinate.lat) for w in state.waypoints),
        profile=None if profile.is_sentinel else profile.key,
    )


def reduce_route(state: RouteResult | None, action: Any) -> RouteResult | None:
    # Last result to arrive wins; responses are not matched to the request that caused them.
    if isinstance(action, RouteReceived):
        return action.result
    if isinstance(action, ClearRoute):
        return None
    return state


def reduce_info(state: ApiInfo | None, action: Any) -> ApiInfo | None:
    if isinstance(action, InfoReceived):
        return action.result
    return state


def _replace_by_id(waypoints: tuple[Waypoint, ...], point: Waypoint) -> tuple[Waypoint, ...]:
    return tuple(point if w.id == point.id else w for w in waypoints)


def _assign_roles(waypoints: list[Waypoint]) -> tuple[Waypoint, ...]:
    # Roles depend on position only, so every waypoint is recomputed.
    count = len(waypoints)
    out = []
    for i, w in enumerate(waypoints):
        role = role_for_index(i, count)
        out.append(replace(w, role=role, color=marker_color(role)))
    return tuple(out)


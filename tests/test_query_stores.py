"""
tests.test_query_stores

Store holders on a live bus: observer notification and routing side effects.
"""

from __future__ import annotations

from dataclasses import replace

from route_planner.dispatch.actions import (
    AddPoint,
    ClearPoints,
    ClearRoute,
    InfoReceived,
    InvalidatePoint,
    RouteReceived,
    SetPoint,
)
from route_planner.dispatch.bus import EventBus
from route_planner.query.state import Coordinate, QueryState
from route_planner.query.stores import ApiInfoStore, QueryStore, RouteStore
from route_planner.routing_client.models import ApiInfo, Profile, RouteRequest, RouteResult


def _set(store: QueryStore, waypoint_id: int, lat: float, lng: float) -> SetPoint:
    point = store.state.find(waypoint_id)
    assert point is not None
    return SetPoint(
        replace(point, coordinate=Coordinate(lat=lat, lng=lng), is_initialized=True)
    )


def test_two_point_scenario_emits_exactly_one_request() -> None:
    bus = EventBus()
    requests: list[RouteRequest] = []
    store = QueryStore(bus, request_route=requests.append)

    bus.publish(_set(store, 0, 52.52, 13.405))
    assert requests == []

    bus.publish(_set(store, 1, 52.39, 13.06))
    assert requests == [RouteRequest(points=((13.405, 52.52), (13.06, 52.39)), profile=None)]


def test_invalidate_and_clear_never_route() -> None:
    bus = EventBus()
    requests: list[RouteRequest] = []
    store = QueryStore(bus, request_route=requests.append)
    bus.publish(_set(store, 0, 1.0, 2.0))
    bus.publish(_set(store, 1, 3.0, 4.0))
    requests.clear()

    point = store.state.find(0)
    assert point is not None
    bus.publish(InvalidatePoint(point))
    bus.publish(ClearPoints())

    assert requests == []


def test_add_initialized_point_to_complete_query_routes_again() -> None:
    bus = EventBus()
    requests: list[RouteRequest] = []
    store = QueryStore(bus, request_route=requests.append)
    bus.publish(_set(store, 0, 1.0, 2.0))
    bus.publish(_set(store, 1, 3.0, 4.0))

    bus.publish(AddPoint(at_index=1, coordinate=Coordinate(lat=5.0, lng=6.0), is_initialized=True))
    bus.publish(AddPoint(at_index=1, coordinate=Coordinate(), is_initialized=False))

    assert [len(r.points) for r in requests] == [2, 3]


def test_info_received_selects_profile_used_by_next_request() -> None:
    bus = EventBus()
    requests: list[RouteRequest] = []
    store = QueryStore(bus, request_route=requests.append)

    bus.publish(InfoReceived(ApiInfo(profiles=(Profile(key="foot"), Profile(key="car")))))
    bus.publish(_set(store, 0, 1.0, 2.0))
    bus.publish(_set(store, 1, 3.0, 4.0))

    assert store.state.selected_profile.key == "car"
    assert requests[-1].profile == "car"


def test_listeners_fire_only_on_change() -> None:
    bus = EventBus()
    store = QueryStore(bus)
    snapshots: list[QueryState] = []
    unsubscribe = store.subscribe(snapshots.append)

    bus.publish(ClearRoute())
    assert snapshots == []

    bus.publish(_set(store, 0, 1.0, 2.0))
    assert snapshots == [store.get_state()]

    unsubscribe()
    bus.publish(_set(store, 1, 3.0, 4.0))
    assert len(snapshots) == 1


def test_route_store_keeps_last_result_and_clears() -> None:
    bus = EventBus()
    routes = RouteStore(bus)
    first = RouteResult()
    second = RouteResult.model_validate({"info": {"copyright": ["b"], "took": 2}, "paths": []})

    bus.publish(RouteReceived(first))
    bus.publish(RouteReceived(second))
    assert routes.state == second

    bus.publish(ClearRoute())
    assert routes.state is None


def test_info_store_records_api_info() -> None:
    bus = EventBus()
    info = ApiInfoStore(bus)
    api_info = ApiInfo(version="8.0", profiles=(Profile(key="car"),))

    bus.publish(InfoReceived(api_info))

    assert info.state == api_info


def test_closed_store_stops_listening() -> None:
    bus = EventBus()
    store = QueryStore(bus)
    store.close()

    bus.publish(_set(store, 0, 1.0, 2.0))

    assert store.state == QueryState.initial()

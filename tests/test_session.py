"""
tests.test_session

Routing session end to end over a fake routing service.
"""

from __future__ import annotations

from dataclasses import replace

import httpx
import pytest

from route_planner.dispatch.actions import SetPoint, SetVehicle
from route_planner.query.state import Coordinate
from route_planner.routing_client.errors import ServiceError
from route_planner.services.session_service import RoutingSession
from route_planner.settings import Settings

from .conftest import FakeRoutingService, route_payload


def _set(session: RoutingSession, waypoint_id: int, lat: float, lng: float) -> SetPoint:
    point = session.query.state.find(waypoint_id)
    assert point is not None
    return SetPoint(replace(point, coordinate=Coordinate(lat=lat, lng=lng), is_initialized=True))


@pytest.mark.asyncio
async def test_route_fetched_once_both_points_are_set(
    settings: Settings, fake_service: FakeRoutingService
) -> None:
    async with httpx.AsyncClient(transport=fake_service.transport()) as http:
        session = RoutingSession(settings=settings, http=http)

        session.dispatch(_set(session, 0, 52.52, 13.405))
        assert session.pending == 0

        session.dispatch(_set(session, 1, 52.39, 13.06))
        assert session.pending == 1

        await session.wait_idle()

    bodies = fake_service.route_bodies()
    assert len(bodies) == 1
    assert bodies[0]["points"] == [[13.405, 52.52], [13.06, 52.39]]
    assert bodies[0]["vehicle"] == "car"
    assert session.routes.state is not None
    assert len(session.routes.state.paths) == 1


@pytest.mark.asyncio
async def test_info_then_profile_switch_reroutes_with_new_profile(
    settings: Settings, fake_service: FakeRoutingService
) -> None:
    async with httpx.AsyncClient(transport=fake_service.transport()) as http:
        session = RoutingSession(settings=settings, http=http)
        session.start()
        await session.wait_idle()

        assert session.query.state.selected_profile.key == "car"
        info = session.info.state
        assert info is not None

        session.dispatch(_set(session, 0, 52.52, 13.405))
        session.dispatch(_set(session, 1, 52.39, 13.06))
        bike = info.find_profile("bike")
        assert bike is not None
        session.dispatch(SetVehicle(bike))
        await session.wait_idle()

    assert [b["vehicle"] for b in fake_service.route_bodies()] == ["car", "bike"]


@pytest.mark.asyncio
async def test_failed_route_is_raised_from_wait_idle_and_state_stays_usable(
    settings: Settings, fake_service: FakeRoutingService
) -> None:
    fake_service.route_status = 400
    fake_service.route_json = {"message": "Cannot find point 1", "hints": []}

    async with httpx.AsyncClient(transport=fake_service.transport()) as http:
        session = RoutingSession(settings=settings, http=http)
        session.dispatch(_set(session, 0, 52.52, 13.405))
        session.dispatch(_set(session, 1, 0.0, 0.0))

        with pytest.raises(ServiceError, match="Cannot find point 1"):
            await session.wait_idle()

        assert session.routes.state is None
        assert session.take_failures() == []

        fake_service.route_status = 200
        fake_service.route_json = route_payload()
        session.dispatch(_set(session, 1, 52.39, 13.06))
        await session.wait_idle()

    assert session.routes.state is not None


@pytest.mark.asyncio
async def test_overlapping_requests_all_complete(
    settings: Settings, fake_service: FakeRoutingService
) -> None:
    async with httpx.AsyncClient(transport=fake_service.transport()) as http:
        session = RoutingSession(settings=settings, http=http)
        session.dispatch(_set(session, 0, 52.52, 13.405))
        session.dispatch(_set(session, 1, 52.39, 13.06))
        session.dispatch(_set(session, 1, 52.40, 13.07))
        assert session.pending == 2

        await session.wait_idle()

    assert len(fake_service.route_bodies()) == 2


@pytest.mark.asyncio
async def test_aclose_detaches_stores(settings: Settings, fake_service: FakeRoutingService) -> None:
    async with httpx.AsyncClient(transport=fake_service.transport()) as http:
        session = RoutingSession(settings=settings, http=http)
        await session.aclose()
        before = session.query.state

        session.dispatch(_set(session, 0, 1.0, 2.0))

    assert session.query.state == before

"""
route_planner.api.routers.routing

Read APIs for routing results and service info, plus geocoding.

Responsibilities:
- Expose the last received route and report failed route requests.
- Expose advertised profiles.
- Proxy geocoding lookups.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Query
from starlette.status import HTTP_404_NOT_FOUND, HTTP_502_BAD_GATEWAY

from route_planner.api.deps import session_dep
from route_planner.api.routers.query import ProfileResponse
from route_planner.dispatch.actions import ClearRoute
from route_planner.routing_client.errors import RoutingClientError
from route_planner.routing_client.models import GeocodingResult, RouteResult
from route_planner.services.session_service import RoutingSession

router = APIRouter(prefix="/v1", tags=["routing"])


@router.get("/info")
async def get_info(session: RoutingSession = Depends(session_dep)) -> dict[str, Any]:
    info = session.info.state
    if info is None:
        raise HTTPException(status_code=HTTP_404_NOT_FOUND, detail="Service info not loaded")
    return {
        "bbox": list(info.bbox),
        "version": info.version,
        "import_date": info.import_date,
        "profiles": [ProfileResponse.from_profile(p).model_dump() for p in info.profiles],
    }


@router.get("/route", response_model=RouteResult)
async def get_route(session: RoutingSession = Depends(session_dep)) -> RouteResult:
    # A failed request is reported once; the next read falls back to the stored route.
    failures = session.take_failures()
    if failures:
        raise HTTPException(status_code=HTTP_502_BAD_GATEWAY, detail=str(failures[-1]))

    route = session.routes.state
    if route is None:
        raise HTTPException(status_code=HTTP_404_NOT_FOUND, detail="No route")
    return route


@router.delete("/route")
async def clear_route(session: RoutingSession = Depends(session_dep)) -> dict[str, str]:
    session.dispatch(ClearRoute())
    return {"status": "cleared"}


@router.get("/geocode", response_model=GeocodingResult)
async def geocode(
    q: str = Query(min_length=1, max_length=256),
    session: RoutingSession = Depends(session_dep),
) -> GeocodingResult:
    try:
        return await session.geocode(q)
    except RoutingClientError as e:
        raise HTTPException(status_code=HTTP_502_BAD_GATEWAY, detail=str(e)) from e

"""
route_planner.api.routers.query

Endpoints that read the query snapshot and inject query intents.

Responsibilities:
- Translate request bodies into actions and publish them on the session bus.
- Return the query state observed after the action was processed.
"""

from __future__ import annotations

from dataclasses import replace

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field
from starlette.status import HTTP_404_NOT_FOUND

from route_planner.api.deps import session_dep
from route_planner.dispatch.actions import (
    AddPoint,
    ClearPoints,
    InvalidatePoint,
    RemovePoint,
    SetPoint,
    SetVehicle,
)
from route_planner.query.state import Coordinate, QueryState, Waypoint, format_coordinate
from route_planner.routing_client.models import Profile
from route_planner.services.session_service import RoutingSession

router = APIRouter(prefix="/v1/query", tags=["query"])


class CoordinateModel(BaseModel):
    lat: float = Field(ge=-90, le=90)
    lng: float = Field(ge=-180, le=180)


class WaypointResponse(BaseModel):
    id: int
    role: str
    color: str
    coordinate: CoordinateModel
    query_text: str
    is_initialized: bool


class ProfileResponse(BaseModel):
    key: str
    version: str
    import_date: str
    elevation: bool

    @classmethod
    def from_profile(cls, profile: Profile) -> ProfileResponse:
        return cls(
            key=profile.key,
            version=profile.version,
            import_date=profile.import_date,
            elevation=profile.features.elevation,
        )


class QueryStateResponse(BaseModel):
    waypoints: list[WaypointResponse]
    next_id: int
    selected_profile: ProfileResponse
    route_ready: bool

    @classmethod
    def from_state(cls, state: QueryState) -> QueryStateResponse:
        return cls(
            waypoints=[
                WaypointResponse(
                    id=w.id,
                    role=str(w.role),
                    color=w.color,
                    coordinate=CoordinateModel(lat=w.coordinate.lat, lng=w.coordinate.lng),
                    query_text=w.query_text,
                    is_initialized=w.is_initialized,
                )
                for w in state.waypoints
            ],
            next_id=state.next_id,
            selected_profile=ProfileResponse.from_profile(state.selected_profile),
            route_ready=state.is_route_ready,
        )


class AddPointRequest(BaseModel):
    # Defaults to appending after the current last waypoint.
    at_index: int | None = Field(default=None, ge=0)
    coordinate: CoordinateModel = Field(default_factory=lambda: CoordinateModel(lat=0, lng=0))
    is_initialized: bool = True


class SetPointRequest(BaseModel):
    coordinate: CoordinateModel
    query_text: str | None = Field(default=None, max_length=512)


class SetProfileRequest(BaseModel):
    key: str = Field(min_length=1, max_length=64)


def _waypoint_or_404(session: RoutingSession, waypoint_id: int) -> Waypoint:
    waypoint = session.query.state.find(waypoint_id)
    if waypoint is None:
        raise HTTPException(status_code=HTTP_404_NOT_FOUND, detail="Waypoint not found")
    return waypoint


@router.get("", response_model=QueryStateResponse)
async def get_query(session: RoutingSession = Depends(session_dep)) -> QueryStateResponse:
    return QueryStateResponse.from_state(session.query.state)


@router.post("/points", response_model=QueryStateResponse)
async def add_point(
    body: AddPointRequest, session: RoutingSession = Depends(session_dep)
) -> QueryStateResponse:
    at_index = body.at_index
    if at_index is None:
        at_index = len(session.query.state.waypoints)
    session.dispatch(
        AddPoint(
            at_index=at_index,
            coordinate=Coordinate(lat=body.coordinate.lat, lng=body.coordinate.lng),
            is_initialized=body.is_initialized,
        )
    )
    return QueryStateResponse.from_state(session.query.state)


@router.put("/points/{waypoint_id}", response_model=QueryStateResponse)
async def set_point(
    waypoint_id: int, body: SetPointRequest, session: RoutingSession = Depends(session_dep)
) -> QueryStateResponse:
    waypoint = _waypoint_or_404(session, waypoint_id)
    coordinate = Coordinate(lat=body.coordinate.lat, lng=body.coordinate.lng)
    session.dispatch(
        SetPoint(
            replace(
                waypoint,
                coordinate=coordinate,
                query_text=body.query_text or format_coordinate(coordinate),
                is_initialized=True,
            )
        )
    )
    return QueryStateResponse.from_state(session.query.state)


@router.post("/points/{waypoint_id}/invalidate", response_model=QueryStateResponse)
async def invalidate_point(
    waypoint_id: int, session: RoutingSession = Depends(session_dep)
) -> QueryStateResponse:
    session.dispatch(InvalidatePoint(_waypoint_or_404(session, waypoint_id)))
    return QueryStateResponse.from_state(session.query.state)


@router.delete("/points/{waypoint_id}", response_model=QueryStateResponse)
async def remove_point(
    waypoint_id: int, session: RoutingSession = Depends(session_dep)
) -> QueryStateResponse:
    session.dispatch(RemovePoint(_waypoint_or_404(session, waypoint_id)))
    return QueryStateResponse.from_state(session.query.state)


@router.post("/clear", response_model=QueryStateResponse)
async def clear_points(session: RoutingSession = Depends(session_dep)) -> QueryStateResponse:
    session.dispatch(ClearPoints())
    return QueryStateResponse.from_state(session.query.state)


@router.put("/profile", response_model=QueryStateResponse)
async def set_profile(
    body: SetProfileRequest, session: RoutingSession = Depends(session_dep)
) -> QueryStateResponse:
    info = session.info.state
    profile = info.find_profile(body.key) if info is not None else None
    if profile is None:
        raise HTTPException(status_code=HTTP_404_NOT_FOUND, detail="Profile not found")
    session.dispatch(SetVehicle(profile))
    return QueryStateResponse.from_state(session.query.state)

"""
route_planner.routing_client.models

Wire and value models exchanged with the routing service.

Responsibilities:
- Frozen value types for service info (`Profile`, `ApiInfo`) and outbound route requests.
- Pydantic models for route, error and geocoding responses.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

Bbox = tuple[float, float, float, float]


@dataclass(frozen=True, slots=True)
class ProfileFeatures:
    elevation: bool = False


@dataclass(frozen=True, slots=True)
class Profile:
    """
    A travel mode advertised by the service (car, bike, foot, ...).
    The empty key is the sentinel used before `/info` resolves.
    """

    key: str = ""
    version: str = ""
    import_date: str = ""
    features: ProfileFeatures = field(default_factory=ProfileFeatures)

    @property
    def is_sentinel(self) -> bool:
        return not self.key


@dataclass(frozen=True, slots=True)
class ApiInfo:
    bbox: Bbox = (0.0, 0.0, 0.0, 0.0)
    version: str = ""
    import_date: str = ""
    profiles: tuple[Profile, ...] = ()

    def find_profile(self, key: str) -> Profile | None:
        for profile in self.profiles:
            if profile.key == key:
                return profile
        return None


@dataclass(frozen=True, slots=True)
class RouteRequest:
    # Points are [lng, lat] pairs, in waypoint order.
    points: tuple[tuple[float, float], ...]
    profile: str | None = None


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


class LineString(_Frozen):
    type: str = "LineString"
    coordinates: list[list[float]] = Field(default_factory=list)


class Instruction(_Frozen):
    distance: float
    time: int
    interval: tuple[int, int]
    sign: int
    text: str
    # Slice of the owning path's geometry; filled in by the decoder.
    points: list[list[float]] = Field(default_factory=list)
    street_name: str | None = None


class RouteInfo(_Frozen):
    copyright: list[str] = Field(default_factory=list)
    took: float = 0


class _BasePath(_Frozen):
    distance: float
    time: int
    ascend: float = 0.0
    descend: float = 0.0
    points_encoded: bool = False
    bbox: Bbox | None = None
    instructions: list[Instruction] = Field(default_factory=list)
    details: dict[str, list[list[Any]]] = Field(default_factory=dict)
    points_order: list[int] = Field(default_factory=list)


class RawPath(_BasePath):
    points: str | LineString
    snapped_waypoints: str | LineString


class Path(_BasePath):
    points: LineString
    snapped_waypoints: LineString


class RawRouteResult(_Frozen):
    info: RouteInfo = Field(default_factory=RouteInfo)
    paths: list[RawPath] = Field(default_factory=list)


class RouteResult(_Frozen):
    info: RouteInfo = Field(default_factory=RouteInfo)
    paths: list[Path] = Field(default_factory=list)


class ErrorResponse(BaseModel):
    message: str = "routing service error"
    hints: Any = None


class GeocodingPoint(_Frozen):
    lat: float
    lng: float


class GeocodingHit(_Frozen):
    point: GeocodingPoint
    osm_id: str | int | None = None
    osm_type: str | None = None
    osm_key: str | None = None
    osm_value: str | None = None
    name: str | None = None
    country: str | None = None
    city: str | None = None
    state: str | None = None
    street: str | None = None
    housenumber: str | None = None
    postcode: str | None = None


class GeocodingResult(_Frozen):
    hits: list[GeocodingHit] = Field(default_factory=list)
    took: float = 0


# --- Module Notes -----------------------------------------------------------
# Value types used inside the query state are dataclasses (hashable, cheap to copy);
# response payloads are pydantic so malformed service responses fail at the boundary.

"""
route_planner.routing_client.http

Async HTTP client for the routing service.

Responsibilities:
- Build route request payloads with the fixed service defaults.
- Call `/info`, `/route` and `/geocode` with the API key attached.
- Decode route geometry and republish info/route results on the event bus.
"""

from __future__ import annotations

from typing import Any

import httpx
from pydantic import ValidationError

from route_planner.dispatch.actions import InfoReceived, RouteReceived
from route_planner.dispatch.bus import EventBus
from route_planner.observability.logging import get_logger
from route_planner.routing_client.errors import ServiceError
from route_planner.routing_client.info import convert_to_api_info
from route_planner.routing_client.models import (
    ApiInfo,
    ErrorResponse,
    GeocodingResult,
    RawRouteResult,
    RouteRequest,
    RouteResult,
)
from route_planner.routing_client.polyline import decode_route_result
from route_planner.settings import Settings

log = get_logger(__name__)

DEFAULT_PROFILE = "car"


def build_route_body(
    request: RouteRequest, *, locale: str = "en", max_paths: int = 2
) -> dict[str, Any]:
    return {
        "points": [list(p) for p in request.points],
        "vehicle": request.profile or DEFAULT_PROFILE,
        "locale": locale,
        "debug": False,
        "points_encoded": True,
        "instructions": True,
        "elevation": False,
        "optimize": "false",
        "alternative_route.max_paths": max_paths,
        "ch.disable": True,
        "algorithm": "alternative_route",
    }


class RoutingClient:
    """
    Does not catch its own failures: transport errors surface as `httpx` exceptions,
    non-success responses as `ServiceError`, broken geometry as `PolylineDecodeError`.
    """

    def __init__(self, *, settings: Settings, http: httpx.AsyncClient, bus: EventBus) -> None:
        self._settings = settings
        self._http = http
        self._bus = bus

    def _url(self, path: str) -> str:
        return self._settings.routing_api_base_url.rstrip("/") + path

    def _params(self, **extra: str) -> dict[str, str]:
        return {"key": self._settings.routing_api_key, **extra}

    async def info(self) -> ApiInfo:
        r = await self._http.get(
            self._url("/info"),
            params=self._params(),
            headers={"Accept": "application/json"},
        )
        _raise_for_service_error(r)
        api_info = convert_to_api_info(r.json())
        log.info(
            "info_received",
            version=api_info.version,
            profiles=[p.key for p in api_info.profiles],
        )
        self._bus.publish(InfoReceived(api_info))
        return api_info

    async def route(self, request: RouteRequest) -> RouteResult:
        body = build_route_body(
            request,
            locale=self._settings.locale,
            max_paths=self._settings.max_alternative_paths,
        )
        r = await self._http.post(
            self._url(self._settings.route_base_path),
            params=self._params(),
            json=body,
            headers={"Accept": "application/json"},
        )
        _raise_for_service_error(r)

        raw = RawRouteResult.model_validate(r.json())
        result = decode_route_result(raw, is_3d=body["elevation"])
        log.info(
            "route_received",
            paths=len(result.paths),
            took=result.info.took,
            profile=body["vehicle"],
        )
        self._bus.publish(RouteReceived(result))
        return result

    async def geocode(self, query: str) -> GeocodingResult:
        # Plain lookup: the result goes back to the caller, not onto the bus.
        r = await self._http.get(
            self._url("/geocode"),
            params=self._params(q=query),
            headers={"Accept": "application/json"},
        )
        _raise_for_service_error(r)
        return GeocodingResult.model_validate(r.json())


def _raise_for_service_error(r: httpx.Response) -> None:
    if r.is_success:
        return
    try:
        error = ErrorResponse.model_validate(r.json())
    except (ValueError, ValidationError):
        error = ErrorResponse(message=f"routing service returned HTTP {r.status_code}")
    raise ServiceError(error.message, status_code=r.status_code, hints=error.hints)


# --- Module Notes -----------------------------------------------------------
# No retries, caching or request de-duplication: every call is a single attempt and
# overlapping route calls each publish their own `RouteReceived`.

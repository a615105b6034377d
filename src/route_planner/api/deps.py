"""
route_planner.api.deps

FastAPI dependency wiring for the API layer.

Responsibilities:
- Provide dependency functions for settings and the routing session.
"""

from __future__ import annotations

from fastapi import Request

from route_planner.services.session_service import RoutingSession
from route_planner.settings import Settings, get_settings


def settings_dep() -> Settings:
    return get_settings()


def session_dep(request: Request) -> RoutingSession:
    # The session is created in the lifespan of `route_planner.api.app.create_app`.
    return request.app.state.session  # type: ignore[attr-defined]

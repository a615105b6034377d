"""
route_planner.api.routers.health

Health and readiness endpoints.

Responsibilities:
- Provide liveness probe (`/healthz`).
- Provide readiness probe (`/readyz`) reporting whether profiles are known yet.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends

from route_planner.api.deps import session_dep
from route_planner.services.session_service import RoutingSession

router = APIRouter()


@router.get("/healthz")
async def healthz() -> dict[str, str]:
    return {"status": "ok"}


@router.get("/readyz")
async def readyz(session: RoutingSession = Depends(session_dep)) -> dict[str, Any]:
    # Routing works before `/info` resolves (the client falls back to "car").
    return {"status": "ready", "profiles_loaded": session.info.state is not None}

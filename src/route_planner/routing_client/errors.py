"""
route_planner.routing_client.errors

Failures surfaced by the routing client.

Responsibilities:
- Distinguish service-reported errors from malformed geometry.
- Leave transport failures as `httpx` exceptions.
"""

from __future__ import annotations

from typing import Any


class RoutingClientError(Exception):
    pass


class ServiceError(RoutingClientError):
    """
    Non-success HTTP status; `message` is the service's own text, surfaced verbatim.
    """

    def __init__(self, message: str, *, status_code: int, hints: Any = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.hints = hints


class PolylineDecodeError(RoutingClientError, ValueError):
    def __init__(self, message: str, *, position: int) -> None:
        super().__init__(message)
        self.position = position

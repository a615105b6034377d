"""
route_planner.services.session_service

Routing session lifecycle (composition root).

Responsibilities:
- Build the event bus once per session and hand it to every store and the client.
- Run info/route calls as asyncio tasks triggered by store side effects.
- Surface task failures to whoever waits on the session.
"""

from __future__ import annotations

import asyncio
from collections.abc import Coroutine
from typing import Any

import httpx

from route_planner.dispatch.bus import EventBus
from route_planner.observability.logging import get_logger
from route_planner.query.stores import ApiInfoStore, QueryStore, RouteStore
from route_planner.routing_client.http import RoutingClient
from route_planner.routing_client.models import GeocodingResult, RouteRequest
from route_planner.settings import Settings

log = get_logger(__name__)


class RoutingSession:
    def __init__(self, *, settings: Settings, http: httpx.AsyncClient) -> None:
        self._settings = settings
        self.bus = EventBus(max_depth=settings.max_dispatch_depth)
        self.client = RoutingClient(settings=settings, http=http, bus=self.bus)

        self.query = QueryStore(
            self.bus,
            request_route=self._schedule_route,
            preferred_profile=settings.preferred_profile,
        )
        self.routes = RouteStore(self.bus)
        self.info = ApiInfoStore(self.bus)

        self._pending: set[asyncio.Task[Any]] = set()
        self._failures: list[BaseException] = []

    def dispatch(self, action: Any) -> None:
        self.bus.publish(action)

    def start(self) -> asyncio.Task[Any]:
        # One-time profile discovery; the query keeps the sentinel profile until it lands.
        return self._spawn(self.client.info(), name="info")

    async def geocode(self, query: str) -> GeocodingResult:
        return await self.client.geocode(query)

    @property
    def pending(self) -> int:
        return len(self._pending)

    def take_failures(self) -> list[BaseException]:
        failures, self._failures = self._failures, []
        return failures

    async def wait_idle(self, *, raise_failures: bool = True) -> None:
        """
        Wait until no info/route task is in flight, then re-raise the first failure
        recorded since the last call (if any). With `raise_failures=False` the failures
        stay queued for `take_failures`.
        """

        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)
        if not raise_failures:
            return
        failures = self.take_failures()
        if failures:
            raise failures[0]

    async def aclose(self) -> None:
        for task in list(self._pending):
            task.cancel()
        if self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)
        for store in (self.query, self.routes, self.info):
            store.close()

    def _schedule_route(self, request: RouteRequest) -> None:
        # Overlapping requests are not cancelled; the last response to arrive wins.
        self._spawn(self.client.route(request), name="route")

    def _spawn(self, coro: Coroutine[Any, Any, Any], *, name: str) -> asyncio.Task[Any]:
        task = asyncio.get_running_loop().create_task(coro, name=name)
        self._pending.add(task)
        task.add_done_callback(self._on_done)
        return task

    def _on_done(self, task: asyncio.Task[Any]) -> None:
        self._pending.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            log.error(
                "routing_task_failed",
                task=task.get_name(),
                error=str(exc),
                error_type=type(exc).__name__,
            )
            self._failures.append(exc)


# --- Module Notes -----------------------------------------------------------
# Cancellation in `aclose` is shutdown cleanup only; live requests are never
# cancelled or de-duplicated while the session runs.

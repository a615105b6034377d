"""
route_planner.query.stores

State holders subscribed to the event bus.

Responsibilities:
- Apply a pure reducer to every published action and keep the resulting snapshot.
- Notify observers after transitions that change state.
- Trigger the routing side effect for query transitions that complete a query.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Generic, TypeVar

from route_planner.dispatch.bus import EventBus
from route_planner.observability.logging import get_logger
from route_planner.query.reducers import (
    DEFAULT_PREFERRED_PROFILE,
    reduce_info,
    reduce_query,
    reduce_route,
    route_request_for,
)
from route_planner.query.state import QueryState
from route_planner.routing_client.models import ApiInfo, RouteRequest, RouteResult

log = get_logger(__name__)

S = TypeVar("S")


class Store(Generic[S]):
    """
    Holds one state value. Only `_on_action` writes it; readers get immutable snapshots.
    """

    def __init__(self, bus: EventBus, initial: S) -> None:
        self._bus = bus
        self._state = initial
        self._listeners: list[Callable[[S], None]] = []
        self._token = bus.subscribe(self._on_action)

    @property
    def state(self) -> S:
        return self._state

    def get_state(self) -> S:
        return self._state

    def subscribe(self, listener: Callable[[S], None]) -> Callable[[], None]:
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def close(self) -> None:
        self._bus.unsubscribe(self._token)

    def reduce(self, state: S, action: Any) -> S:
        raise NotImplementedError

    def after_transition(self, state: S, action: Any) -> None:
        # Side-effect hook, runs for every action once the new state is in place.
        return None

    def _on_action(self, action: Any) -> None:
        previous = self._state
        new_state = self.reduce(previous, action)
        if new_state is not previous and new_state != previous:
            self._state = new_state
            log.debug("store_transition", store=type(self).__name__, action=type(action).__name__)
            for listener in list(self._listeners):
                listener(new_state)
        self.after_transition(self._state, action)


class QueryStore(Store[QueryState]):
    def __init__(
        self,
        bus: EventBus,
        *,
        request_route: Callable[[RouteRequest], None] | None = None,
        preferred_profile: str = DEFAULT_PREFERRED_PROFILE,
        initial: QueryState | None = None,
    ) -> None:
        self._request_route = request_route
        self._preferred_profile = preferred_profile
        super().__init__(bus, initial or QueryState.initial())

    def reduce(self, state: QueryState, action: Any) -> QueryState:
        return reduce_query(state, action, preferred_profile=self._preferred_profile)

    def after_transition(self, state: QueryState, action: Any) -> None:
        request = route_request_for(state, action)
        if request is None:
            return
        log.info(
            "route_requested",
            trigger=type(action).__name__,
            points=len(request.points),
            profile=request.profile,
        )
        if self._request_route is not None:
            self._request_route(request)


class RouteStore(Store[RouteResult | None]):
    def __init__(self, bus: EventBus) -> None:
        super().__init__(bus, None)

    def reduce(self, state: RouteResult | None, action: Any) -> RouteResult | None:
        return reduce_route(state, action)


class ApiInfoStore(Store[ApiInfo | None]):
    def __init__(self, bus: EventBus) -> None:
        super().__init__(bus, None)

    def reduce(self, state: ApiInfo | None, action: Any) -> ApiInfo | None:
        return reduce_info(state, action)


# --- Module Notes -----------------------------------------------------------
# With a single-threaded event loop the bus serialises all writes; a multi-threaded
# host would need to make `_on_action` atomic per store.

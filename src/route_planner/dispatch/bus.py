"""
route_planner.dispatch.bus

Synchronous publish/subscribe channel.

Responsibilities:
- Deliver each action to every subscriber in registration order before `publish` returns.
- Resolve nested publishes depth-first and reject self-recursive dispatch.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from route_planner.dispatch.errors import DispatchRecursionError
from route_planner.observability.logging import get_logger

log = get_logger(__name__)

Handler = Callable[[Any], None]


@dataclass(frozen=True, slots=True)
class SubscriptionToken:
    id: int


class EventBus:
    def __init__(self, *, max_depth: int = 32) -> None:
        self._handlers: dict[int, Handler] = {}
        self._next_id = 0
        self._max_depth = max_depth
        # Kinds of the actions currently being delivered, outermost first.
        self._dispatching: list[type] = []

    def subscribe(self, handler: Handler) -> SubscriptionToken:
        token = SubscriptionToken(self._next_id)
        self._next_id += 1
        self._handlers[token.id] = handler
        return token

    def unsubscribe(self, token: SubscriptionToken) -> None:
        self._handlers.pop(token.id, None)

    @property
    def is_dispatching(self) -> bool:
        return bool(self._dispatching)

    def publish(self, action: Any) -> None:
        kind = type(action)
        if kind in self._dispatching or len(self._dispatching) >= self._max_depth:
            stack = tuple(k.__name__ for k in self._dispatching)
            raise DispatchRecursionError(
                f"cannot publish {kind.__name__} while dispatching {' > '.join(stack)}",
                stack=stack,
            )

        # Subscribers added or removed during delivery take effect on the next publish.
        handlers = list(self._handlers.values())
        self._dispatching.append(kind)
        log.debug("action_published", action=kind.__name__, depth=len(self._dispatching))
        try:
            for handler in handlers:
                handler(action)
        finally:
            self._dispatching.pop()


# --- Module Notes -----------------------------------------------------------
# The bus is a plain value built by the session composition root; there is no
# module-level instance.

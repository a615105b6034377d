"""
route_planner.dispatch.errors

Exceptions raised by the event bus.
"""

from __future__ import annotations


class DispatchRecursionError(RuntimeError):
    """
    Raised when a handler re-publishes an action whose kind is already being
    dispatched, or when nesting exceeds the configured depth.
    """

    def __init__(self, message: str, *, stack: tuple[str, ...]) -> None:
        super().__init__(message)
        self.stack = stack

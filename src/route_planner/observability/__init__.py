"""
route_planner.observability

Observability package.

Responsibilities:
- Structured logging configuration.
- Request-scoped context propagation for the HTTP surface.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Metrics/tracing are not wired; structured logs are the only signal.

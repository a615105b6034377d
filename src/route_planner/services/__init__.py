"""
route_planner.services

Service-layer package.

Responsibilities:
- Compose bus, stores and routing client into one session.
- Own the asyncio tasks that carry network calls.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Services should be pure Python and easily testable with fake transports.

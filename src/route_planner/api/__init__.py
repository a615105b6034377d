"""
route_planner.api

HTTP surface for a browser UI.

Responsibilities:
- App factory and lifespan (session + shared HTTP client).
- Routers that read store snapshots and publish actions.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Routers never mutate state directly; every change goes through the session bus.

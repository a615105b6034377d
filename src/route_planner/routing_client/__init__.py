"""
route_planner.routing_client

HTTP client boundary towards the remote routing service.

Responsibilities:
- Wire models for `/route`, `/info` and `/geocode`.
- Polyline geometry decoding.
- The async client that republishes results onto the event bus.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Submodules are imported explicitly by call sites to keep import order acyclic
# (the action catalog depends on `routing_client.models`).

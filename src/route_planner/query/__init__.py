"""
route_planner.query

Query state machine.

Responsibilities:
- Typed query state (waypoints + selected profile).
- Pure reducers and the routing-trigger decision.
- Store holders that apply reducers and notify observers.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Stores are the only writers of their state; everything else reads snapshots.

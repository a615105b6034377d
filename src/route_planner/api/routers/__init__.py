"""
route_planner.api.routers

FastAPI routers.
"""

# Package marker.

"""
route_planner.dispatch

Action catalog and synchronous event bus.

Responsibilities:
- Define the closed set of intents exchanged between UI, stores and the routing client.
- Deliver every published action to every subscriber.
"""

# Package marker.

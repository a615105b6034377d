"""
tests.conftest

Shared fixtures: an in-process fake of the routing service behind `httpx.MockTransport`.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any

import httpx
import pytest

from route_planner.settings import Settings

BASE_URL = "https://routing.test/api/1"

# Reference vector: [[-120.2, 38.5], [-120.95, 40.7], [-126.453, 43.252]]
ENCODED_PATH = "_p~iF~ps|U_ulLnnqC_mqNvxq`@"
ENCODED_SNAPPED = "_p~iF~ps|U_ulLnnqC"

INFO_PAYLOAD: dict[str, Any] = {
    "bbox": [13.0, 52.3, 13.8, 52.7],
    "version": "8.0",
    "import_date": "2024-05-01T10:00:00Z",
    "features": {"bike": {"elevation": True}, "car": {"elevation": False}},
    "bike": {"version": "2", "import_date": "2024-05-01"},
    "car": {"version": "1", "import_date": "2024-05-02"},
}


def route_payload(**path_overrides: Any) -> dict[str, Any]:
    path: dict[str, Any] = {
        "distance": 512.3,
        "time": 61000,
        "ascend": 0.0,
        "descend": 0.0,
        "points_encoded": True,
        "bbox": [-126.453, 38.5, -120.2, 43.252],
        "instructions": [
            {"distance": 300.0, "time": 40000, "interval": [0, 1], "sign": 0, "text": "Continue"},
            {"distance": 212.3, "time": 21000, "interval": [1, 2], "sign": 2, "text": "Turn right"},
            {"distance": 0.0, "time": 0, "interval": [2, 2], "sign": 4, "text": "Arrive"},
        ],
        "details": {},
        "points_order": [0, 1],
        "points": ENCODED_PATH,
        "snapped_waypoints": ENCODED_SNAPPED,
    }
    path.update(path_overrides)
    return {
        "info": {"copyright": ["GraphHopper", "OpenStreetMap contributors"], "took": 4},
        "paths": [path],
    }


@dataclass
class FakeRoutingService:
    """
    Records every request; responses can be overridden per endpoint.
    """

    requests: list[httpx.Request] = field(default_factory=list)
    route_status: int = 200
    route_json: dict[str, Any] = field(default_factory=route_payload)
    info_status: int = 200
    info_json: dict[str, Any] = field(default_factory=lambda: dict(INFO_PAYLOAD))

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path
        if path.endswith("/route"):
            return httpx.Response(self.route_status, json=self.route_json)
        if path.endswith("/info"):
            return httpx.Response(self.info_status, json=self.info_json)
        if path.endswith("/geocode"):
            return httpx.Response(
                200,
                json={
                    "hits": [
                        {
                            "point": {"lat": 52.52, "lng": 13.405},
                            "osm_id": 240109189,
                            "name": request.url.params["q"],
                            "country": "Germany",
                        }
                    ],
                    "took": 2,
                },
            )
        return httpx.Response(404, json={"message": f"no such endpoint {path}"})

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def route_bodies(self) -> list[dict[str, Any]]:
        return [
            json.loads(r.content) for r in self.requests if r.url.path.endswith("/route")
        ]


@pytest.fixture
def settings() -> Settings:
    return Settings(env="test", routing_api_base_url=BASE_URL, routing_api_key="test-key")


@pytest.fixture
def fake_service() -> FakeRoutingService:
    return FakeRoutingService()

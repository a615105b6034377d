"""
route_planner.settings

Central configuration model (Pydantic Settings).

Responsibilities:
- Provide strongly-typed, env-driven settings for all layers.
- Hide secrets from repr/logging (e.g., routing API key).
- Offer a cached settings instance for dependency injection.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    - Strict env-driven configuration (prefix `ROUTE_PLANNER_`)
    - Defaults point at the public GraphHopper endpoint
    - Single settings object injected across layers
    """

    model_config = SettingsConfigDict(env_prefix="ROUTE_PLANNER_", case_sensitive=False)

    env: Literal["dev", "test", "prod"] = "dev"
    service_name: str = "route-planner"
    log_level: str = "INFO"

    api_host: str = "0.0.0.0"
    api_port: int = 8080

    # Routing service
    routing_api_base_url: str = "https://graphhopper.com/api/1"
    routing_api_key: str = Field(default="", repr=False)
    route_base_path: str = "/route"
    http_timeout_s: float = 10.0

    # Route request defaults
    locale: str = "en"
    max_alternative_paths: int = 2

    # Query state machine
    preferred_profile: str = "car"
    max_dispatch_depth: int = 32

    # Session
    fetch_info_on_startup: bool = True


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    # Cache avoids re-parsing env vars for each request dependency.
    return Settings()


# --- Module Notes -----------------------------------------------------------
# `preferred_profile` is a selection policy, not a structural requirement: the
# query reducer falls back to the first advertised profile when it is missing.

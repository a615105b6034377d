"""
route_planner.routing_client.info

Conversion of the `/info` payload into `ApiInfo`.

The payload mixes fixed fields (`bbox`, `version`, `import_date`, `features`) with one
entry per profile keyed by profile name; `features` is keyed by the same names and
decides which top-level fields are profiles.
"""

from __future__ import annotations

from typing import Any

from route_planner.observability.logging import get_logger
from route_planner.routing_client.models import ApiInfo, Profile, ProfileFeatures

log = get_logger(__name__)


def convert_to_api_info(payload: dict[str, Any]) -> ApiInfo:
    bbox: tuple[float, float, float, float] = (0.0, 0.0, 0.0, 0.0)
    version = ""
    import_date = ""
    profiles: list[Profile] = []

    features = payload.get("features") or {}

    for name, value in payload.items():
        if name in features:
            entry = value if isinstance(value, dict) else {}
            profiles.append(
                Profile(
                    key=name,
                    version=str(entry.get("version", "")),
                    import_date=str(entry.get("import_date", "")),
                    features=ProfileFeatures(
                        elevation=bool((features[name] or {}).get("elevation", False))
                    ),
                )
            )
        elif name == "bbox":
            bbox = tuple(float(v) for v in value)  # type: ignore[assignment]
        elif name == "version":
            version = str(value)
        elif name == "import_date":
            import_date = str(value)
        elif name != "features":
            log.warning("unexpected_info_property", property=name)

    return ApiInfo(bbox=bbox, version=version, import_date=import_date, profiles=tuple(profiles))

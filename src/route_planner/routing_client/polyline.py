"""
route_planner.routing_client.polyline

Decoding of the compact polyline geometry returned with `points_encoded=true`.

Responsibilities:
- Decode delta/zig-zag/5-bit chunked strings into `[lng, lat(, ele)]` lists.
- Attach decoded geometry to paths and slice it onto instructions.
"""

from __future__ import annotations

from route_planner.routing_client.errors import PolylineDecodeError
from route_planner.routing_client.models import (
    Instruction,
    LineString,
    Path,
    RawPath,
    RawRouteResult,
    RouteResult,
)

_OFFSET = 63
_MAX_CHAR = 126


def decode_polyline(encoded: str, is_3d: bool = False) -> list[list[float]]:
    """
    Decode an encoded polyline.

    Latitude and longitude are stored with 1e-5 precision, elevation (3D variant only)
    in centimetres. Output order is `[lng, lat]` or `[lng, lat, ele]`.
    """

    coordinates: list[list[float]] = []
    index = 0
    lat = lng = ele = 0
    length = len(encoded)

    while index < length:
        delta, index = _next_value(encoded, index)
        lat += delta
        delta, index = _next_value(encoded, index)
        lng += delta
        if is_3d:
            delta, index = _next_value(encoded, index)
            ele += delta
            coordinates.append([lng * 1e-5, lat * 1e-5, ele / 100])
        else:
            coordinates.append([lng * 1e-5, lat * 1e-5])

    return coordinates


def _next_value(encoded: str, index: int) -> tuple[int, int]:
    result = 0
    shift = 0
    while True:
        if index >= len(encoded):
            raise PolylineDecodeError(
                f"polyline truncated: value starting before position {index} is incomplete "
                f"(length {len(encoded)})",
                position=index,
            )
        code = ord(encoded[index])
        if code < _OFFSET or code > _MAX_CHAR:
            raise PolylineDecodeError(
                f"invalid polyline character {encoded[index]!r} at position {index}",
                position=index,
            )
        b = code - _OFFSET
        index += 1
        result |= (b & 0x1F) << shift
        shift += 5
        if b < 0x20:
            break
    # zig-zag: odd values are negative
    value = ~(result >> 1) if result & 1 else result >> 1
    return value, index


def decode_geometry(raw: str | LineString, *, encoded: bool, is_3d: bool = False) -> LineString:
    if encoded and isinstance(raw, str):
        return LineString(type="LineString", coordinates=decode_polyline(raw, is_3d))
    if isinstance(raw, str):
        raise PolylineDecodeError(
            "path geometry is a string but points_encoded is false", position=0
        )
    return raw


def slice_instructions(instructions: list[Instruction], points: LineString) -> list[Instruction]:
    # Intervals are inclusive of their end index.
    return [
        i.model_copy(
            update={"points": points.coordinates[i.interval[0] : i.interval[1] + 1]}
        )
        for i in instructions
    ]


def decode_path(raw: RawPath, *, is_3d: bool = False) -> Path:
    points = decode_geometry(raw.points, encoded=raw.points_encoded, is_3d=is_3d)
    snapped = decode_geometry(raw.snapped_waypoints, encoded=raw.points_encoded, is_3d=is_3d)
    fields = raw.model_dump(exclude={"points", "snapped_waypoints", "instructions"})
    return Path(
        **fields,
        points=points,
        snapped_waypoints=snapped,
        instructions=slice_instructions(raw.instructions, points),
    )


def decode_route_result(raw: RawRouteResult, *, is_3d: bool = False) -> RouteResult:
    return RouteResult(info=raw.info, paths=[decode_path(p, is_3d=is_3d) for p in raw.paths])

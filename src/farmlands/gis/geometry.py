"""Coordinate helpers for GeoJSON polygon geometry."""

from __future__ import annotations

from collections.abc import Iterator
from numbers import Real
from typing import Any

from farmlands.core.types import Bounds


def iter_positions(coordinates: Any) -> Iterator[tuple[float, float]]:
    """Yield every ``(lng, lat)`` position in a nested coordinate array.

    Works for any nesting depth, so Polygon and MultiPolygon rings (and
    points or lines, should they appear) are handled alike. Positions that
    are not at least two numbers are skipped.
    """
    if not isinstance(coordinates, (list, tuple)) or not coordinates:
        return
    first = coordinates[0]
    if isinstance(first, Real) and not isinstance(first, bool):
        second = coordinates[1] if len(coordinates) >= 2 else None
        if isinstance(second, Real) and not isinstance(second, bool):
            yield float(coordinates[0]), float(coordinates[1])
        return
    for child in coordinates:
        yield from iter_positions(child)


def geometry_bounds(geometry: Any) -> Bounds | None:
    """Compute the bounding box of a GeoJSON geometry.

    Returns None when the geometry is not a mapping or carries no usable
    positions.
    """
    if not isinstance(geometry, dict) or not geometry:
        return None

    if geometry.get("type") == "GeometryCollection":
        parts = geometry.get("geometries")
        if not isinstance(parts, list):
            return None
        result: Bounds | None = None
        for part in parts:
            part_bounds = geometry_bounds(part)
            if part_bounds is None:
                continue
            result = part_bounds if result is None else result.union(part_bounds)
        return result

    south = west = float("inf")
    north = east = float("-inf")
    seen = False
    for lng, lat in iter_positions(geometry.get("coordinates")):
        seen = True
        west = min(west, lng)
        east = max(east, lng)
        south = min(south, lat)
        north = max(north, lat)

    if not seen:
        return None
    return Bounds(south=south, west=west, north=north, east=east)

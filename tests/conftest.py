"""Shared test fixtures and helpers."""

from __future__ import annotations

from typing import Any

import pytest

from farmlands.gis.store import GeoRecordStore


def square(west: float, south: float, size: float) -> dict[str, Any]:
    """A square Polygon geometry with its south-west corner at (west, south)."""
    east, north = west + size, south + size
    return {
        "type": "Polygon",
        "coordinates": [[
            [west, south], [east, south], [east, north], [west, north], [west, south],
        ]],
    }


def feature(geometry: dict[str, Any] | None = None, **properties: Any) -> dict[str, Any]:
    return {
        "type": "Feature",
        "geometry": geometry if geometry is not None else square(18.0, -34.0, 0.01),
        "properties": properties,
    }


def collection(*features: dict[str, Any]) -> dict[str, Any]:
    return {"type": "FeatureCollection", "features": list(features)}


@pytest.fixture
def scenario_data() -> dict[str, Any]:
    """The three-farm dataset used by the documented scenarios."""
    return collection(
        feature(square(18.46, -33.96, 0.03), name="Goede Hoop", owner="Van Riebeeck", date="1657-04-02"),
        feature(square(18.49, -33.94, 0.01), name="Nieuwland", owner="Van Riebeeck", date="1700-01-01"),
        feature(square(18.85, -33.93, 0.02), name="Oosthuizen", owner=None, date="1750-06-01"),
    )


@pytest.fixture
def scenario_store(scenario_data) -> GeoRecordStore:
    return GeoRecordStore.from_geojson(scenario_data)


@pytest.fixture
def mixed_store() -> GeoRecordStore:
    """Records exercising every optional-field combination."""
    return GeoRecordStore.from_geojson(collection(
        feature(square(18.90, -33.80, 0.05), name="Vergelegen", owner="Willem Adriaan van der Stel", date="1700-02-01"),
        feature(square(18.70, -33.70, 0.02), owner="Willem Adriaan van der Stel", date="1700-03-15"),
        feature(square(18.72, -33.73, 0.01), name="Klein Zoar", owner="Jacob Cloete", date="unknown"),
        feature(square(18.96, -33.74, 0.03), name="De Zoete Inval", owner="Jacob Cloete", date="1688-11-20"),
        feature(square(18.88, -33.85, 0.04), name="Welmoed", owner="Henning Huysing"),
        feature(square(18.80, -33.60, 0.02), name="Ébène", owner="Éloff", date="1720"),
    ))

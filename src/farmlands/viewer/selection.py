"""Farm search over the currently visible records."""

from __future__ import annotations

from collections.abc import Callable, Iterable

from pydantic import BaseModel, ConfigDict

from farmlands.core.types import Bounds
from farmlands.gis.geometry import geometry_bounds
from farmlands.gis.models import GeoRecord


class Found(BaseModel):
    """A search hit and the bounds to fit the map to."""

    model_config = ConfigDict(frozen=True)

    record: GeoRecord
    bounds: Bounds | None

    @property
    def found(self) -> bool:
        return True


class NotFound(BaseModel):
    """No visible farm carries the searched name."""

    model_config = ConfigDict(frozen=True)

    query: str

    @property
    def found(self) -> bool:
        return False


SearchResult = Found | NotFound


def resolve(
    records: Iterable[GeoRecord],
    query: str,
    bounds_for: Callable[[GeoRecord], Bounds | None] | None = None,
) -> SearchResult:
    """Find the first record whose name equals ``query`` ignoring case.

    Only the records passed in are searched, so a farm hidden by the year
    filter cannot be found. Later records with the same name are ignored.
    """
    wanted = query.casefold()
    for record in records:
        if record.name is None:
            continue
        if record.name.casefold() == wanted:
            bounds = bounds_for(record) if bounds_for else geometry_bounds(record.geometry)
            return Found(record=record, bounds=bounds)
    return NotFound(query=query)

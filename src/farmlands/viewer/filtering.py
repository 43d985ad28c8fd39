"""Year-threshold filter over farm records."""

from __future__ import annotations

from collections.abc import Iterable

from farmlands.gis.dates import parse_year
from farmlands.gis.models import GeoRecord
from farmlands.viewer.state import FilterState


def filter_records(
    records: Iterable[GeoRecord], filter_state: FilterState
) -> tuple[GeoRecord, ...]:
    """Return the records visible under ``filter_state``, in input order.

    With the filter disabled every record passes. With it enabled a record
    passes only if its date parses to a year no later than the threshold;
    missing or unreadable dates are dropped.
    """
    if not filter_state.year_enabled:
        return tuple(records)

    visible: list[GeoRecord] = []
    for record in records:
        year = parse_year(record.date)
        if year is not None and year <= filter_state.year:
            visible.append(record)
    return tuple(visible)


def filter_state_for(year: int | None) -> FilterState:
    """Filter state for an optional year threshold (None disables it)."""
    if year is None:
        return FilterState()
    return FilterState(year_enabled=True, year=year)

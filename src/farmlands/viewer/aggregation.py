"""Owner tallies and farm rankings over the filtered record set."""

from __future__ import annotations

import unicodedata
from collections.abc import Callable, Iterable

from farmlands.core.types import Bounds
from farmlands.gis.geometry import geometry_bounds
from farmlands.gis.models import FarmEntry, GeoRecord, OwnerCount


def collation_key(text: str) -> tuple[str, str]:
    """Sort key approximating a locale-aware comparison.

    Accents and case are ignored on the first pass; the exact text breaks
    ties so the order stays total and deterministic.
    """
    decomposed = unicodedata.normalize("NFKD", text)
    base = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return base.casefold(), text


def aggregate_owners(records: Iterable[GeoRecord]) -> list[OwnerCount]:
    """Count records per owner, ordered by owner name."""
    counts: dict[str, int] = {}
    for record in records:
        if record.owner is None:
            continue
        counts[record.owner] = counts.get(record.owner, 0) + 1

    return [
        OwnerCount(owner=owner, count=counts[owner])
        for owner in sorted(counts, key=collation_key)
    ]


def size_proxy(record: GeoRecord, bounds_for: Callable[[GeoRecord], Bounds | None] | None = None) -> float:
    """Bounding-box width of a record's geometry, 0.0 if it has none."""
    bounds = bounds_for(record) if bounds_for else geometry_bounds(record.geometry)
    if bounds is None:
        return 0.0
    return bounds.width


def rank_farms(
    records: Iterable[GeoRecord],
    rank_by_size: bool,
    bounds_for: Callable[[GeoRecord], Bounds | None] | None = None,
) -> list[FarmEntry]:
    """List named farms, smallest first or alphabetically.

    Unnamed records are left out. Sorting is stable, so farms with equal
    keys keep their input order.
    """
    entries = [
        FarmEntry(
            name=record.name,
            owner=record.owner,
            size_proxy=size_proxy(record, bounds_for),
            index=record.index,
        )
        for record in records
        if record.name is not None
    ]

    if rank_by_size:
        entries.sort(key=lambda entry: entry.size_proxy)
    else:
        entries.sort(key=lambda entry: collation_key(entry.name))
    return entries

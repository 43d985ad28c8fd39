"""Immutable store of farm polygon records loaded from GeoJSON."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterator
from pathlib import Path
from typing import Any

from farmlands.core.types import Bounds
from farmlands.gis.dates import parse_year
from farmlands.gis.geometry import geometry_bounds
from farmlands.gis.models import DatasetSummary, GeoRecord

logger = logging.getLogger(__name__)


class DatasetError(Exception):
    """Raised when the dataset file cannot be read or decoded."""


class GeoRecordStore:
    """Read-only collection of farm records.

    Built once at startup and shared by every viewer session. Malformed
    features are skipped rather than rejecting the whole dataset.
    """

    def __init__(self, records: list[GeoRecord] | tuple[GeoRecord, ...] = (), skipped: int = 0) -> None:
        self._records: tuple[GeoRecord, ...] = tuple(records)
        self._skipped = skipped
        self._bounds: dict[int, Bounds | None] = {
            record.index: geometry_bounds(record.geometry) for record in self._records
        }

    @classmethod
    def from_geojson(cls, data: Any) -> GeoRecordStore:
        """Build a store from a decoded GeoJSON FeatureCollection."""
        if not isinstance(data, dict) or not isinstance(data.get("features"), list):
            logger.warning("Dataset is not a FeatureCollection; starting with no records")
            return cls()

        records: list[GeoRecord] = []
        skipped = 0
        for position, feature in enumerate(data["features"]):
            record = _feature_to_record(position, feature)
            if record is None:
                skipped += 1
                logger.warning("Skipping malformed feature at position %d", position)
                continue
            records.append(record)

        logger.info("Loaded %d farm records (%d skipped)", len(records), skipped)
        return cls(records, skipped=skipped)

    @classmethod
    def from_file(cls, path: str | Path) -> GeoRecordStore:
        """Load a store from a GeoJSON file on disk."""
        path = Path(path)
        try:
            with open(path, encoding="utf-8") as fh:
                data = json.load(fh)
        except OSError as exc:
            raise DatasetError(f"Cannot read dataset {str(path)!r}: {exc}") from exc
        except json.JSONDecodeError as exc:
            raise DatasetError(f"Dataset {str(path)!r} is not valid JSON: {exc}") from exc
        return cls.from_geojson(data)

    @property
    def records(self) -> tuple[GeoRecord, ...]:
        return self._records

    @property
    def count(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[GeoRecord]:
        return iter(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def bounds_for(self, record: GeoRecord) -> Bounds | None:
        """Return the cached bounding box of a record in this store."""
        if record.index in self._bounds:
            return self._bounds[record.index]
        return geometry_bounds(record.geometry)

    def summary(self) -> DatasetSummary:
        undated = sum(1 for r in self._records if r.date is None)
        return DatasetSummary(
            total=len(self._records),
            skipped=self._skipped,
            unnamed=sum(1 for r in self._records if r.name is None),
            unowned=sum(1 for r in self._records if r.owner is None),
            undated=undated,
            unparsable_dates=sum(
                1 for r in self._records
                if r.date is not None and parse_year(r.date) is None
            ),
        )


def _feature_to_record(position: int, feature: Any) -> GeoRecord | None:
    if not isinstance(feature, dict):
        return None
    geometry = feature.get("geometry")
    if not isinstance(geometry, dict):
        return None
    properties = feature.get("properties")
    if not isinstance(properties, dict):
        properties = {}
    return GeoRecord(
        index=position,
        geometry=geometry,
        name=properties.get("name"),
        owner=properties.get("owner"),
        date=properties.get("date"),
        properties=properties,
    )

"""GIS data models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class GeoRecord(BaseModel):
    """One digitized farm polygon with its grant metadata.

    ``name``, ``owner`` and ``date`` are optional. Blank strings are
    stored as ``None`` so consumers only ever check for absence; any other
    text is kept exactly as given.
    """

    model_config = ConfigDict(frozen=True)

    index: int
    geometry: dict[str, Any]
    name: str | None = None
    owner: str | None = None
    date: str | None = None
    properties: dict[str, Any] = Field(default_factory=dict)

    @field_validator("name", "owner", "date", mode="before")
    @classmethod
    def _blank_to_none(cls, value: Any) -> str | None:
        if value is None:
            return None
        text = str(value)
        return text if text.strip() else None

    def to_feature(self) -> dict[str, Any]:
        """Return the record as a GeoJSON Feature."""
        return {
            "type": "Feature",
            "geometry": self.geometry,
            "properties": dict(self.properties),
        }


class OwnerCount(BaseModel):
    """Number of records held by one owner in the filtered set."""

    owner: str
    count: int


class FarmEntry(BaseModel):
    """One line of the farm listing."""

    name: str
    owner: str | None = None
    size_proxy: float = 0.0
    index: int


class DatasetSummary(BaseModel):
    """Record counts describing a loaded dataset."""

    total: int = 0
    skipped: int = 0
    unnamed: int = 0
    unowned: int = 0
    undated: int = 0
    unparsable_dates: int = 0

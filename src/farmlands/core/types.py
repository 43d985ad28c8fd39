"""Core type definitions shared across all farmlands modules."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class Bounds(BaseModel):
    """Axis-aligned rectangle in geographic coordinates (degrees)."""

    model_config = ConfigDict(frozen=True)

    south: float
    west: float
    north: float
    east: float

    @property
    def width(self) -> float:
        """East-minus-west extent, used as a cheap stand-in for area."""
        return self.east - self.west

    def as_leaflet(self) -> list[list[float]]:
        return [[self.south, self.west], [self.north, self.east]]

    def union(self, other: Bounds) -> Bounds:
        return Bounds(
            south=min(self.south, other.south),
            west=min(self.west, other.west),
            north=max(self.north, other.north),
            east=max(self.east, other.east),
        )

"""
Synthetic temperature field — grid cells, sample points and the aggregate
result returned by the field synthesizer.

All types are frozen: a FieldResult is built once, fully populated, and
never mutated afterwards.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class GridCell:
    latitude: float  # [-90, 90]
    longitude: float  # [-180, 180)


@dataclass(frozen=True)
class SamplePoint:
    """One synthesized temperature sample at a grid cell."""

    latitude: float
    longitude: float
    temperature: float  # °C, one decimal place
    magnitude: float  # [0, 1], for colour / intensity mapping

    def to_feature(self) -> dict[str, Any]:
        """GeoJSON Point feature (coordinates are [lng, lat])."""
        return {
            "type": "Feature",
            "properties": {
                "temp": self.temperature,
                "mag": self.magnitude,
            },
            "geometry": {
                "type": "Point",
                "coordinates": [self.longitude, self.latitude],
            },
        }


@dataclass(frozen=True)
class FieldMetadata:
    source: str
    description: str
    units: str
    resolution: str  # e.g. "4deg"
    time: str  # e.g. "Nov 2025"
    time_index: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "source": self.source,
            "description": self.description,
            "units": self.units,
            "resolution": self.resolution,
            "time": self.time,
            "timeIndex": self.time_index,
        }


@dataclass(frozen=True)
class FieldResult:
    metadata: FieldMetadata
    points: tuple[SamplePoint, ...]

    def __len__(self) -> int:
        return len(self.points)

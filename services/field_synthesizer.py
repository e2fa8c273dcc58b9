"""
Field synthesizer — samples the temperature model on a regular global
latitude/longitude grid for one time index.

Grid (step 4°):
  latitude   -90, -86, ..., 90     inclusive upper bound (46 rows)
  longitude  -180, -176, ..., 176  exclusive upper bound (90 columns)

Points are produced row-major (latitude, then longitude).  iter_points()
is lazy so a caller can stream the field without materializing it;
synthesize() returns the fully built, immutable FieldResult.
"""
from __future__ import annotations

import logging
import math
from typing import Iterator

import config
from models.field import FieldMetadata, FieldResult, GridCell, SamplePoint
from services.temperature_model import TemperatureModel
from services.time_resolver import resolve_time

logger = logging.getLogger("climate_grid.field_synthesizer")


def format_resolution(step: float) -> str:
    """4.0 → "4deg", 2.5 → "2.5deg"."""
    return f"{step:g}deg"


class LatLonGrid:
    """
    Restartable, sized iterable of GridCells.

    Each call to ``iter()`` starts a new pass, so the same grid can be
    walked any number of times.  Coordinates are ``start + i * step``
    rather than accumulated, so no rounding drift builds up across a row.
    """

    LAT_MIN, LAT_MAX = -90.0, 90.0
    LNG_MIN, LNG_MAX = -180.0, 180.0

    def __init__(self, step: float = config.GRID_STEP_DEG) -> None:
        if not step > 0:
            raise ValueError(f"Grid step must be positive, got {step!r}")
        self.step = float(step)
        # lat <= 90 (inclusive), lng < 180 (exclusive)
        self._n_lat = math.floor((self.LAT_MAX - self.LAT_MIN) / self.step) + 1
        self._n_lng = math.ceil((self.LNG_MAX - self.LNG_MIN) / self.step)

    @property
    def shape(self) -> tuple[int, int]:
        return self._n_lat, self._n_lng

    def latitudes(self) -> list[float]:
        return [self.LAT_MIN + i * self.step for i in range(self._n_lat)]

    def longitudes(self) -> list[float]:
        return [self.LNG_MIN + j * self.step for j in range(self._n_lng)]

    def __len__(self) -> int:
        return self._n_lat * self._n_lng

    def __iter__(self) -> Iterator[GridCell]:
        longitudes = self.longitudes()
        for lat in self.latitudes():
            for lng in longitudes:
                yield GridCell(latitude=lat, longitude=lng)

    def __repr__(self) -> str:
        return f"LatLonGrid(step={self.step:g}, shape={self.shape})"


class FieldSynthesizer:
    """
    Stateless generator of synthetic temperature fields.

    Safe to share between concurrent requests: every call reads only its
    arguments and the immutable model/grid, and allocates fresh output.
    """

    def __init__(
        self,
        model: TemperatureModel | None = None,
        step: float = config.GRID_STEP_DEG,
        source: str = config.FIELD_SOURCE,
        description: str = config.FIELD_DESCRIPTION,
        units: str = config.FIELD_UNITS,
    ) -> None:
        self.model = model or TemperatureModel()
        self.grid = LatLonGrid(step)
        self._source = source
        self._description = description
        self._units = units

    def metadata(self, time_index: int) -> FieldMetadata:
        resolved = resolve_time(time_index)
        return FieldMetadata(
            source=self._source,
            description=self._description,
            units=self._units,
            resolution=format_resolution(self.grid.step),
            time=resolved.label,
            time_index=time_index,
        )

    def iter_points(self, time_index: int) -> Iterator[SamplePoint]:
        """Lazily yield one SamplePoint per grid cell, row-major."""
        model = self.model
        resolved = resolve_time(time_index)
        # Time-dependent terms are constant over the grid
        warming_base = model.warming_base(time_index)
        season_effect = model.season_effect(resolved.month)

        for cell in self.grid:
            temp = model.temperature(
                cell.latitude, cell.longitude, warming_base, season_effect
            )
            yield SamplePoint(
                latitude=cell.latitude,
                longitude=cell.longitude,
                temperature=temp,
                magnitude=model.magnitude(temp),
            )

    def synthesize(self, time_index: int) -> FieldResult:
        """Build the complete field for *time_index*."""
        metadata = self.metadata(time_index)
        points = tuple(self.iter_points(time_index))
        logger.debug(
            "Synthesized %s (index %d) — %d points",
            metadata.time,
            time_index,
            len(points),
        )
        return FieldResult(metadata=metadata, points=points)

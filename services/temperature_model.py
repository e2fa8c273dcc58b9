"""
Synthetic temperature model.

temperature(lat, lng, t) = base(lat) + warming(t) + regional(lat, lng) + seasonal(lat, month)

  base       30 °C at the equator, falling 0.6 °C per degree of latitude
  warming    linear secular trend, 0 → 2 °C across the nominal index range
  regional   longitude wave (±3 °C) plus a latitude wave (±2 °C)
  seasonal   sinusoid with its minimum in January and maximum in July,
             scaled by |lat|/90 so the equator has no seasonal swing

The model is deliberately simple and deterministic: the same inputs always
give bit-identical output, which the HTTP cache and the map animation rely
on.  Every term is finite for finite input (no divisions by a variable, no
trig domain restrictions).
"""
from __future__ import annotations

import math
from dataclasses import dataclass

import config


def round_half_up(value: float, ndigits: int = 1) -> float:
    """Round half toward +inf (0.25 → 0.3, -0.25 → -0.2), unlike round()."""
    scale = 10 ** ndigits
    return math.floor(value * scale + 0.5) / scale


@dataclass(frozen=True)
class TemperatureModel:
    """Parameters of the synthetic temperature field (all °C / degrees)."""

    warming_span_months: int = config.WARMING_SPAN_MONTHS
    warming_total_c: float = config.WARMING_TOTAL_C
    base_temp_c: float = config.BASE_TEMP_C
    lapse_per_deg_lat: float = config.LAPSE_PER_DEG_LAT
    regional_lng_amplitude: float = config.REGIONAL_LNG_AMPLITUDE
    regional_lat_amplitude: float = config.REGIONAL_LAT_AMPLITUDE
    seasonal_amplitude_c: float = config.SEASONAL_AMPLITUDE_C
    magnitude_offset_c: float = config.MAGNITUDE_OFFSET_C
    magnitude_range_c: float = config.MAGNITUDE_RANGE_C

    # ── Time-dependent terms ─────────────────────────────────────────────

    def warming_base(self, time_index: int) -> float:
        """
        Secular trend in °C; exceeds [0, 2] outside the nominal range.

        The index is clamped to ±MAX_SAFE_TIME_INDEX so the term stays finite
        for every int.
        """
        limit = config.MAX_SAFE_TIME_INDEX
        time_index = max(-limit, min(limit, time_index))
        return (time_index / self.warming_span_months) * self.warming_total_c

    @staticmethod
    def season_effect(month: int) -> float:
        """-1 in January, +1 in July."""
        season_phase = (month - 1) / 12 * 2 * math.pi
        return math.sin(season_phase - math.pi / 2)

    # ── Spatial terms ────────────────────────────────────────────────────

    def base_temp(self, lat: float) -> float:
        return self.base_temp_c - abs(lat) * self.lapse_per_deg_lat

    def regional(self, lat: float, lng: float) -> float:
        return (
            math.sin(lng * math.pi / 180) * self.regional_lng_amplitude
            + math.cos(lat * math.pi / 90) * self.regional_lat_amplitude
        )

    def seasonal(self, lat: float, season_effect: float) -> float:
        # Seasonal swing is stronger at higher latitudes
        return season_effect * (abs(lat) / 90) * self.seasonal_amplitude_c

    # ── Combined ─────────────────────────────────────────────────────────

    def temperature(
        self, lat: float, lng: float, warming_base: float, season_effect: float
    ) -> float:
        """Cell temperature in °C, rounded to one decimal place."""
        temp = (
            self.base_temp(lat)
            + warming_base
            + self.regional(lat, lng)
            + self.seasonal(lat, season_effect)
        )
        return round_half_up(temp, 1)

    def magnitude(self, temperature: float) -> float:
        """Normalize a temperature to [0, 1] for visualization."""
        mag = (temperature + self.magnitude_offset_c) / self.magnitude_range_c
        return max(0.0, min(1.0, mag))

    def sample(self, lat: float, lng: float, time_index: int, month: int) -> tuple[float, float]:
        """(temperature, magnitude) for one cell — convenience for one-off lookups."""
        temp = self.temperature(
            lat, lng, self.warming_base(time_index), self.season_effect(month)
        )
        return temp, self.magnitude(temp)

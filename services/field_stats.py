"""
numpy views over a synthesized field — a 2-D temperature grid for analysis
and a compact summary (min / max / mean) served alongside the field.
"""
from __future__ import annotations

from typing import Any

import numpy as np

from models.field import FieldResult


def to_grid(result: FieldResult) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    Reshape the row-major point list into (latitudes, longitudes, temps)
    where temps has shape (n_lat, n_lng).
    """
    points = result.points
    if not points:
        empty = np.empty(0, dtype=np.float64)
        return empty, empty, np.empty((0, 0), dtype=np.float64)

    lats = np.array([p.latitude for p in points], dtype=np.float64)
    lngs = np.array([p.longitude for p in points], dtype=np.float64)
    temps = np.array([p.temperature for p in points], dtype=np.float64)

    latitudes = np.unique(lats)
    longitudes = np.unique(lngs)
    return latitudes, longitudes, temps.reshape(len(latitudes), len(longitudes))


def zonal_mean(result: FieldResult) -> dict[float, float]:
    """Mean temperature per latitude row, keyed by latitude."""
    latitudes, _, temps = to_grid(result)
    if temps.size == 0:
        return {}
    means = temps.mean(axis=1)
    return {float(lat): round(float(m), 2) for lat, m in zip(latitudes, means)}


def summarize(result: FieldResult) -> dict[str, Any]:
    """Min / max / mean temperature and mean magnitude of a field."""
    summary: dict[str, Any] = {
        "time": result.metadata.time,
        "timeIndex": result.metadata.time_index,
        "points": len(result.points),
    }
    if not result.points:
        summary.update({"min": None, "max": None, "mean": None, "mean_magnitude": None})
        return summary

    temps = np.array([p.temperature for p in result.points], dtype=np.float64)
    mags = np.array([p.magnitude for p in result.points], dtype=np.float64)
    summary.update(
        {
            "min": round(float(np.min(temps)), 2),
            "max": round(float(np.max(temps)), 2),
            "mean": round(float(np.mean(temps)), 2),
            "mean_magnitude": round(float(np.mean(mags)), 4),
        }
    )
    return summary

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from models.field import FieldMetadata

logger = logging.getLogger("climate_grid.logger")

_BASE_DIR = Path(__file__).resolve().parent.parent / "data" / "logs"


def _ensure_dir(subdir: str, base_dir: Path | None = None) -> Path:
    path = (base_dir or _BASE_DIR) / subdir
    path.mkdir(parents=True, exist_ok=True)
    return path


def _today_str() -> str:
    return datetime.now(timezone.utc).strftime("%Y-%m-%d")


def _append_jsonl(subdir: str, record: dict[str, Any], base_dir: Path | None = None) -> None:
    """Append a single JSON record to today's JSONL file in the given subdirectory."""
    try:
        dir_path = _ensure_dir(subdir, base_dir)
        filepath = dir_path / f"{_today_str()}.jsonl"
        with open(filepath, "a") as f:
            f.write(json.dumps(record, default=str) + "\n")
    except OSError as exc:
        logger.error("Failed to write %s log: %s", subdir, exc)


def log_request(
    metadata: FieldMetadata,
    raw_time_index: str | None,
    cache_hit: bool,
    elapsed_ms: float,
    timestamp: datetime | None = None,
    base_dir: Path | None = None,
) -> None:
    """Log one field request to data/logs/requests/."""
    ts = timestamp or datetime.now(timezone.utc)
    record = {
        "timestamp": ts.isoformat(),
        "raw_time_index": raw_time_index,
        "time_index": metadata.time_index,
        "time": metadata.time,
        "resolution": metadata.resolution,
        "cache_hit": cache_hit,
        "elapsed_ms": round(elapsed_ms, 2),
    }
    _append_jsonl("requests", record, base_dir)


def log_export(
    metadata: FieldMetadata,
    path: Path,
    summary: dict[str, Any],
    timestamp: datetime | None = None,
    base_dir: Path | None = None,
) -> None:
    """Log one exported field file to data/logs/exports/."""
    ts = timestamp or datetime.now(timezone.utc)
    record = {
        "timestamp": ts.isoformat(),
        "time_index": metadata.time_index,
        "time": metadata.time,
        "path": str(path),
        "min": summary.get("min"),
        "max": summary.get("max"),
        "mean": summary.get("mean"),
    }
    _append_jsonl("exports", record, base_dir)

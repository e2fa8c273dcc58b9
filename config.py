import logging
import os

from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger("climate_grid.config")


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning("Invalid %s=%r — using default %d", name, raw, default)
        return default


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


# ── Calendar ──────────────────────────────────────────────────────────────────
EPOCH_YEAR = 1750  # time index 0 = Jan 1750
MONTHS_PER_YEAR = 12
MONTH_NAMES = [
    "Jan",
    "Feb",
    "Mar",
    "Apr",
    "May",
    "Jun",
    "Jul",
    "Aug",
    "Sep",
    "Oct",
    "Nov",
    "Dec",
]
NOMINAL_MAX_TIME_INDEX = 3310  # Nov 2025
MAX_SAFE_TIME_INDEX = 2**53 - 1  # larger query values are treated as unparseable

# ── Temperature model ─────────────────────────────────────────────────────────
WARMING_SPAN_MONTHS = 3311  # months over which the full warming rise accrues
WARMING_TOTAL_C = 2.0
BASE_TEMP_C = 30.0  # equatorial base temperature
LAPSE_PER_DEG_LAT = 0.6  # °C lost per degree of latitude
REGIONAL_LNG_AMPLITUDE = 3.0
REGIONAL_LAT_AMPLITUDE = 2.0
SEASONAL_AMPLITUDE_C = 15.0  # swing at the poles
MAGNITUDE_OFFSET_C = 25.0  # temperature mapped to magnitude 0
MAGNITUDE_RANGE_C = 65.0  # -25°C → 0.0, +40°C → 1.0

# ── Grid / output ─────────────────────────────────────────────────────────────
GRID_STEP_DEG = 4.0
FIELD_SOURCE = "zarr/.Land_TAVG_Gridded_0p25deg.zarr"
FIELD_DESCRIPTION = "Time-indexed Temperature Simulation"
FIELD_UNITS = "degree C"

# ── Web service ───────────────────────────────────────────────────────────────
DEFAULT_TIME_INDEX = _env_int("DEFAULT_TIME_INDEX", NOMINAL_MAX_TIME_INDEX)
HTTP_HOST = os.getenv("HTTP_HOST", "127.0.0.1")
HTTP_PORT = _env_int("HTTP_PORT", 8080)
API_ROUTE = "/api/weather"
CACHE_MAX_AGE_SECONDS = 86400  # output is deterministic per time index
FIELD_CACHE_SIZE = _env_int("FIELD_CACHE_SIZE", 64)  # serialized fields kept in memory

# ── Logging ───────────────────────────────────────────────────────────────────
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
REQUEST_LOG_ENABLED = _env_bool("REQUEST_LOG_ENABLED", False)

"""
Time resolver — maps a month offset from the Jan 1750 epoch to a calendar
label, and parses the raw ``timeIndex`` query value.

Both functions are total: any integer resolves (pre-epoch indices simply
give years before 1750) and any raw string parses to *something*.
"""
from __future__ import annotations

import logging
import re

import config
from models.resolved_time import ResolvedTime

logger = logging.getLogger("climate_grid.time_resolver")

# Leading optionally-signed integer, e.g. " 42", "-3", "12abc", "3.9"
_LEADING_INT_RE = re.compile(r"^\s*([+-]?[0-9]+)")

# Longest digit run that can still be within MAX_SAFE_TIME_INDEX
_MAX_SAFE_DIGITS = len(str(config.MAX_SAFE_TIME_INDEX))


def resolve_time(time_index: int) -> ResolvedTime:
    """Resolve a time index into year, 1-based month and "Mon YYYY" label."""
    # Python's floor division and modulo are already non-negative for a
    # positive divisor, so -1 → Dec 1749.
    year = config.EPOCH_YEAR + time_index // config.MONTHS_PER_YEAR
    month = time_index % config.MONTHS_PER_YEAR + 1
    label = f"{config.MONTH_NAMES[month - 1]} {year}"
    return ResolvedTime(time_index=time_index, year=year, month=month, label=label)


def parse_time_index(raw: str | int | None, default: int) -> int:
    """
    Parse a raw time-index value, falling back to *default*.

    Accepts the leading integer of a string the way a lenient integer parse
    does ("12abc" → 12, "3.9" → 3).  Missing, empty, non-numeric and
    absurdly large values all yield *default*; this never raises.
    """
    if raw is None:
        return default
    if isinstance(raw, bool):
        return default
    if isinstance(raw, int):
        value = raw
    else:
        match = _LEADING_INT_RE.match(str(raw))
        if not match:
            if str(raw).strip():
                logger.debug("Unparseable time index %r — using default %d", raw, default)
            return default
        token = match.group(1)
        significant = token.lstrip("+-").lstrip("0") or "0"
        # Reject by length before int() so very long digit runs never
        # reach the interpreter's int-from-string limit
        if len(significant) > _MAX_SAFE_DIGITS:
            logger.debug(
                "Time index of %d digits out of safe range — using default %d",
                len(significant),
                default,
            )
            return default
        value = -int(significant) if token.startswith("-") else int(significant)

    if abs(value) > config.MAX_SAFE_TIME_INDEX:
        logger.debug("Time index %d out of safe range — using default %d", value, default)
        return default
    return value

"""
HTTP boundary — serves synthesized fields as GeoJSON.

  GET /api/weather?timeIndex=N          FeatureCollection for month N
  GET /api/weather/summary?timeIndex=N  min / max / mean of the same field
  GET /health

Every query string produces a 200: a missing or malformed timeIndex falls
back to the configured default, which the map UI relies on while scrubbing.
"""
from __future__ import annotations

import logging
import time

from aiohttp import web

import config
from services import logger as log_service
from services.field_cache import FieldCache
from services.field_stats import summarize
from services.field_synthesizer import FieldSynthesizer
from services.geojson_writer import dumps
from services.time_resolver import parse_time_index

logger = logging.getLogger("climate_grid.weather_api")

SYNTHESIZER_KEY = web.AppKey("synthesizer", FieldSynthesizer)
CACHE_KEY = web.AppKey("field_cache", FieldCache)
DEFAULT_INDEX_KEY = web.AppKey("default_time_index", int)
REQUEST_LOG_KEY = web.AppKey("request_log", bool)


def _requested_index(request: web.Request) -> tuple[str | None, int]:
    raw = request.query.get("timeIndex")
    return raw, parse_time_index(raw, request.app[DEFAULT_INDEX_KEY])


async def handle_field(request: web.Request) -> web.Response:
    started = time.perf_counter()
    raw, time_index = _requested_index(request)
    synthesizer = request.app[SYNTHESIZER_KEY]
    cache = request.app[CACHE_KEY]

    body = cache.get(time_index)
    cache_hit = body is not None
    if body is None:
        body = dumps(synthesizer.synthesize(time_index)).encode("utf-8")
        cache.put(time_index, body)

    elapsed_ms = (time.perf_counter() - started) * 1000.0
    metadata = synthesizer.metadata(time_index)
    logger.debug(
        "Field %s (index %d, raw=%r) — %s, %.1f ms",
        metadata.time,
        time_index,
        raw,
        "cache hit" if cache_hit else "synthesized",
        elapsed_ms,
    )
    if request.app[REQUEST_LOG_KEY]:
        log_service.log_request(metadata, raw, cache_hit, elapsed_ms)

    return web.Response(
        body=body,
        content_type="application/json",
        charset="utf-8",
        headers={"Cache-Control": f"public, max-age={config.CACHE_MAX_AGE_SECONDS}"},
    )


async def handle_summary(request: web.Request) -> web.Response:
    _, time_index = _requested_index(request)
    result = request.app[SYNTHESIZER_KEY].synthesize(time_index)
    return web.json_response(summarize(result))


async def handle_health(request: web.Request) -> web.Response:
    cache = request.app[CACHE_KEY]
    return web.json_response(
        {
            "status": "ok",
            "cached_fields": len(cache),
            "cache_hits": cache.hits,
            "cache_misses": cache.misses,
        }
    )


def create_app(
    *,
    default_time_index: int = config.DEFAULT_TIME_INDEX,
    cache_size: int = config.FIELD_CACHE_SIZE,
    request_log: bool = config.REQUEST_LOG_ENABLED,
    synthesizer: FieldSynthesizer | None = None,
) -> web.Application:
    """Build the web application; the fallback time index is injected here."""
    app = web.Application()
    app[SYNTHESIZER_KEY] = synthesizer or FieldSynthesizer()
    app[CACHE_KEY] = FieldCache(cache_size)
    app[DEFAULT_INDEX_KEY] = default_time_index
    app[REQUEST_LOG_KEY] = request_log

    app.router.add_get(config.API_ROUTE, handle_field)
    app.router.add_get(f"{config.API_ROUTE}/summary", handle_summary)
    app.router.add_get("/health", handle_health)

    logger.info(
        "Field API ready — default index %d, cache %d entries, request log %s",
        default_time_index,
        cache_size,
        "on" if request_log else "off",
    )
    return app

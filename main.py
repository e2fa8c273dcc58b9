#!/usr/bin/env python3
"""
CLIMATE GRID v1.0 — Time-indexed synthetic global temperature fields.

Serves a procedurally generated 4° temperature grid for any month since
Jan 1750 as GeoJSON, and can export the same fields to disk for offline
animation frames.

  python main.py serve  [--host H] [--port P]
  python main.py export --start N [--end M] --out-dir DIR
  python main.py fetch  --url URL [--time-index N]
"""
from __future__ import annotations

import argparse
import asyncio
import logging
import signal
import sys
from pathlib import Path

from aiohttp import web

import config
from services import logger as log_service
from services.field_stats import summarize
from services.field_synthesizer import FieldSynthesizer
from services.geojson_writer import write_geojson
from services.time_resolver import resolve_time
from services.weather_api import create_app
from utils.field_client import FieldClient

# ── Logging setup ─────────────────────────────────────────────────────────────
logging.basicConfig(
    level=getattr(logging, config.LOG_LEVEL, logging.INFO),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger("climate_grid")


def _print_banner(host: str, port: int) -> None:
    default_label = resolve_time(config.DEFAULT_TIME_INDEX).label
    address = f"http://{host}:{port}"
    lines = [
        "CLIMATE GRID v1.0",
        "Synthetic temperature fields",
        f"Grid: {config.GRID_STEP_DEG:g}°  Default: {default_label}",
        address,
    ]
    print()
    print("╔" + "═" * 38 + "╗")
    for line in lines:
        print(f"║  {line:<36s}║")
    print("╚" + "═" * 38 + "╝")


# ── Commands ──────────────────────────────────────────────────────────────────


async def serve(host: str, port: int) -> None:
    _print_banner(host, port)

    shutdown_event = asyncio.Event()
    loop = asyncio.get_running_loop()
    for sig_name in (signal.SIGINT, signal.SIGTERM):
        loop.add_signal_handler(sig_name, shutdown_event.set)

    app = create_app()
    runner = web.AppRunner(app)
    await runner.setup()
    site = web.TCPSite(runner, host, port)
    await site.start()
    logger.info("Serving %s on http://%s:%d", config.API_ROUTE, host, port)

    try:
        await shutdown_event.wait()
    finally:
        logger.info("Shutting down gracefully...")
        await runner.cleanup()
        logger.info("CLIMATE GRID stopped.")


def export(start: int, end: int, out_dir: Path) -> int:
    """Write field_<index>.geojson for every index in [start, end]."""
    out_dir.mkdir(parents=True, exist_ok=True)
    synthesizer = FieldSynthesizer()
    written = 0

    for time_index in range(start, end + 1):
        result = synthesizer.synthesize(time_index)
        path = out_dir / f"field_{time_index}.geojson"
        with open(path, "w", encoding="utf-8") as fp:
            write_geojson(fp, result.metadata, result.points)
        summary = summarize(result)
        log_service.log_export(result.metadata, path, summary)
        logger.info(
            "Exported %s — min %.1f°C, max %.1f°C, mean %.2f°C → %s",
            result.metadata.time,
            summary["min"],
            summary["max"],
            summary["mean"],
            path,
        )
        written += 1

    logger.info("Export complete — %d fields in %s", written, out_dir)
    return written


async def fetch(url: str, time_index: int | None) -> bool:
    client = FieldClient(url)
    try:
        field = await client.get_field(time_index)
    finally:
        await client.close()

    if field is None:
        print(f"  FAIL — no field returned from {url}")
        return False

    meta = field.get("metadata", {})
    features = field.get("features", [])
    temps = [f["properties"]["temp"] for f in features]
    print(f"\n  {meta.get('time')} (index {meta.get('timeIndex')}) — {meta.get('resolution')}")
    print(f"  Points: {len(features)}")
    if temps:
        print(f"  Temperature: {min(temps):.1f}°C – {max(temps):.1f}°C "
              f"(avg {sum(temps) / len(temps):.2f}°C)")
    return True


# ── Main ──────────────────────────────────────────────────────────────────────


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Synthetic climate grid server and exporter")
    sub = parser.add_subparsers(dest="command", required=True)

    p_serve = sub.add_parser("serve", help="run the HTTP field API")
    p_serve.add_argument("--host", default=config.HTTP_HOST)
    p_serve.add_argument("--port", type=int, default=config.HTTP_PORT)

    p_export = sub.add_parser("export", help="write fields to GeoJSON files")
    p_export.add_argument("--start", type=int, required=True)
    p_export.add_argument("--end", type=int, default=None, help="inclusive; defaults to --start")
    p_export.add_argument("--out-dir", type=Path, default=Path("data") / "frames")

    p_fetch = sub.add_parser("fetch", help="fetch a field from a running server")
    p_fetch.add_argument("--url", default=f"http://{config.HTTP_HOST}:{config.HTTP_PORT}")
    p_fetch.add_argument("--time-index", type=int, default=None)
    return parser


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)

    if args.command == "serve":
        asyncio.run(serve(args.host, args.port))
        return 0

    if args.command == "export":
        end = args.start if args.end is None else args.end
        if end < args.start:
            logger.error("--end (%d) is before --start (%d)", end, args.start)
            return 2
        try:
            export(args.start, end, args.out_dir)
        except OSError as exc:
            logger.error("Export failed: %s", exc)
            return 1
        return 0

    ok = asyncio.run(fetch(args.url, args.time_index))
    return 0 if ok else 1


if __name__ == "__main__":
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        print("\nShutdown requested via Ctrl+C")
        sys.exit(0)

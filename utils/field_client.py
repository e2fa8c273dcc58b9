from __future__ import annotations

import asyncio
import json
import logging
from typing import Any

import aiohttp

import config

logger = logging.getLogger("climate_grid.field_client")


def _is_feature_collection(data: Any) -> bool:
    """FeatureCollection whose features all carry numeric temp / mag properties."""
    if not isinstance(data, dict) or data.get("type") != "FeatureCollection":
        return False
    if not isinstance(data.get("metadata"), dict):
        return False
    features = data.get("features")
    if not isinstance(features, list):
        return False
    for feature in features:
        props = feature.get("properties") if isinstance(feature, dict) else None
        if not isinstance(props, dict):
            return False
        for key in ("temp", "mag"):
            value = props.get(key)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                return False
    return True


class FieldClient:
    """Async client for a running field API (GeoJSON + summary endpoints)."""

    def __init__(
        self,
        base_url: str,
        session: aiohttp.ClientSession | None = None,
        timeout: float = 10.0,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._session = session
        self._owns_session = session is None
        self._timeout = aiohttp.ClientTimeout(total=timeout)

    async def _ensure_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                headers={"User-Agent": "ClimateGrid/1.0 (field-client)"}
            )
            self._owns_session = True
        return self._session

    async def close(self) -> None:
        if self._owns_session and self._session and not self._session.closed:
            await self._session.close()

    async def _get_json(self, path: str, time_index: int | None) -> Any | None:
        session = await self._ensure_session()
        params = {"timeIndex": str(time_index)} if time_index is not None else None
        url = f"{self._base_url}{path}"

        try:
            async with session.get(url, params=params, timeout=self._timeout) as resp:
                if resp.status != 200:
                    logger.warning("GET %s failed: HTTP %d", url, resp.status)
                    return None
                text = await resp.text()
        except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
            logger.error("GET %s error: %s", url, exc)
            return None

        try:
            return json.loads(text)
        except json.JSONDecodeError as exc:
            logger.error("Invalid JSON from %s: %s", url, exc)
            return None

    async def get_field(self, time_index: int | None = None) -> dict[str, Any] | None:
        """GeoJSON FeatureCollection for *time_index* (server default if None)."""
        data = await self._get_json(config.API_ROUTE, time_index)
        if data is not None and not _is_feature_collection(data):
            logger.warning("Unexpected field payload: %.80r", data)
            return None
        return data

    async def get_summary(self, time_index: int | None = None) -> dict[str, Any] | None:
        return await self._get_json(f"{config.API_ROUTE}/summary", time_index)

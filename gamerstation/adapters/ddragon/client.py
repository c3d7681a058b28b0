"""Data Dragon client for League of Legends static data."""

import time
from typing import Any, Dict, List, Optional

import httpx
import structlog

from gamerstation.adapters.observability.metrics import MetricsProvider

logger = structlog.get_logger()

DEFAULT_BASE_URL = "https://ddragon.leagueoflegends.com"
USER_AGENT = "GamerStation (Data Dragon fetch)"


class DataDragonError(Exception):
    """A Data Dragon request failed or returned an unexpected payload."""

    pass


def summarize_champion(champion: Dict[str, Any]) -> Dict[str, Any]:
    """Reduce a champion.json entry to the index fields."""
    return {
        "id": champion.get("id"),
        "key": champion.get("key"),
        "name": champion.get("name"),
        "title": champion.get("title"),
        "tags": champion.get("tags"),
        "partype": champion.get("partype"),
    }


def summarize_champion_detail(champion: Dict[str, Any]) -> Dict[str, Any]:
    """Reduce a per-champion detail payload to stats, spells and passive."""
    passive = champion.get("passive") or {}
    summary = summarize_champion(champion)
    summary.update({
        "stats": champion.get("stats"),
        "spells": [
            {
                "id": spell.get("id"),
                "name": spell.get("name"),
                "maxrank": spell.get("maxrank"),
                "cooldown": spell.get("cooldown"),
                "cost": spell.get("cost"),
                "costType": spell.get("costType"),
                "effect": spell.get("effect"),
                "vars": spell.get("vars"),
            }
            for spell in champion.get("spells") or []
        ],
        "passive": {
            "name": passive.get("name"),
            "description": passive.get("description"),
        },
    })
    return summary


class DataDragonClient:
    """Async client for the public Data Dragon CDN."""

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        locale: str = "en_US",
        metrics: Optional[MetricsProvider] = None,
        request_timeout: float = 30.0,
    ):
        self.base_url = base_url.rstrip("/")
        self.locale = locale
        self.metrics = metrics
        self.client = httpx.AsyncClient(
            timeout=request_timeout,
            headers={"User-Agent": USER_AGENT},
        )

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.client.aclose()

    async def close(self):
        await self.client.aclose()

    async def _fetch_json(self, url: str, endpoint_type: str) -> Any:
        started = time.time()
        try:
            response = await self.client.get(url)
        except httpx.RequestError as e:
            logger.error("Data Dragon request failed", url=url, error=str(e))
            raise DataDragonError(f"Request failed: {e}")

        if self.metrics:
            self.metrics.record_upstream_call(
                upstream="ddragon",
                endpoint_type=endpoint_type,
                status_code=response.status_code,
                duration=time.time() - started,
            )

        if response.status_code >= 400:
            raise DataDragonError(f"Fetch failed: {response.status_code} {url}")

        try:
            return response.json()
        except ValueError as e:
            raise DataDragonError(f"Invalid JSON from {url}: {e}")

    def _cdn_url(self, version: str, path: str) -> str:
        return f"{self.base_url}/cdn/{version}/data/{self.locale}/{path}"

    async def get_latest_version(self) -> str:
        """Get the newest patch string (first entry of versions.json)."""
        versions = await self._fetch_json(f"{self.base_url}/api/versions.json", "versions")
        if not isinstance(versions, list) or not versions:
            raise DataDragonError("versions.json returned no versions")
        return versions[0]

    async def get_champion_index(self, version: str) -> List[Dict[str, Any]]:
        """Get every champion summary for a patch."""
        payload = await self._fetch_json(self._cdn_url(version, "champion.json"), "champion_index")
        return [summarize_champion(c) for c in (payload.get("data") or {}).values()]

    async def get_champion_detail(self, version: str, champion_id: str) -> Dict[str, Any]:
        """Get the full detail payload for one champion."""
        payload = await self._fetch_json(
            self._cdn_url(version, f"champion/{champion_id}.json"), "champion_detail"
        )
        data = payload.get("data") or {}
        if not data:
            raise DataDragonError(f"No champion data for {champion_id}")
        return summarize_champion_detail(next(iter(data.values())))

    async def get_items(self, version: str) -> Dict[str, Any]:
        """Get the raw item.json payload for a patch."""
        return await self._fetch_json(self._cdn_url(version, "item.json"), "items")

"""HTTP route handlers for the GamerStation API."""

import json
from typing import Any, Dict, List, Protocol

import structlog
from aiohttp import web

from gamerstation.core.entities import (
    SummonerIdentity,
    WowCharacterQuery,
    WowCharacterStats,
    WowRealm,
)
from gamerstation.core.enums import BnetRegion
from gamerstation.core.services import parse_suggest_limit

logger = structlog.get_logger()

DEFAULT_WOW_REGION = "us"

CHARACTER_STATS_CACHE_CONTROL = "s-maxage=600, stale-while-revalidate=60"
REALMS_CACHE_CONTROL = "s-maxage=86400, stale-while-revalidate=3600"


class SummonerIndex(Protocol):
    async def log_summoner(self, identity: SummonerIdentity) -> Dict[str, Any]: ...

    async def suggest_summoners(self, q: str, limit: int) -> List[Dict[str, Any]]: ...


class WowDataFetcher(Protocol):
    async def fetch_character_stats(self, query: WowCharacterQuery) -> WowCharacterStats: ...

    async def fetch_realms(self, region: BnetRegion) -> List[WowRealm]: ...


def _error_message(error: Exception) -> str:
    return str(error) or "Unknown error"


async def read_json_object(request: web.Request) -> Dict[str, Any]:
    """Read the request body as a JSON object.

    A blank body reads as ``{}``.

    Raises:
        ValueError: If the body is not valid JSON or not an object
    """
    text = await request.text()
    if not text.strip():
        return {}
    body = json.loads(text)
    if not isinstance(body, dict):
        raise ValueError("Request body must be a JSON object")
    return body


class ApiRoutes:
    """HTTP handlers that delegate to the summoner index and WoW fetcher."""

    def __init__(self, summoner_index: SummonerIndex, wow_fetcher: WowDataFetcher):
        self.summoner_index = summoner_index
        self.wow_fetcher = wow_fetcher

    def register(self, app: web.Application) -> None:
        """Set up all API routes."""
        app.router.add_post("/api/tools/lol/summoner/log", self.log_summoner)
        app.router.add_get("/api/tools/lol/summoner/suggest", self.suggest_summoners)
        app.router.add_get("/api/wow-character-stats", self.wow_character_stats)
        app.router.add_get("/api/wow-realms", self.wow_realms)

    async def log_summoner(self, request: web.Request) -> web.Response:
        """POST /api/tools/lol/summoner/log"""
        try:
            body = await read_json_object(request)
            identity = SummonerIdentity.from_payload(body)
            result = await self.summoner_index.log_summoner(identity)
            return web.json_response({"ok": True, **result}, status=200)
        except Exception as e:
            logger.warning("Summoner log rejected", error=_error_message(e))
            return web.json_response({"ok": False, "error": _error_message(e)}, status=400)

    async def suggest_summoners(self, request: web.Request) -> web.Response:
        """GET /api/tools/lol/summoner/suggest?q=&limit="""
        try:
            q = request.query.get("q", "")
            limit = parse_suggest_limit(request.query.get("limit", "8"))
            results = await self.summoner_index.suggest_summoners(q, limit)
            return web.json_response({"ok": True, "results": results}, status=200)
        except Exception as e:
            logger.error("Summoner suggest failed", error=_error_message(e))
            return web.json_response({"ok": False, "error": _error_message(e)}, status=500)

    async def wow_character_stats(self, request: web.Request) -> web.Response:
        """GET /api/wow-character-stats?region=&realmSlug=&name="""
        region = BnetRegion.from_string(request.query.get("region") or DEFAULT_WOW_REGION)
        realm_slug = request.query.get("realmSlug")
        name = request.query.get("name")

        if region is None:
            return web.json_response({"error": "Invalid region"}, status=400)

        if not realm_slug or not name:
            return web.json_response({"error": "Missing realmSlug or name"}, status=400)

        try:
            stats = await self.wow_fetcher.fetch_character_stats(
                WowCharacterQuery(region=region, realm_slug=realm_slug, name=name)
            )
        except Exception as e:
            logger.error(
                "Failed to fetch character stats",
                region=region.value,
                realm_slug=realm_slug,
                name=name,
                error=_error_message(e),
            )
            return web.json_response(
                {"error": "Failed to fetch character stats", "details": _error_message(e)},
                status=500,
            )

        return web.json_response(
            stats.to_dict(),
            headers={"Cache-Control": CHARACTER_STATS_CACHE_CONTROL},
        )

    async def wow_realms(self, request: web.Request) -> web.Response:
        """GET /api/wow-realms?region="""
        region = BnetRegion.from_string(request.query.get("region") or DEFAULT_WOW_REGION)
        if region is None:
            return web.json_response({"error": "Invalid region"}, status=400)

        try:
            realms = await self.wow_fetcher.fetch_realms(region)
        except Exception as e:
            logger.error("Failed to fetch realms", region=region.value, error=_error_message(e))
            return web.json_response(
                {"error": "Failed to fetch realms", "details": _error_message(e)},
                status=500,
            )

        return web.json_response(
            {"region": region.value, "realms": [r.to_dict() for r in realms]},
            headers={"Cache-Control": REALMS_CACHE_CONTROL},
        )

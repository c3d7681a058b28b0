"""Blizzard Battle.net API client for World of Warcraft data."""

import time
from dataclasses import dataclass
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import httpx
import structlog

from gamerstation.adapters.observability.metrics import MetricsProvider
from gamerstation.core.entities import (
    WowCharacterQuery,
    WowCharacterStats,
    WowPrimaryStats,
    WowRealm,
    WowSecondaryStats,
)
from gamerstation.core.enums import BnetRegion

logger = structlog.get_logger()

# Reuse a token until this long before it expires
TOKEN_EXPIRY_MARGIN_SECONDS = 60


class BlizzardAPIError(Exception):
    """Base exception for Blizzard API errors."""

    pass


class CharacterNotFoundError(BlizzardAPIError):
    """Character not found (or its profile is private)."""

    pass


class RateLimitError(BlizzardAPIError):
    """Rate limit exceeded error."""

    pass


@dataclass
class AccessToken:
    """A cached client-credentials token."""

    token: str
    expires_at: float

    def is_fresh(self, now: float) -> bool:
        return self.expires_at - TOKEN_EXPIRY_MARGIN_SECONDS > now


def _effective(data: Dict[str, Any], key: str) -> Optional[float]:
    value = data.get(key)
    if isinstance(value, dict):
        return value.get("effective")
    return None


def _first_present(data: Dict[str, Any], *keys: str) -> Dict[str, Any]:
    for key in keys:
        value = data.get(key)
        if value is not None:
            return value if isinstance(value, dict) else {}
    return {}


def parse_character_stats(query: WowCharacterQuery, data: Dict[str, Any]) -> WowCharacterStats:
    """Map a Profile API statistics payload onto WowCharacterStats.

    The payload uses melee_* keys for physical specs and spell_* keys for
    casters; whichever exists is used.
    """
    crit = _first_present(data, "melee_crit", "spell_crit", "crit")
    haste = _first_present(data, "melee_haste", "spell_haste", "haste")
    mastery = data.get("mastery") if isinstance(data.get("mastery"), dict) else {}

    level = data.get("level")
    if isinstance(level, bool) or not isinstance(level, (int, float)):
        level = None

    return WowCharacterStats(
        region=query.region,
        realm_slug=query.realm_slug,
        name=query.name,
        level=level,
        primary=WowPrimaryStats(
            strength=_effective(data, "strength"),
            agility=_effective(data, "agility"),
            intellect=_effective(data, "intellect"),
        ),
        secondary=WowSecondaryStats(
            crit_rating=crit.get("rating"),
            crit_pct=crit.get("value"),
            haste_rating=haste.get("rating"),
            haste_pct=haste.get("value"),
            mastery_rating=mastery.get("rating"),
            mastery_pct=mastery.get("value"),
            versatility_rating=data.get("versatility"),
            versatility_damage_done_bonus_pct=data.get("versatile_damage_done_bonus"),
            versatility_damage_taken_reduction_pct=data.get("versatile_damage_taken_reduction_bonus"),
        ),
    )


def parse_realms(data: Dict[str, Any]) -> List[WowRealm]:
    """Keep realms with a name and slug, sorted by name."""
    raw_realms = data.get("realms") if isinstance(data, dict) else None
    if not isinstance(raw_realms, list):
        return []

    realms = []
    for raw in raw_realms:
        if not isinstance(raw, dict):
            continue
        name = str(raw.get("name") or "").strip()
        slug = str(raw.get("slug") or "").strip()
        if name and slug:
            realms.append(WowRealm(name=name, slug=slug))

    realms.sort(key=lambda r: r.name.casefold())
    return realms


class BlizzardAPIClient:
    """Blizzard API client with per-region token caching and error handling."""

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        metrics: Optional[MetricsProvider] = None,
        api_base_url: Optional[str] = None,
        oauth_base_url: Optional[str] = None,
        request_timeout: float = 15.0,
    ):
        """Initialize the Blizzard API client.

        Args:
            client_id: Battle.net application client id
            client_secret: Battle.net application client secret
            metrics: Optional metrics provider for upstream call metrics
            api_base_url: Override for the regional API host (mock servers)
            oauth_base_url: Override for the regional OAuth host (mock servers)
            request_timeout: Request timeout in seconds
        """
        self.client_id = client_id
        self.client_secret = client_secret
        self.metrics = metrics
        self.api_base_url = api_base_url
        self.oauth_base_url = oauth_base_url
        self.request_timeout = request_timeout
        self.client = httpx.AsyncClient(timeout=request_timeout)

        # Token cache: {region: AccessToken}
        self._token_cache: Dict[BnetRegion, AccessToken] = {}

    async def __aenter__(self):
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.client.aclose()

    async def close(self):
        """Close the HTTP client."""
        await self.client.aclose()

    def _get_api_host(self, region: BnetRegion) -> str:
        return self.api_base_url.rstrip("/") if self.api_base_url else region.api_host

    def _get_oauth_host(self, region: BnetRegion) -> str:
        return self.oauth_base_url.rstrip("/") if self.oauth_base_url else region.oauth_host

    def _record(self, endpoint_type: str, status_code: int, started: float, error_type: Optional[str] = None):
        if self.metrics:
            self.metrics.record_upstream_call(
                upstream="blizzard",
                endpoint_type=endpoint_type,
                status_code=status_code,
                duration=time.time() - started,
                error_type=error_type,
            )

    async def get_access_token(self, region: BnetRegion) -> str:
        """Get a client-credentials access token for a region.

        Tokens are cached per region and reused until shortly before expiry.

        Raises:
            BlizzardAPIError: If credentials are missing or the token request fails
        """
        if not self.client_id:
            raise BlizzardAPIError("Missing env var: BNET_CLIENT_ID")
        if not self.client_secret:
            raise BlizzardAPIError("Missing env var: BNET_CLIENT_SECRET")

        now = time.time()
        cached = self._token_cache.get(region)
        if cached and cached.is_fresh(now):
            return cached.token

        url = f"{self._get_oauth_host(region)}/oauth/token"
        started = time.time()
        try:
            response = await self.client.post(
                url,
                data={"grant_type": "client_credentials"},
                auth=(self.client_id, self.client_secret),
            )
        except httpx.RequestError as e:
            self._record("oauth_token", 0, started, error_type="request_error")
            logger.error("Blizzard token request failed", region=region.value, error=str(e))
            raise BlizzardAPIError(f"Request failed: {e}")

        if response.status_code >= 400:
            self._record("oauth_token", response.status_code, started, error_type="http_error")
            logger.error(
                "Blizzard token error",
                region=region.value,
                status_code=response.status_code,
            )
            raise BlizzardAPIError(f"Blizzard token error ({response.status_code}): {response.text}")

        self._record("oauth_token", response.status_code, started)
        payload = response.json()
        if not isinstance(payload, dict) or not payload.get("access_token"):
            logger.error("Blizzard token response missing access_token", region=region.value)
            raise BlizzardAPIError("Blizzard token error: missing access_token")
        token = AccessToken(
            token=payload["access_token"],
            expires_at=now + int(payload.get("expires_in", 0)),
        )
        self._token_cache[region] = token
        logger.info("Fetched Blizzard access token", region=region.value)
        return token.token

    async def _make_request(
        self,
        region: BnetRegion,
        path: str,
        params: Dict[str, str],
        endpoint_type: str,
        error_label: str,
        handle_404_as: str = "error",
    ) -> Dict[str, Any]:
        """Make an authenticated GET to the Blizzard API.

        Args:
            region: Region whose host and token to use
            path: Path below the API host, already URL encoded
            params: Query parameters (namespace, locale)
            endpoint_type: Metric label for this call
            error_label: Prefix for error messages, e.g. "WoW stats error"
            handle_404_as: "character_not_found" or "error"
        """
        token = await self.get_access_token(region)
        url = f"{self._get_api_host(region)}{path}"
        headers = {"Authorization": f"Bearer {token}", "Accept": "application/json"}

        started = time.time()
        try:
            response = await self.client.get(url, params=params, headers=headers)
        except httpx.RequestError as e:
            self._record(endpoint_type, 0, started, error_type="request_error")
            logger.error("HTTP request failed", url=url, error=str(e))
            raise BlizzardAPIError(f"Request failed: {e}")

        if response.status_code == 429:
            self._record(endpoint_type, 429, started, error_type="rate_limited")
            retry_after = response.headers.get("Retry-After", "unknown")
            logger.warning("Rate limited by Blizzard API", retry_after=retry_after)
            raise RateLimitError(f"{error_label} (429): rate limited, retry after {retry_after}")

        if response.status_code == 404 and handle_404_as == "character_not_found":
            self._record(endpoint_type, 404, started, error_type="not_found")
            raise CharacterNotFoundError(f"{error_label} (404): {response.text}")

        if response.status_code >= 400:
            self._record(endpoint_type, response.status_code, started, error_type="http_error")
            logger.error(
                "Blizzard API error",
                url=url,
                status_code=response.status_code,
                response=response.text,
            )
            raise BlizzardAPIError(f"{error_label} ({response.status_code}): {response.text}")

        self._record(endpoint_type, response.status_code, started)
        return response.json()

    async def fetch_character_stats(self, query: WowCharacterQuery) -> WowCharacterStats:
        """Fetch a character's statistics from the Profile API.

        Realm slug and name are trimmed and lowercased before the lookup.

        Raises:
            CharacterNotFoundError: If the character does not exist
            RateLimitError: If Blizzard rate limits the request
            BlizzardAPIError: For other API errors
        """
        normalized = WowCharacterQuery(
            region=query.region,
            realm_slug=query.realm_slug.strip().lower(),
            name=query.name.strip().lower(),
        )

        logger.info(
            "Fetching WoW character stats",
            region=normalized.region.value,
            realm_slug=normalized.realm_slug,
            name=normalized.name,
        )

        path = (
            f"/profile/wow/character/{quote(normalized.realm_slug, safe='')}"
            f"/{quote(normalized.name, safe='')}/statistics"
        )
        data = await self._make_request(
            normalized.region,
            path,
            params={
                "namespace": normalized.region.profile_namespace,
                "locale": normalized.region.locale,
            },
            endpoint_type="character_stats",
            error_label="WoW stats error",
            handle_404_as="character_not_found",
        )
        return parse_character_stats(normalized, data)

    async def fetch_realms(self, region: BnetRegion) -> List[WowRealm]:
        """Fetch the realm index for a region, sorted by name."""
        data = await self._make_request(
            region,
            "/data/wow/realm/index",
            params={
                "namespace": region.dynamic_namespace,
                "locale": region.locale,
            },
            endpoint_type="realm_index",
            error_label="Realm index error",
        )
        realms = parse_realms(data)
        logger.info("Fetched WoW realms", region=region.value, count=len(realms))
        return realms

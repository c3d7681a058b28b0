"""Tests for the aiohttp API routes."""

from unittest.mock import Mock

import pytest
import pytest_asyncio
from aiohttp.test_utils import TestClient, TestServer

from gamerstation.adapters.blizzard import BlizzardAPIError
from gamerstation.adapters.http import create_app
from gamerstation.core.entities import (
    SummonerIdentity,
    WowCharacterQuery,
    WowCharacterStats,
    WowRealm,
)
from gamerstation.core.enums import BnetRegion

from tests.utils import make_payload

LOG_PATH = "/api/tools/lol/summoner/log"
SUGGEST_PATH = "/api/tools/lol/summoner/suggest"
STATS_PATH = "/api/wow-character-stats"
REALMS_PATH = "/api/wow-realms"


class TestSummonerLogRoute:
    @pytest.mark.asyncio
    async def test_success_wraps_result(self, api_client, mock_summoner_index):
        mock_summoner_index.log_summoner.return_value = {
            "entry": {"puuid": "puuid-0123456789"},
            "count": 7,
            "updatedAt": 123,
        }

        resp = await api_client.post(LOG_PATH, json=make_payload())

        assert resp.status == 200
        assert await resp.json() == {
            "ok": True,
            "entry": {"puuid": "puuid-0123456789"},
            "count": 7,
            "updatedAt": 123,
        }
        mock_summoner_index.log_summoner.assert_awaited_once_with(
            SummonerIdentity("puuid-0123456789", "Faker", "KR1", "kr", "asia")
        )

    @pytest.mark.asyncio
    async def test_empty_body_forwards_empty_identity(self, api_client, mock_summoner_index):
        mock_summoner_index.log_summoner.side_effect = ValueError("Invalid puuid")

        resp = await api_client.post(LOG_PATH, data="")

        assert resp.status == 400
        assert await resp.json() == {"ok": False, "error": "Invalid puuid"}
        mock_summoner_index.log_summoner.assert_awaited_once_with(SummonerIdentity())

    @pytest.mark.asyncio
    async def test_malformed_json(self, api_client, mock_summoner_index):
        resp = await api_client.post(
            LOG_PATH, data="{not json", headers={"Content-Type": "application/json"}
        )

        body = await resp.json()
        assert resp.status == 400
        assert body["ok"] is False
        assert body["error"]
        mock_summoner_index.log_summoner.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_non_object_body(self, api_client, mock_summoner_index):
        resp = await api_client.post(LOG_PATH, json=["puuid"])

        assert resp.status == 400
        assert await resp.json() == {"ok": False, "error": "Request body must be a JSON object"}

    @pytest.mark.asyncio
    async def test_non_string_field(self, api_client):
        resp = await api_client.post(LOG_PATH, json=make_payload(game_name=42))

        assert resp.status == 400
        assert (await resp.json())["error"] == "gameName must be a string"

    @pytest.mark.asyncio
    async def test_storage_failure_is_a_client_error(self, api_client, mock_summoner_index):
        mock_summoner_index.log_summoner.side_effect = RuntimeError("disk full")

        resp = await api_client.post(LOG_PATH, json=make_payload())

        assert resp.status == 400
        assert await resp.json() == {"ok": False, "error": "disk full"}


class TestSummonerSuggestRoute:
    @pytest.mark.asyncio
    async def test_defaults(self, api_client, mock_summoner_index):
        resp = await api_client.get(SUGGEST_PATH)

        assert resp.status == 200
        assert await resp.json() == {"ok": True, "results": []}
        mock_summoner_index.suggest_summoners.assert_awaited_once_with("", 8)

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "limit,expected",
        [("0", 8), ("-5", 8), ("abc", 8), ("", 8), ("15", 15), ("100", 20)],
    )
    async def test_limit_parsing(self, api_client, mock_summoner_index, limit, expected):
        resp = await api_client.get(SUGGEST_PATH, params={"q": "fak", "limit": limit})

        assert resp.status == 200
        mock_summoner_index.suggest_summoners.assert_awaited_once_with("fak", expected)

    @pytest.mark.asyncio
    async def test_returns_results(self, api_client, mock_summoner_index):
        row = {"riotId": "Faker#KR1", "gameName": "Faker", "tagLine": "KR1"}
        mock_summoner_index.suggest_summoners.return_value = [row]

        resp = await api_client.get(SUGGEST_PATH, params={"q": "fa"})

        assert await resp.json() == {"ok": True, "results": [row]}

    @pytest.mark.asyncio
    async def test_failure_is_server_error(self, api_client, mock_summoner_index):
        mock_summoner_index.suggest_summoners.side_effect = RuntimeError("database is down")

        resp = await api_client.get(SUGGEST_PATH, params={"q": "faker"})

        assert resp.status == 500
        assert await resp.json() == {"ok": False, "error": "database is down"}


class TestWowCharacterStatsRoute:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("region", ["us", "eu", "kr", "tw"])
    async def test_valid_regions(self, api_client, mock_wow_fetcher, region):
        bnet_region = BnetRegion(region)
        mock_wow_fetcher.fetch_character_stats.return_value = WowCharacterStats(
            region=bnet_region, realm_slug="area-52", name="thrall", level=80
        )

        resp = await api_client.get(
            STATS_PATH, params={"region": region, "realmSlug": "area-52", "name": "thrall"}
        )

        assert resp.status == 200
        assert resp.headers["Cache-Control"] == "s-maxage=600, stale-while-revalidate=60"
        body = await resp.json()
        assert body["region"] == region
        assert body["level"] == 80
        mock_wow_fetcher.fetch_character_stats.assert_awaited_once_with(
            WowCharacterQuery(region=bnet_region, realm_slug="area-52", name="thrall")
        )

    @pytest.mark.asyncio
    async def test_region_defaults_to_us(self, api_client, mock_wow_fetcher):
        mock_wow_fetcher.fetch_character_stats.return_value = WowCharacterStats(
            region=BnetRegion.US, realm_slug="area-52", name="thrall"
        )

        resp = await api_client.get(STATS_PATH, params={"realmSlug": "area-52", "name": "thrall"})

        assert resp.status == 200
        query = mock_wow_fetcher.fetch_character_stats.await_args.args[0]
        assert query.region == BnetRegion.US

    @pytest.mark.asyncio
    @pytest.mark.parametrize("region", ["cn", "US", "xx"])
    async def test_invalid_region(self, api_client, mock_wow_fetcher, region):
        resp = await api_client.get(
            STATS_PATH, params={"region": region, "realmSlug": "area-52", "name": "thrall"}
        )

        assert resp.status == 400
        assert await resp.json() == {"error": "Invalid region"}
        mock_wow_fetcher.fetch_character_stats.assert_not_awaited()

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "params", [{"realmSlug": "area-52"}, {"name": "thrall"}, {"realmSlug": "", "name": "x"}]
    )
    async def test_missing_parameters(self, api_client, params):
        resp = await api_client.get(STATS_PATH, params=params)

        assert resp.status == 400
        assert await resp.json() == {"error": "Missing realmSlug or name"}

    @pytest.mark.asyncio
    async def test_upstream_failure(self, api_client, mock_wow_fetcher):
        mock_wow_fetcher.fetch_character_stats.side_effect = BlizzardAPIError(
            "WoW stats error (404): not found"
        )

        resp = await api_client.get(STATS_PATH, params={"realmSlug": "area-52", "name": "nobody"})

        assert resp.status == 500
        assert await resp.json() == {
            "error": "Failed to fetch character stats",
            "details": "WoW stats error (404): not found",
        }


class TestWowRealmsRoute:
    @pytest.mark.asyncio
    async def test_lists_realms(self, api_client, mock_wow_fetcher):
        mock_wow_fetcher.fetch_realms.return_value = [
            WowRealm(name="Aegwynn", slug="aegwynn"),
            WowRealm(name="Area 52", slug="area-52"),
        ]

        resp = await api_client.get(REALMS_PATH, params={"region": "eu"})

        assert resp.status == 200
        assert resp.headers["Cache-Control"] == "s-maxage=86400, stale-while-revalidate=3600"
        assert await resp.json() == {
            "region": "eu",
            "realms": [
                {"name": "Aegwynn", "slug": "aegwynn"},
                {"name": "Area 52", "slug": "area-52"},
            ],
        }
        mock_wow_fetcher.fetch_realms.assert_awaited_once_with(BnetRegion.EU)

    @pytest.mark.asyncio
    async def test_invalid_region(self, api_client):
        resp = await api_client.get(REALMS_PATH, params={"region": "mars"})

        assert resp.status == 400
        assert await resp.json() == {"error": "Invalid region"}

    @pytest.mark.asyncio
    async def test_upstream_failure(self, api_client, mock_wow_fetcher):
        mock_wow_fetcher.fetch_realms.side_effect = BlizzardAPIError("Realm index error (503): down")

        resp = await api_client.get(REALMS_PATH)

        assert resp.status == 500
        assert await resp.json() == {
            "error": "Failed to fetch realms",
            "details": "Realm index error (503): down",
        }


class TestMetricsMiddleware:
    @pytest.mark.asyncio
    async def test_records_route_and_status(self, mock_summoner_index, mock_wow_fetcher):
        metrics = Mock()
        app = create_app(mock_summoner_index, mock_wow_fetcher, metrics=metrics)

        async with TestClient(TestServer(app)) as client:
            await client.get(REALMS_PATH, params={"region": "mars"})
            await client.get("/does-not-exist")

        calls = metrics.record_http_request.call_args_list
        assert calls[0].args[:3] == (REALMS_PATH, "GET", 400)
        assert calls[1].args[2] == 404


@pytest.mark.integration
class TestSummonerRoutesEndToEnd:
    @pytest_asyncio.fixture
    async def client(self, summoner_index, mock_wow_fetcher):
        app = create_app(summoner_index, mock_wow_fetcher)
        async with TestClient(TestServer(app)) as client:
            yield client

    @pytest.mark.asyncio
    async def test_logged_summoner_is_suggested(self, client):
        first = await client.post(LOG_PATH, json=make_payload())
        second = await client.post(LOG_PATH, json=make_payload())

        assert (await first.json())["entry"]["seen"] == 1
        second_body = await second.json()
        assert second_body["ok"] is True
        assert second_body["count"] == 1
        assert second_body["entry"]["seen"] == 2

        resp = await client.get(SUGGEST_PATH, params={"q": "FAK"})
        body = await resp.json()

        assert body["ok"] is True
        assert [r["riotId"] for r in body["results"]] == ["Faker#KR1"]
        assert body["results"][0]["seen"] == 2

    @pytest.mark.asyncio
    async def test_invalid_identity_is_rejected(self, client):
        resp = await client.post(LOG_PATH, json=make_payload(puuid="short"))

        assert resp.status == 400
        assert await resp.json() == {"ok": False, "error": "Invalid puuid"}

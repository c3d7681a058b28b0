"""Tests for the Data Dragon client and fetch tools."""

import json

import httpx
import pytest
import respx

from gamerstation.adapters.ddragon import DataDragonClient, DataDragonError
from gamerstation.tools import fetch_lol_ddragon, fetch_lol_items

BASE_URL = "https://ddragon.test"
VERSION = "14.20.1"


def champion(champion_id, key, name):
    return {
        "id": champion_id,
        "key": key,
        "name": name,
        "title": f"the {name}",
        "tags": ["Mage"],
        "partype": "Mana",
        "blurb": "dropped from the index",
    }


def champion_detail(champion_id, key, name):
    detail = champion(champion_id, key, name)
    detail.update({
        "stats": {"hp": 600, "armor": 30},
        "spells": [
            {
                "id": f"{champion_id}Q",
                "name": "Q",
                "maxrank": 5,
                "cooldown": [8, 7, 6, 5, 4],
                "cost": [50, 55, 60, 65, 70],
                "costType": "Mana",
                "effect": [None],
                "vars": [],
                "tooltip": "dropped",
            }
        ],
        "passive": {"name": "Passive", "description": "Does things", "image": {}},
    })
    return {"data": {champion_id: detail}}


@pytest.fixture
def ddragon_mock():
    with respx.mock(base_url=BASE_URL, assert_all_called=False) as mock:
        mock.get("/api/versions.json").mock(
            return_value=httpx.Response(200, json=[VERSION, "14.19.1"])
        )
        mock.get(f"/cdn/{VERSION}/data/en_US/champion.json").mock(
            return_value=httpx.Response(
                200,
                json={"data": {
                    "Ahri": champion("Ahri", "103", "Ahri"),
                    "Annie": champion("Annie", "1", "Annie"),
                }},
            )
        )
        mock.get(f"/cdn/{VERSION}/data/en_US/champion/Ahri.json").mock(
            return_value=httpx.Response(200, json=champion_detail("Ahri", "103", "Ahri"))
        )
        mock.get(f"/cdn/{VERSION}/data/en_US/champion/Annie.json").mock(
            return_value=httpx.Response(200, json=champion_detail("Annie", "1", "Annie"))
        )
        mock.get(f"/cdn/{VERSION}/data/en_US/item.json").mock(
            return_value=httpx.Response(
                200,
                json={"type": "item", "data": {"1001": {"name": "Boots"}, "3089": {"name": "Rabadon"}}},
            )
        )
        yield mock


class TestDataDragonClient:
    @pytest.mark.asyncio
    async def test_latest_version_is_first_entry(self, ddragon_mock):
        async with DataDragonClient(base_url=BASE_URL) as client:
            assert await client.get_latest_version() == VERSION

    @pytest.mark.asyncio
    async def test_champion_index_is_summarized(self, ddragon_mock):
        async with DataDragonClient(base_url=BASE_URL) as client:
            champions = await client.get_champion_index(VERSION)

        assert champions[0] == {
            "id": "Ahri",
            "key": "103",
            "name": "Ahri",
            "title": "the Ahri",
            "tags": ["Mage"],
            "partype": "Mana",
        }

    @pytest.mark.asyncio
    async def test_champion_detail_keeps_spell_fields(self, ddragon_mock):
        async with DataDragonClient(base_url=BASE_URL) as client:
            detail = await client.get_champion_detail(VERSION, "Ahri")

        assert detail["stats"] == {"hp": 600, "armor": 30}
        assert detail["passive"] == {"name": "Passive", "description": "Does things"}
        assert "tooltip" not in detail["spells"][0]
        assert detail["spells"][0]["cooldown"] == [8, 7, 6, 5, 4]

    @pytest.mark.asyncio
    async def test_http_error_raises(self):
        with respx.mock(base_url=BASE_URL) as mock:
            mock.get("/api/versions.json").mock(return_value=httpx.Response(500))

            async with DataDragonClient(base_url=BASE_URL) as client:
                with pytest.raises(DataDragonError, match="Fetch failed: 500"):
                    await client.get_latest_version()

    @pytest.mark.asyncio
    async def test_empty_versions_raises(self):
        with respx.mock(base_url=BASE_URL) as mock:
            mock.get("/api/versions.json").mock(return_value=httpx.Response(200, json=[]))

            async with DataDragonClient(base_url=BASE_URL) as client:
                with pytest.raises(DataDragonError, match="no versions"):
                    await client.get_latest_version()


class TestFetchTools:
    @pytest.mark.asyncio
    async def test_fetch_champions_writes_three_files(self, ddragon_mock, tmp_path):
        out_dir = tmp_path / "lol"

        code = await fetch_lol_ddragon.run(out_dir, BASE_URL)

        assert code == 0
        assert json.loads((out_dir / "version.json").read_text()) == {"version": VERSION}

        index = json.loads((out_dir / "champions_index.json").read_text())
        assert index["version"] == VERSION
        assert [c["id"] for c in index["champions"]] == ["Ahri", "Annie"]

        full = json.loads((out_dir / "champions_full.json").read_text())
        assert [c["name"] for c in full["champions"]] == ["Ahri", "Annie"]
        assert full["champions"][1]["spells"][0]["id"] == "AnnieQ"

    @pytest.mark.asyncio
    async def test_fetch_items_writes_version_and_payload(self, ddragon_mock, tmp_path):
        out_path = tmp_path / "data" / "items.json"

        code = await fetch_lol_items.run(out_path, BASE_URL)

        assert code == 0
        payload = json.loads(out_path.read_text())
        assert payload["version"] == VERSION
        assert payload["type"] == "item"
        assert set(payload["data"]) == {"1001", "3089"}

    @pytest.mark.asyncio
    async def test_fetch_failure_returns_non_zero(self, tmp_path):
        with respx.mock(base_url=BASE_URL) as mock:
            mock.get("/api/versions.json").mock(return_value=httpx.Response(503))

            assert await fetch_lol_ddragon.run(tmp_path / "lol", BASE_URL) == 1
            assert await fetch_lol_items.run(tmp_path / "items.json", BASE_URL) == 1

        assert not (tmp_path / "lol" / "champions_full.json").exists()
        assert not (tmp_path / "items.json").exists()

    def test_main_exits_with_run_code(self, ddragon_mock, tmp_path):
        with pytest.raises(SystemExit) as exc_info:
            fetch_lol_items.main(["--out", str(tmp_path / "items.json"), "--base-url", BASE_URL])

        assert exc_info.value.code == 0
        assert (tmp_path / "items.json").exists()

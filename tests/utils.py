"""Test utility functions."""

from typing import Any, Dict, List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from gamerstation.adapters.database.models import SummonerIndexRecord


def make_payload(
    puuid: Any = "puuid-0123456789",
    game_name: Any = "Faker",
    tag_line: Any = "KR1",
    platform: Any = "kr",
    cluster: Any = "asia",
) -> Dict[str, Any]:
    """Build a camelCase summoner log body."""
    return {
        "puuid": puuid,
        "gameName": game_name,
        "tagLine": tag_line,
        "platform": platform,
        "cluster": cluster,
    }


async def get_all_indexed_summoners(session: AsyncSession) -> List[SummonerIndexRecord]:
    """Get every row of the summoner index."""
    result = await session.execute(select(SummonerIndexRecord))
    return list(result.scalars().all())

"""Summoner index: log looked-up summoners and suggest them back."""

from typing import Any, Dict, List, Optional

import structlog

from gamerstation.adapters.database.manager import DatabaseManager
from gamerstation.adapters.observability.metrics import MetricsProvider
from gamerstation.core.entities import SummonerIdentity, now_ms
from gamerstation.core.services import (
    DEFAULT_SUGGEST_LIMIT,
    MIN_SUGGEST_QUERY_LENGTH,
    normalize_query,
    rank_suggestions,
    validate_identity,
)

logger = structlog.get_logger()


class SummonerIndexService:
    """Records summoner lookups and ranks them for autocomplete."""

    def __init__(self, database: DatabaseManager, metrics: Optional[MetricsProvider] = None):
        self.database = database
        self.metrics = metrics

    async def log_summoner(self, identity: SummonerIdentity) -> Dict[str, Any]:
        """Add a summoner to the index or bump its lookup counters.

        Returns:
            ``{"entry", "count", "updatedAt"}`` with the stored entry in
            camelCase, the number of indexed summoners and the log time.

        Raises:
            ValueError: If the identity is incomplete
        """
        try:
            identity = validate_identity(identity)
        except ValueError as e:
            logger.info("Rejected summoner log", reason=str(e))
            if self.metrics:
                self.metrics.record_summoner_logged(success=False)
            raise

        seen_at = now_ms()
        entry = await self.database.upsert_summoner(identity, seen_at)
        count = await self.database.count_summoners()

        logger.info(
            "Logged summoner",
            riot_id=entry.riot_id,
            platform=entry.platform,
            seen=entry.seen,
        )
        if self.metrics:
            self.metrics.record_summoner_logged(success=True)

        return {
            "entry": entry.to_dict(),
            "count": count,
            "updatedAt": seen_at,
        }

    async def suggest_summoners(self, q: str, limit: int = DEFAULT_SUGGEST_LIMIT) -> List[Dict[str, Any]]:
        """Suggest indexed summoners for a partial Riot ID.

        Queries shorter than two characters return nothing.
        """
        query = normalize_query(q)
        if len(query) < MIN_SUGGEST_QUERY_LENGTH:
            return []

        candidates = await self.database.find_summoners_matching(query)
        rows = rank_suggestions(candidates, query, limit)

        logger.debug(
            "Suggested summoners",
            query=query,
            candidates=len(candidates),
            returned=len(rows),
        )
        if self.metrics:
            self.metrics.record_suggestion_query(len(rows))

        return [row.to_dict() for row in rows]

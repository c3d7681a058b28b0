"""Core services for the GamerStation API service.

Pure functions with no I/O: identity validation, suggestion ranking and
the request-parameter rules shared by the HTTP handlers.
"""

import math
import re
from typing import Iterable, List, Optional, Tuple

from .entities import SummonerIdentity, SummonerIndexEntry, SummonerSuggestRow

DEFAULT_SUGGEST_LIMIT = 8
MAX_SUGGEST_LIMIT = 20
MIN_SUGGEST_QUERY_LENGTH = 2

MIN_PUUID_LENGTH = 10
MAX_RIOT_ID_PART_LENGTH = 32

# Match-quality scores, higher is better
SCORE_RIOT_ID_PREFIX = 400
SCORE_GAME_NAME_PREFIX = 350
SCORE_TAG_LINE_PREFIX = 300
SCORE_RIOT_ID_BOUNDARY = 250
SCORE_GAME_NAME_BOUNDARY = 200
SCORE_CONTAINS = 150
NO_MATCH = -1


def _valid_id_part(value: str) -> bool:
    return 0 < len(value) <= MAX_RIOT_ID_PART_LENGTH


def validate_identity(identity: SummonerIdentity) -> SummonerIdentity:
    """Clean an identity and check it is complete enough to index.

    Returns:
        The trimmed identity

    Raises:
        ValueError: With a short client-facing message when invalid
    """
    cleaned = identity.cleaned()

    if len(cleaned.puuid) < MIN_PUUID_LENGTH:
        raise ValueError("Invalid puuid")
    if not _valid_id_part(cleaned.game_name) or not _valid_id_part(cleaned.tag_line):
        raise ValueError("Invalid Riot ID")
    if not cleaned.platform:
        raise ValueError("Missing platform")
    if not cleaned.cluster:
        raise ValueError("Missing cluster")

    return cleaned


def normalize_query(value: Optional[str]) -> str:
    return (value or "").strip().lower()


def clamp_limit(limit: int) -> int:
    return max(1, min(MAX_SUGGEST_LIMIT, limit))


def parse_suggest_limit(raw: Optional[str]) -> int:
    """Turn the ``limit`` query parameter into a usable result count.

    Unparseable, NaN and non-positive values fall back to the default;
    everything else is clamped to [1, MAX_SUGGEST_LIMIT] and truncated.
    Digit separators such as ``"1_5"`` are rejected. Hex literals such as
    ``"0x10"`` are not parsed and also fall back.
    """
    if raw is None or "_" in raw:
        return DEFAULT_SUGGEST_LIMIT
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return DEFAULT_SUGGEST_LIMIT

    if math.isnan(value) or value <= 0:
        return DEFAULT_SUGGEST_LIMIT

    return int(max(1, min(MAX_SUGGEST_LIMIT, value)))


def score_match(riot_id: str, game_name: str, tag_line: str, query: str) -> int:
    """Score how well a summoner matches a lowercase query.

    All inputs must already be lowercased. Returns NO_MATCH when the
    summoner should not be suggested at all.
    """
    if not query:
        return NO_MATCH

    if riot_id.startswith(query):
        return SCORE_RIOT_ID_PREFIX
    if game_name.startswith(query):
        return SCORE_GAME_NAME_PREFIX
    if tag_line.startswith(query):
        return SCORE_TAG_LINE_PREFIX

    # "word boundary" style match (space/_/-/.)
    boundary = re.compile(r"(^|[\s_\-.])" + re.escape(query))
    if boundary.search(riot_id):
        return SCORE_RIOT_ID_BOUNDARY
    if boundary.search(game_name):
        return SCORE_GAME_NAME_BOUNDARY

    if query in riot_id:
        return SCORE_CONTAINS

    return NO_MATCH


def rank_suggestions(
    entries: Iterable[SummonerIndexEntry], query: str, limit: int
) -> List[SummonerSuggestRow]:
    """Rank index entries against a query.

    Ordering: match score, then popularity (seen), then recency (last_seen).
    """
    query = normalize_query(query)
    scored: List[Tuple[int, SummonerSuggestRow]] = []

    for entry in entries:
        row = SummonerSuggestRow.from_entry(entry)
        score = score_match(
            normalize_query(row.riot_id),
            normalize_query(row.game_name),
            normalize_query(row.tag_line),
            query,
        )
        if score >= 0:
            scored.append((score, row))

    scored.sort(key=lambda item: (item[0], item[1].seen, item[1].last_seen), reverse=True)
    return [row for _, row in scored[: clamp_limit(limit)]]

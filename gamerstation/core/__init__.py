"""Core layer for the GamerStation API service.

This module provides the domain entities, enums and pure services shared
by the adapters and the HTTP handlers.
"""

from .entities import (
    SummonerIdentity,
    SummonerIndexEntry,
    SummonerSuggestRow,
    WowCharacterQuery,
    WowCharacterStats,
    WowRealm,
)
from .enums import BnetRegion

__all__ = [
    "SummonerIdentity",
    "SummonerIndexEntry",
    "SummonerSuggestRow",
    "WowCharacterQuery",
    "WowCharacterStats",
    "WowRealm",
    "BnetRegion",
]

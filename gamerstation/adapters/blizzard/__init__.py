"""Blizzard API adapter package.

This package contains the Battle.net client used by the WoW endpoints.
"""

from .client import (
    BlizzardAPIClient,
    BlizzardAPIError,
    CharacterNotFoundError,
    RateLimitError,
    parse_character_stats,
    parse_realms,
)

__all__ = [
    # Client
    "BlizzardAPIClient",
    # Exceptions
    "BlizzardAPIError",
    "CharacterNotFoundError",
    "RateLimitError",
    # Payload mapping
    "parse_character_stats",
    "parse_realms",
]

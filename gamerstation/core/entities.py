"""Core entities for the GamerStation API service."""

import time
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

from .enums import BnetRegion


def now_ms() -> int:
    """Current wall-clock time in epoch milliseconds."""
    return int(time.time() * 1000)


IDENTITY_FIELDS = ("puuid", "gameName", "tagLine", "platform", "cluster")


@dataclass
class SummonerIdentity:
    """A League of Legends summoner as reported by a lookup.

    Every field is a trimmed string; missing values are empty strings.
    """

    puuid: str = ""
    game_name: str = ""
    tag_line: str = ""
    platform: str = ""
    cluster: str = ""

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "SummonerIdentity":
        """Build an identity from a camelCase JSON object.

        Raises:
            ValueError: If a present field is not a string
        """
        values = {}
        for key in IDENTITY_FIELDS:
            raw = payload.get(key)
            if raw is None:
                raw = ""
            if not isinstance(raw, str):
                raise ValueError(f"{key} must be a string")
            values[key] = raw.strip()

        return cls(
            puuid=values["puuid"],
            game_name=values["gameName"],
            tag_line=values["tagLine"],
            platform=values["platform"],
            cluster=values["cluster"],
        )

    def cleaned(self) -> "SummonerIdentity":
        """Return a copy with every field trimmed."""
        return SummonerIdentity(
            puuid=(self.puuid or "").strip(),
            game_name=(self.game_name or "").strip(),
            tag_line=(self.tag_line or "").strip(),
            platform=(self.platform or "").strip(),
            cluster=(self.cluster or "").strip(),
        )

    @property
    def riot_id(self) -> str:
        """Get the summoner's Riot ID in game_name#tag_line format."""
        return f"{self.game_name}#{self.tag_line}"


@dataclass
class SummonerIndexEntry:
    """A summoner stored in the index, with lookup counters."""

    puuid: str
    game_name: str
    tag_line: str
    platform: str
    cluster: str
    seen: int = 1
    first_seen: int = field(default_factory=now_ms)
    last_seen: int = field(default_factory=now_ms)

    @property
    def riot_id(self) -> str:
        return f"{self.game_name}#{self.tag_line}"

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the camelCase shape returned by the API."""
        return {
            "puuid": self.puuid,
            "gameName": self.game_name,
            "tagLine": self.tag_line,
            "platform": self.platform,
            "cluster": self.cluster,
            "seen": self.seen,
            "firstSeen": self.first_seen,
            "lastSeen": self.last_seen,
        }


@dataclass
class SummonerSuggestRow:
    """A single autocomplete suggestion."""

    riot_id: str
    game_name: str
    tag_line: str
    platform: str
    cluster: str
    seen: int
    last_seen: int

    @classmethod
    def from_entry(cls, entry: SummonerIndexEntry) -> "SummonerSuggestRow":
        return cls(
            riot_id=entry.riot_id,
            game_name=entry.game_name,
            tag_line=entry.tag_line,
            platform=entry.platform,
            cluster=entry.cluster,
            seen=entry.seen or 0,
            last_seen=entry.last_seen or 0,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "riotId": self.riot_id,
            "gameName": self.game_name,
            "tagLine": self.tag_line,
            "platform": self.platform,
            "cluster": self.cluster,
            "seen": self.seen,
            "lastSeen": self.last_seen,
        }


@dataclass
class WowCharacterQuery:
    """Which character to fetch statistics for."""

    region: BnetRegion
    realm_slug: str
    name: str


@dataclass
class WowPrimaryStats:
    strength: Optional[float] = None
    agility: Optional[float] = None
    intellect: Optional[float] = None


@dataclass
class WowSecondaryStats:
    crit_rating: Optional[float] = None
    crit_pct: Optional[float] = None
    haste_rating: Optional[float] = None
    haste_pct: Optional[float] = None
    mastery_rating: Optional[float] = None
    mastery_pct: Optional[float] = None
    versatility_rating: Optional[float] = None
    versatility_damage_done_bonus_pct: Optional[float] = None
    versatility_damage_taken_reduction_pct: Optional[float] = None


@dataclass
class WowCharacterStats:
    """The slice of the Blizzard statistics payload the stat tools use.

    Every number is optional because the payload varies by class and specialization.
    """

    region: BnetRegion
    realm_slug: str
    name: str
    level: Optional[int] = None
    primary: WowPrimaryStats = field(default_factory=WowPrimaryStats)
    secondary: WowSecondaryStats = field(default_factory=WowSecondaryStats)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "region": self.region.value,
            "realmSlug": self.realm_slug,
            "name": self.name,
            "level": self.level,
            "primary": {
                "strength": self.primary.strength,
                "agility": self.primary.agility,
                "intellect": self.primary.intellect,
            },
            "secondary": {
                "critRating": self.secondary.crit_rating,
                "critPct": self.secondary.crit_pct,
                "hasteRating": self.secondary.haste_rating,
                "hastePct": self.secondary.haste_pct,
                "masteryRating": self.secondary.mastery_rating,
                "masteryPct": self.secondary.mastery_pct,
                "versatilityRating": self.secondary.versatility_rating,
                "versatilityDamageDoneBonusPct": self.secondary.versatility_damage_done_bonus_pct,
                "versatilityDamageTakenReductionPct": self.secondary.versatility_damage_taken_reduction_pct,
            },
        }


@dataclass
class WowRealm:
    """A realm as listed by the realm index."""

    name: str
    slug: str

    def to_dict(self) -> Dict[str, str]:
        return {"name": self.name, "slug": self.slug}

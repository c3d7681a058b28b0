"""Core enums for the GamerStation API service."""

from enum import Enum
from typing import Optional


class BnetRegion(Enum):
    """Battle.net regions served by the WoW endpoints."""

    US = "us"
    EU = "eu"
    KR = "kr"
    TW = "tw"

    @property
    def api_host(self) -> str:
        """Game Data / Profile API host for this region."""
        return f"https://{self.value}.api.blizzard.com"

    @property
    def oauth_host(self) -> str:
        """OAuth host used for client-credentials tokens."""
        return f"https://{self.value}.battle.net"

    @property
    def locale(self) -> str:
        return "en_GB" if self == BnetRegion.EU else "en_US"

    @property
    def profile_namespace(self) -> str:
        """Namespace for Profile API calls (character statistics)."""
        return f"profile-{self.value}"

    @property
    def dynamic_namespace(self) -> str:
        """Namespace for Game Data API calls (realm index)."""
        return f"dynamic-{self.value}"

    @classmethod
    def from_string(cls, value: Optional[str]) -> Optional["BnetRegion"]:
        """Look up a region by its exact lowercase code.

        Returns None for anything outside the supported set.
        """
        for region in cls:
            if region.value == value:
                return region
        return None


"""GamerStation API: summoner index and World of Warcraft lookups."""

__version__ = "0.1.0"

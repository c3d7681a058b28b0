"""Application services for the GamerStation API."""

from .summoner_index import SummonerIndexService

__all__ = ["SummonerIndexService"]

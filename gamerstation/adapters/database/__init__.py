"""Database adapter package.

SQLAlchemy async models and the manager backing the summoner index.
"""

from .manager import DatabaseManager
from .models import Base, SummonerIndexRecord

__all__ = ["DatabaseManager", "Base", "SummonerIndexRecord"]

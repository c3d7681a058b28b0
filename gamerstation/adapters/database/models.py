"""SQLAlchemy models for the GamerStation API service."""

from datetime import datetime

from sqlalchemy import BigInteger, DateTime, Index, Integer, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.sql import func


class Base(DeclarativeBase):
    pass


class SummonerIndexRecord(Base):
    """A League of Legends summoner seen through a lookup."""

    __tablename__ = "summoner_index"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    puuid: Mapped[str] = mapped_column(String(78), nullable=False)
    game_name: Mapped[str] = mapped_column(String(32), nullable=False)
    tag_line: Mapped[str] = mapped_column(String(32), nullable=False)
    platform: Mapped[str] = mapped_column(String(16), nullable=False)  # na1, kr, euw1, ...
    cluster: Mapped[str] = mapped_column(String(16), nullable=False)  # americas, europe, asia, sea

    # Lookup counters, timestamps in epoch milliseconds
    seen: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    first_seen: Mapped[int] = mapped_column(BigInteger, nullable=False)
    last_seen: Mapped[int] = mapped_column(BigInteger, nullable=False)

    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=func.now(), onupdate=func.now()
    )

    __table_args__ = (
        Index("uq_summoner_index_puuid", "puuid", unique=True),
        Index("idx_summoner_index_game_name", "game_name"),
    )

    def __repr__(self) -> str:
        return f"<SummonerIndexRecord(game_name='{self.game_name}', tag_line='{self.tag_line}', seen={self.seen})>"

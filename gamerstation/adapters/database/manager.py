"""Database infrastructure layer for the summoner index."""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator, List, Optional

from sqlalchemy import func, select
from sqlalchemy.dialects.postgresql import insert as postgresql_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import NullPool

from ...config import Config
from ...core.entities import SummonerIdentity, SummonerIndexEntry
from .models import Base, SummonerIndexRecord

logger = logging.getLogger(__name__)


class DatabaseManager:
    """Manages database connection and provides direct repository methods."""

    def __init__(self, config: Config):
        self.config = config
        self._engine: Optional[AsyncEngine] = None
        self._session_factory: Optional[async_sessionmaker[AsyncSession]] = None

    async def initialize(self) -> None:
        """Initialize database engine and session factory."""
        if self._engine is not None:
            logger.warning("Database manager already initialized")
            return

        # Create async engine with proper connection pooling
        self._engine = create_async_engine(
            self.config.get_database_url(),
            echo=self.config.log_level == "DEBUG",
            poolclass=NullPool,  # Use NullPool for better connection management in async context
            pool_pre_ping=True,  # Verify connections before use
        )

        self._session_factory = async_sessionmaker(
            bind=self._engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

        logger.info("Database manager initialized successfully")

    async def close(self) -> None:
        """Close database engine and clean up resources."""
        if self._engine is not None:
            await self._engine.dispose()
            self._engine = None
            self._session_factory = None
            logger.info("Database manager closed")

    @asynccontextmanager
    async def get_session(self) -> AsyncGenerator[AsyncSession, None]:
        """Get a database session with automatic cleanup."""
        if self._session_factory is None:
            raise RuntimeError(
                "Database manager not initialized. Call initialize() first."
            )

        async with self._session_factory() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise
            finally:
                await session.close()

    async def create_tables(self) -> None:
        """Create all database tables. Used for testing and local setup."""
        if self._engine is None:
            raise RuntimeError(
                "Database manager not initialized. Call initialize() first."
            )

        async with self._engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

        logger.info("Database tables created successfully")

    async def drop_tables(self) -> None:
        """Drop all database tables. Used for testing cleanup."""
        if self._engine is None:
            raise RuntimeError(
                "Database manager not initialized. Call initialize() first."
            )

        async with self._engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)

        logger.info("Database tables dropped successfully")

    # Conversion methods
    def _convert_db_summoner_to_core_entity(self, record: SummonerIndexRecord) -> SummonerIndexEntry:
        """Convert a SummonerIndexRecord row to a core SummonerIndexEntry."""
        return SummonerIndexEntry(
            puuid=record.puuid,
            game_name=record.game_name,
            tag_line=record.tag_line,
            platform=record.platform,
            cluster=record.cluster,
            seen=record.seen,
            first_seen=record.first_seen,
            last_seen=record.last_seen,
        )

    # Summoner index repository methods
    async def upsert_summoner(self, identity: SummonerIdentity, seen_at: int) -> SummonerIndexEntry:
        """Insert a summoner or bump the counters of an existing one.

        Name, tag, platform and cluster are overwritten with the latest
        values; first_seen is kept from the original insert.

        Args:
            identity: Validated summoner identity
            seen_at: Lookup time in epoch milliseconds
        """
        if self._engine is None:
            raise RuntimeError(
                "Database manager not initialized. Call initialize() first."
            )

        # Single INSERT .. ON CONFLICT so concurrent logs of one puuid
        # neither collide on the unique index nor lose seen increments.
        if self._engine.dialect.name == "postgresql":
            insert = postgresql_insert
        elif self._engine.dialect.name == "sqlite":
            insert = sqlite_insert
        else:
            raise RuntimeError(
                f"Unsupported database dialect: {self._engine.dialect.name}"
            )

        stmt = insert(SummonerIndexRecord).values(
            puuid=identity.puuid,
            game_name=identity.game_name,
            tag_line=identity.tag_line,
            platform=identity.platform,
            cluster=identity.cluster,
            seen=1,
            first_seen=seen_at,
            last_seen=seen_at,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=[SummonerIndexRecord.puuid],
            set_={
                "game_name": stmt.excluded.game_name,
                "tag_line": stmt.excluded.tag_line,
                "platform": stmt.excluded.platform,
                "cluster": stmt.excluded.cluster,
                "seen": SummonerIndexRecord.seen + 1,
                "last_seen": stmt.excluded.last_seen,
                "updated_at": func.now(),
            },
        )

        async with self.get_session() as session:
            await session.execute(stmt)
            result = await session.execute(
                select(SummonerIndexRecord).where(SummonerIndexRecord.puuid == identity.puuid)
            )
            record = result.scalar_one()
            await session.commit()
            return self._convert_db_summoner_to_core_entity(record)

    async def get_summoner_by_puuid(self, puuid: str) -> Optional[SummonerIndexEntry]:
        """Get an indexed summoner by PUUID."""
        async with self.get_session() as session:
            result = await session.execute(
                select(SummonerIndexRecord).where(SummonerIndexRecord.puuid == puuid)
            )
            record = result.scalar_one_or_none()
            return self._convert_db_summoner_to_core_entity(record) if record else None

    async def count_summoners(self) -> int:
        """Count distinct summoners in the index."""
        async with self.get_session() as session:
            result = await session.execute(
                select(func.count()).select_from(SummonerIndexRecord)
            )
            return int(result.scalar_one())

    async def find_summoners_matching(self, query: str) -> List[SummonerIndexEntry]:
        """Get every summoner whose lowercase Riot ID contains ``query``.

        ``query`` must already be lowercased. LIKE wildcards in it are
        matched literally.
        """
        riot_id = func.lower(
            SummonerIndexRecord.game_name + "#" + SummonerIndexRecord.tag_line
        )
        async with self.get_session() as session:
            result = await session.execute(
                select(SummonerIndexRecord).where(riot_id.contains(query, autoescape=True))
            )
            return [self._convert_db_summoner_to_core_entity(r) for r in result.scalars().all()]

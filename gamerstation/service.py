"""Main service class for the GamerStation API."""

import asyncio
import logging
from typing import Optional

from aiohttp import web

from gamerstation.adapters.blizzard.client import BlizzardAPIClient
from gamerstation.adapters.database.manager import DatabaseManager
from gamerstation.adapters.http import create_app
from gamerstation.adapters.observability import initialize_metrics, shutdown_metrics
from gamerstation.application.summoner_index import SummonerIndexService
from gamerstation.config import Config


logger = logging.getLogger(__name__)


class GamerStationService:
    """Main service class that wires infrastructure into the HTTP API.

    Infrastructure components are created directly from the config; there
    is no dependency injection framework.
    """

    def __init__(self, config: Config):
        self.config = config
        self._running = False

        # Infrastructure components
        self._database_manager: Optional[DatabaseManager] = None
        self._blizzard_client: Optional[BlizzardAPIClient] = None
        self._summoner_index: Optional[SummonerIndexService] = None
        self._metrics_provider = None

        # HTTP server
        self._runner: Optional[web.AppRunner] = None

    async def _start_http_server(self) -> None:
        """Start the aiohttp server."""
        logger.info("Starting HTTP server...")

        app = create_app(
            summoner_index=self._summoner_index,
            wow_fetcher=self._blizzard_client,
            metrics=self._metrics_provider,
        )
        self._runner = web.AppRunner(app)
        await self._runner.setup()

        site = web.TCPSite(self._runner, self.config.http_host, self.config.http_port)
        await site.start()

        logger.info(f"HTTP server listening on {self.config.http_host}:{self.config.http_port}")

    async def start(self) -> None:
        """Start the service and serve until stopped."""
        logger.info("Starting GamerStation API service")
        self._running = True

        try:
            await self._initialize_infrastructure()
            await self._start_http_server()

            while self._running:
                await asyncio.sleep(1)

        except Exception:
            self._running = False
            raise

    async def stop(self) -> None:
        """Stop the service."""
        logger.info("Stopping GamerStation API service")
        self._running = False

        if self._runner:
            logger.info("Stopping HTTP server...")
            await self._runner.cleanup()
            self._runner = None
            logger.info("HTTP server stopped")

        await self._cleanup_infrastructure()

        logger.info("GamerStation API service stopped")

    async def _initialize_infrastructure(self) -> None:
        """Initialize all infrastructure components."""
        logger.info("Initializing infrastructure components")

        # Initialize metrics provider first
        self._metrics_provider = initialize_metrics(self.config)

        self._database_manager = DatabaseManager(self.config)
        await self._database_manager.initialize()

        # Production schemas are managed by alembic
        if not self.config.is_production():
            await self._database_manager.create_tables()

        self._blizzard_client = BlizzardAPIClient(
            self.config.bnet_client_id,
            self.config.bnet_client_secret,
            metrics=self._metrics_provider,
            request_timeout=self.config.blizzard_api_timeout_seconds,
        )

        self._summoner_index = SummonerIndexService(
            self._database_manager,
            metrics=self._metrics_provider,
        )

        logger.info("Infrastructure initialization completed")

    async def _cleanup_infrastructure(self) -> None:
        """Clean up all infrastructure components."""
        logger.info("Cleaning up infrastructure components")

        if self._blizzard_client:
            await self._blizzard_client.close()
            self._blizzard_client = None

        if self._database_manager:
            try:
                await self._database_manager.close()
            except Exception as e:
                logger.error(f"Error during database disconnect: {e}")
            self._database_manager = None

        shutdown_metrics()

        logger.info("Infrastructure cleanup completed")

#!/usr/bin/env python3
"""
GamerStation API - Main entry point

Serves the summoner index and World of Warcraft lookup endpoints over HTTP.
"""
import argparse
import asyncio
import logging
import signal
import sys

import hupper

from gamerstation.adapters.observability import configure_logging
from gamerstation.config import Config
from gamerstation.service import GamerStationService


logger = logging.getLogger(__name__)


def run_service():
    """Run the service (called by hupper in worker process)."""
    asyncio.run(main())


def start_with_reloader():
    """Start the service with hot reload using hupper."""
    # hupper.start_reloader returns a reloader object in the monitor process
    # and returns None in the worker process
    reloader = hupper.start_reloader("gamerstation.main.run_service")

    if reloader:
        logger.info("Hot reload enabled, monitoring file changes...")


async def main(port: int = None):
    """Main entry point for the GamerStation API service.

    Args:
        port: Override for the configured HTTP port
    """
    config = Config.from_env()

    if port is not None:
        config.http_port = port

    configure_logging(config)

    logger.info("Starting GamerStation API service")

    service = GamerStationService(config)

    # Handle graceful shutdown
    def signal_handler(sig, frame):
        logger.info(f"Received signal {sig}, shutting down gracefully...")
        asyncio.create_task(service.stop())

    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)

    try:
        await service.start()
    except KeyboardInterrupt:
        logger.info("Received keyboard interrupt, shutting down...")
    except Exception as e:
        logger.error(f"Service failed with error: {e}")
        sys.exit(1)
    finally:
        await service.stop()


def cli(argv=None):
    """Console script entry point."""
    parser = argparse.ArgumentParser(description="GamerStation API service")
    parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Port to listen on (overrides HTTP_PORT)",
    )
    parser.add_argument(
        "--no-reload",
        action="store_true",
        help="Disable hot reload in development",
    )
    args = parser.parse_args(argv)

    config = Config.from_env()

    # Enable hot reload in development
    if config.is_development() and not args.no_reload:
        if args.port is not None:
            # hupper restarts the process, so pass the port through the env
            import os
            os.environ["HTTP_PORT"] = str(args.port)
        start_with_reloader()
    else:
        asyncio.run(main(port=args.port))


if __name__ == "__main__":
    cli()

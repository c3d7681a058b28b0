"""aiohttp application factory."""

import time
from typing import Optional

import structlog
from aiohttp import web

from gamerstation.adapters.observability.metrics import MetricsProvider

from .routes import ApiRoutes, SummonerIndex, WowDataFetcher

logger = structlog.get_logger()


def _route_name(request: web.Request) -> str:
    resource = request.match_info.route.resource
    return resource.canonical if resource is not None else "unmatched"


def metrics_middleware(metrics: Optional[MetricsProvider]):
    """Build a middleware that logs and measures every request."""

    @web.middleware
    async def middleware(request: web.Request, handler):
        started = time.time()
        status = 500
        try:
            response = await handler(request)
            status = response.status
            return response
        except web.HTTPException as exc:
            status = exc.status
            raise
        finally:
            duration = time.time() - started
            route = _route_name(request)
            logger.debug(
                "Handled request",
                method=request.method,
                route=route,
                status=status,
                duration_ms=round(duration * 1000, 1),
            )
            if metrics:
                metrics.record_http_request(route, request.method, status, duration)

    return middleware


def create_app(
    summoner_index: SummonerIndex,
    wow_fetcher: WowDataFetcher,
    metrics: Optional[MetricsProvider] = None,
) -> web.Application:
    """Create the web application with all API routes registered."""
    app = web.Application(middlewares=[metrics_middleware(metrics)])
    ApiRoutes(summoner_index, wow_fetcher).register(app)
    return app

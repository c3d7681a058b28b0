"""HTTP adapter: aiohttp routes and application factory."""

from .app import create_app
from .routes import ApiRoutes

__all__ = ["create_app", "ApiRoutes"]

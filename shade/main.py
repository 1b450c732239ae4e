"""
Shade Application Entry Point

FastAPI application factory, lifecycle management and server bootstrap.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from shade import __version__
from shade.api.proxy import router as proxy_router
from shade.config import Settings, get_settings
from shade.domain.proxy import ProxyConfig
from shade.logging_config import setup_logging
from shade.services.dispatcher import ProxyService
from shade.upstream.base import UpstreamTransport
from shade.upstream.fetcher import UpstreamFetcher

logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    transport: Optional[UpstreamTransport] = None,
) -> FastAPI:
    """
    Create the FastAPI application

    The proxy configuration is built here, so a missing key or unusable
    setting fails at startup rather than on the first request. Logging is
    configured here as well, so the rejection log works however the app
    is started (run(), `uvicorn --factory`, or a reload worker).

    Args:
        settings: Application settings, loaded from the environment when None
        transport: Upstream transport strategy, selected from settings when None

    Returns:
        FastAPI: Application instance
    """
    settings = settings or get_settings()
    setup_logging(settings)
    config = ProxyConfig.from_settings(settings)
    fetcher = UpstreamFetcher(config, transport)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Close the pooled upstream client on shutdown"""
        yield
        await fetcher.aclose()

    # Docs routes are disabled: every path belongs to the proxy
    app = FastAPI(
        title=settings.APP_NAME,
        description="Signed-URL asset proxy",
        version=__version__,
        lifespan=lifespan,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.state.proxy_config = config
    app.state.proxy_service = ProxyService(config, fetcher)
    app.include_router(proxy_router)

    logger.info(
        "Proxy ready: length_limit=%d max_redirects=%d socket_timeout=%ss digest=%s mime_types=%d",
        config.length_limit,
        config.max_redirects,
        config.socket_timeout,
        config.digest_algorithm,
        len(config.mime_types),
    )
    return app


def run() -> None:
    """Start the server with uvicorn"""
    import uvicorn

    settings = get_settings()
    setup_logging(settings)
    uvicorn.run(
        "shade.main:create_app",
        factory=True,
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        log_config=None,
    )


if __name__ == "__main__":
    run()

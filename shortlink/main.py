"""
FastAPI Application Entry Point

This module builds the FastAPI application and configures:
- Routes (landing page, stylesheet, /shorten, short code lookup)
- Middleware (request logging)
- Plain-text rendering of HTTP errors

Configuration is explicit: create_app() takes a Settings instance and puts
the link store and asset service on app.state for the endpoints.

Run with:
    shortlink            (console script)
    uvicorn shortlink.main:app --port 3002
"""

import logging
from contextlib import asynccontextmanager
from http import HTTPStatus
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from shortlink.api import endpoints
from shortlink.core.logging_config import setup_logging
from shortlink.core.setting import Settings, get_settings
from shortlink.db.session import create_link_store
from shortlink.middleware.logging import add_logging_middleware
from shortlink.services.asset_service import AssetService

logger = logging.getLogger(__name__)

ROUTING_ERROR_CODES = {404, 405}


async def plain_text_http_exception_handler(
    request: Request,
    exc: StarletteHTTPException
) -> PlainTextResponse:
    """
    Render HTTP errors as text/plain.
    
    Routing errors carry only the default reason phrase and are prefixed
    with their status code: "405 Method Not Allowed". Details set by
    endpoints are sent unchanged.
    """
    detail = str(exc.detail)
    if exc.status_code in ROUTING_ERROR_CODES and detail == HTTPStatus(exc.status_code).phrase:
        detail = f"{exc.status_code} {detail}"
    return PlainTextResponse(
        detail,
        status_code=exc.status_code,
        headers=getattr(exc, "headers", None)
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Log where the service listens and what it persists to."""
    settings: Settings = app.state.settings
    logger.info(
        f"Server running at http://localhost:{settings.PORT} "
        f"(data file: {settings.DATA_FILE})"
    )
    yield
    logger.info("Server shutting down")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.
    
    Args:
        settings: Configuration to use (read from environment when omitted)
    
    Returns:
        Configured FastAPI app
    """
    settings = settings or get_settings()
    setup_logging(settings.LOG_LEVEL)
    
    # Docs routes are disabled: every GET path is a potential short code
    app = FastAPI(
        title="Shortlink",
        description="Minimal URL shortening service backed by a JSON document",
        version="1.0.0",
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
        lifespan=lifespan,
    )
    
    app.state.settings = settings
    app.state.link_store = create_link_store(settings)
    app.state.asset_service = AssetService(settings.STATIC_DIR)
    
    app.add_exception_handler(StarletteHTTPException, plain_text_http_exception_handler)
    
    add_logging_middleware(app)
    
    app.include_router(endpoints.router, tags=["URL Shortener"])
    
    return app


app = create_app()


def run() -> None:
    """Serve the application with uvicorn on the configured host and port."""
    settings: Settings = app.state.settings
    uvicorn.run(app, host=settings.HOST, port=settings.PORT, log_level=settings.LOG_LEVEL.lower())


if __name__ == "__main__":
    run()

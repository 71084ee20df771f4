"""Static file server with directory listings.

The app is a FastAPI instance with one ``StaticFiles`` mount at the base
directory and the listing middleware in front of it. The middleware answers
directory requests; files, and anything it passes on, reach the mount.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.staticfiles import StaticFiles

from showdir import __version__
from showdir.config import Settings, get_settings
from showdir.listing.middleware import DirectoryListing
from showdir.status_handlers import not_found

logger = logging.getLogger(__name__)


async def _not_found(request: Request, exc: Exception):
    return not_found()


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the application for *settings* (defaults to the environment)."""
    settings = settings or get_settings()

    app = FastAPI(
        title="showdir",
        version=__version__,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.state.settings = settings

    # --- Directory listings ----------------------------------------------
    app.middleware("http")(DirectoryListing(settings))

    # --- Files -------------------------------------------------------------
    app.mount(
        settings.base_dir,
        StaticFiles(directory=settings.root, html=False, check_dir=True),
        name="files",
    )
    app.add_exception_handler(404, _not_found)

    logger.debug("Serving %s at %s", settings.root, settings.base_dir)
    return app


def run_server(settings: Settings, dev: bool = False) -> None:
    """Start uvicorn for *settings*."""
    import uvicorn

    url = f"http://{settings.host}:{settings.port}{settings.base_dir}"
    logger.info("Serving %s at %s", settings.root, url)
    if settings.public_url:
        logger.info("Player links use public URL %s", settings.public_url)

    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        log_level="debug" if dev else settings.log_level.lower(),
        log_config=None,
    )

"""Mosaic Gallery — FastAPI Application.

This module is the single entry point for the web application.  It defines
the FastAPI ``app`` instance, the REST routes, and the ``main()`` CLI
function that launches the uvicorn server.

Architecture
------------
- **Image listing** is a plain directory scan performed on every request by
  :func:`~mosaic.api.image_lister.list_images`.  There is no cache and no
  persistence.
- **Static assets** are served by FastAPI's ``StaticFiles``: the packaged
  CSS, JS and placeholder under ``/static``, and the configured assets
  directory at the site root so listed ``src`` paths resolve directly.
- **The HTML page** is the packaged ``index.html`` Jinja2 template,
  rendered with autoescaping from frozen font/viewport configuration.  All gallery
  data is fetched by the browser script on page load.

Endpoints
---------
========  ==================  ==========================================
Method    Path                Purpose
========  ==================  ==========================================
GET       ``/``               Serve the gallery HTML page
GET       ``/api/config``     Layout settings, labels, fallback images
GET       ``/api/images``     List image descriptors
GET       ``/<file>``         Images from the assets directory
GET       ``/static/...``     Packaged CSS, JS and placeholder
========  ==================  ==========================================

Usage
-----
CLI (installed entry point)::

    mosaic

Direct invocation::

    python -m mosaic.api.main
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, JSONResponse
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates

from mosaic import __version__
from mosaic.api.image_lister import ListingError, list_images
from mosaic.api.models import ErrorResponse, GalleryConfigResponse, ImageDescriptor
from mosaic.core.config import config
from mosaic.ui.models import EMPTY_MESSAGE, FALLBACK_IMAGES, FETCH_ERROR_MESSAGE, LOADING_LABEL
from mosaic.ui.page import FontConfig, ViewportConfig, index_context

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Resolve paths and page settings from the global configuration instance.
# Font and viewport are frozen here, once, and passed to the renderer.
# ---------------------------------------------------------------------------
ASSETS_DIR: Path = config.assets_dir
STATIC_DIR: Path = config.static_dir
TEMPLATES_DIR: Path = config.templates_dir

FONT = FontConfig.from_settings(config)
VIEWPORT = ViewportConfig.from_settings(config)
PAGE_CONTEXT = index_context(
    title=config.site_title,
    description=config.site_description,
    heading=config.heading,
    font=FONT,
    viewport=VIEWPORT,
)

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

LISTING_FAILURE = "Failed to fetch images"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Log where images are served from for the lifetime of the app.

    Args:
        app: The FastAPI application instance.

    Yields:
        Control back to the application for the duration of its lifetime.
    """
    if not ASSETS_DIR.is_dir():
        logger.warning(f"Assets directory {ASSETS_DIR} does not exist; listing will fail.")
    logger.info(f"Serving gallery images from {ASSETS_DIR.resolve()}")

    yield

    logger.info("Gallery server stopped.")


# ---------------------------------------------------------------------------
# FastAPI application instance.
# ---------------------------------------------------------------------------
app = FastAPI(
    title="Mosaic Gallery",
    description="Masonry image gallery over a static assets directory.",
    version=__version__,
    lifespan=lifespan,
)

# Allow cross-origin requests so the page can be served from a different
# port during development.
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["GET"],
    allow_headers=["*"],
)

app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")


# ---------------------------------------------------------------------------
# Routes.
# ---------------------------------------------------------------------------


@app.get("/", response_class=HTMLResponse)
async def index(request: Request) -> HTMLResponse:
    """Serve the gallery HTML page.

    Returns:
        ``templates/index.html`` rendered with title, heading, font and
        viewport.

    Raises:
        HTTPException: 404 if ``index.html`` is not found.
    """
    index_path = TEMPLATES_DIR / "index.html"
    if not index_path.exists():
        raise HTTPException(status_code=404, detail="index.html not found")

    context = {**PAGE_CONTEXT, "defaults": gallery_settings().model_dump()}
    return templates.TemplateResponse(request, "index.html", context)


@app.get("/api/config", response_model=GalleryConfigResponse)
async def get_config() -> GalleryConfigResponse:
    """Return the settings the browser script needs before fetching images.

    Returns:
        Endpoint URL, grid row height, labels and the fallback image set.
    """
    return gallery_settings()


def gallery_settings() -> GalleryConfigResponse:
    """Settings for the browser script; also embedded in the index page."""
    return GalleryConfigResponse(
        version=__version__,
        api_url=config.api_url,
        row_height_px=config.row_height_px,
        min_tile_height_px=config.min_tile_height_px,
        heading=config.heading,
        loading_label=LOADING_LABEL,
        error_message=FETCH_ERROR_MESSAGE,
        empty_message=EMPTY_MESSAGE,
        fallback_images=list(FALLBACK_IMAGES),
    )


@app.get(
    "/api/images",
    response_model=list[ImageDescriptor],
    responses={500: {"model": ErrorResponse}},
)
async def get_images():
    """List the images in the assets directory.

    An empty directory is a successful, empty listing.

    Returns:
        A JSON array of descriptors, or ``{"error": ...}`` with status 500
        if the directory cannot be read.
    """
    try:
        return list_images(ASSETS_DIR)
    except ListingError as e:
        logger.error(f"Error reading assets directory: {e}", exc_info=True)
        return JSONResponse(
            status_code=500,
            content=ErrorResponse(error=LISTING_FAILURE).model_dump(),
        )


# The assets directory is served at the site root.  Mounted last so the
# routes above take precedence.  ``check_dir=False`` keeps the app importable
# when the directory is missing; the listing endpoint reports that case.
app.mount("/", StaticFiles(directory=str(ASSETS_DIR), check_dir=False), name="assets")


# ---------------------------------------------------------------------------
# CLI entry point.
# ---------------------------------------------------------------------------


def main() -> None:
    """Launch the uvicorn ASGI server.

    Reads host, port and log level from :data:`~mosaic.core.config.config`
    (``MOSAIC_SERVER_HOST``, ``MOSAIC_SERVER_PORT``, ``MOSAIC_LOG_LEVEL``).
    Defaults to ``0.0.0.0:3000``.

    This function is registered as the ``mosaic`` console script in
    ``pyproject.toml``.
    """
    import uvicorn

    uvicorn.run(
        "mosaic.api.main:app",
        host=config.server_host,
        port=config.server_port,
        log_level=config.log_level,
        reload=False,
    )


if __name__ == "__main__":
    main()

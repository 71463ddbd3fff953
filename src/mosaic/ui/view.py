"""Gallery view orchestration.

:class:`GalleryView` owns the state of one mounted gallery: it fetches the
descriptor list, substitutes the placeholder set when the fetch fails,
reacts to per-image load and error events, and keeps the grid row spans in
step with what the surface reports.

Lifecycle
---------
``mount()`` builds fresh state, subscribes to surface resizes and performs
the one descriptor fetch.  ``unmount()`` cancels that fetch's continuation,
unsubscribes and drops the state.  :meth:`GalleryView.session` wraps both in
an async context manager.

Everything runs on one event loop: the fetch is the only awaited operation,
and the event handlers are plain synchronous methods.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator, Iterable, Sequence
from contextlib import asynccontextmanager
from typing import Any

import httpx
from pydantic import ValidationError

from mosaic.api.image_lister import assign_ids
from mosaic.api.models import ImageDescriptor
from mosaic.core.config import config
from mosaic.core.masonry import compute_row_spans

from .models import (
    EMPTY_MESSAGE,
    FALLBACK_IMAGES,
    FETCH_ERROR_MESSAGE,
    GalleryRender,
    GalleryState,
    Phase,
    Tile,
)
from .surface import RenderSurface

logger = logging.getLogger(__name__)


class FetchError(Exception):
    """The descriptor list could not be fetched or understood.

    Covers transport failures, non-JSON bodies, ``{"error": ...}`` payloads
    and payloads of the wrong shape.  Always handled by fallback
    substitution; never retried.
    """

    pass


class CancellationToken:
    """One-way flag checked by continuations that outlive their view."""

    def __init__(self) -> None:
        self._cancelled = False

    def cancel(self) -> None:
        self._cancelled = True

    @property
    def cancelled(self) -> bool:
        return self._cancelled


def parse_listing(payload: Any) -> list[ImageDescriptor]:
    """Validate a decoded ``GET /api/images`` body.

    Args:
        payload: Decoded JSON body.

    Returns:
        Descriptors in listing order, each with a unique ``id``.

    Raises:
        FetchError: If the payload carries an ``error`` field, is not a
            list, or contains an item that is not a descriptor.
    """
    if isinstance(payload, dict) and payload.get("error"):
        raise FetchError(str(payload["error"]))
    if not isinstance(payload, list):
        raise FetchError(f"Expected a list of images, got {type(payload).__name__}")

    try:
        descriptors = [ImageDescriptor.model_validate(item) for item in payload]
    except ValidationError as e:
        raise FetchError(f"Invalid image descriptor: {e}") from e

    return assign_ids(descriptors)


class GalleryView:
    """Masonry gallery bound to one rendering surface.

    Args:
        surface: Supplies grid metrics and rendered heights, and emits
            resize notifications.
        client: HTTP client used for the descriptor fetch.  When omitted a
            short-lived client against ``base_url`` is created per mount.
        api_url: Path (or absolute URL) of the listing endpoint.
        base_url: Server origin used when no ``client`` is given.
        heading: Page heading placed in the render output.
        fallback_images: Descriptors shown when the fetch fails.
    """

    def __init__(
        self,
        surface: RenderSurface,
        *,
        client: httpx.AsyncClient | None = None,
        api_url: str | None = None,
        base_url: str | None = None,
        heading: str | None = None,
        fallback_images: Iterable[ImageDescriptor] = FALLBACK_IMAGES,
    ):
        self.surface = surface
        self.client = client
        self.api_url = api_url or config.api_url
        self.base_url = base_url or f"http://127.0.0.1:{config.server_port}"
        self.heading = heading if heading is not None else config.heading
        self.fallback_images: Sequence[ImageDescriptor] = assign_ids(fallback_images)

        self.state: GalleryState | None = None
        self._token: CancellationToken | None = None

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    @property
    def is_mounted(self) -> bool:
        return self.state is not None

    async def mount(self) -> None:
        """Create fresh state, subscribe to resizes and fetch the listing.

        Returns once the fetch has settled (or immediately after settling
        if the view was unmounted in the meantime).

        Raises:
            RuntimeError: If the view is already mounted.
        """
        if self.state is not None:
            raise RuntimeError("Gallery view is already mounted")

        token = CancellationToken()
        state = GalleryState()
        self._token = token
        self.state = state
        self.surface.add_resize_listener(self.handle_resize)
        logger.debug("Gallery view mounted")

        await self._load_images(state, token)

    def unmount(self) -> None:
        """Cancel pending continuations, unsubscribe and discard state."""
        if self._token is not None:
            self._token.cancel()
        if self.state is not None:
            self.surface.remove_resize_listener(self.handle_resize)
        self.state = None
        self._token = None
        logger.debug("Gallery view unmounted")

    @asynccontextmanager
    async def session(self) -> AsyncIterator[GalleryView]:
        """Mount for the duration of an ``async with`` block."""
        await self.mount()
        try:
            yield self
        finally:
            self.unmount()

    # ------------------------------------------------------------------
    # Descriptor fetch
    # ------------------------------------------------------------------

    async def fetch_images(self) -> list[ImageDescriptor]:
        """Fetch and validate the descriptor list.

        Raises:
            FetchError: On any transport, decoding or payload failure.
        """
        try:
            if self.client is not None:
                response = await self.client.get(self.api_url)
            else:
                async with httpx.AsyncClient(base_url=self.base_url) as client:
                    response = await client.get(self.api_url)
            payload = response.json()
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise FetchError(f"Request to {self.api_url} failed: {e}") from e
        except ValueError as e:
            raise FetchError(f"Response from {self.api_url} is not valid JSON") from e

        return parse_listing(payload)

    async def _load_images(self, state: GalleryState, token: CancellationToken) -> None:
        try:
            images = await self.fetch_images()
        except FetchError as e:
            if token.cancelled:
                logger.debug("Discarding fetch failure for unmounted gallery")
                return
            logger.error(f"Error fetching images: {e}")
            state.phase = Phase.ERROR_FALLBACK
            state.error = FETCH_ERROR_MESSAGE
            state.images = list(self.fallback_images)
        else:
            if token.cancelled:
                logger.debug("Discarding listing for unmounted gallery")
                return
            state.images = images
            logger.info(f"Fetched {len(images)} images")

        state.loading = False
        if state.phase is Phase.LOADING:
            state.phase = Phase.READY

    # ------------------------------------------------------------------
    # Surface events
    # ------------------------------------------------------------------

    def handle_image_load(self, image_id: str) -> None:
        """Record that ``image_id`` finished loading and recompute spans."""
        if self.state is None:
            logger.debug(f"Ignoring load event for {image_id}: gallery not mounted")
            return
        self.state.loaded_images.add(image_id)
        self._loaded_images_changed()

    def handle_image_error(self, image_id: str) -> None:
        """Drop ``image_id`` from the gallery and recompute spans.

        The id is still recorded as loaded so the recomputation is not held
        back by an image that will never arrive.  The page-level error
        message is left untouched.
        """
        state = self.state
        if state is None:
            logger.debug(f"Ignoring error event for {image_id}: gallery not mounted")
            return

        image = state.find(image_id)
        logger.warning(f"Failed to load image: {image.src if image else image_id}")

        state.images = [i for i in state.images if i.id != image_id]
        state.loaded_images.add(image_id)
        if state.preview_id == image_id:
            state.preview_id = None
        self._loaded_images_changed()

    def handle_resize(self) -> None:
        self.calculate_spans()

    def _loaded_images_changed(self) -> None:
        if self.state is not None and self.state.loaded_images:
            self.calculate_spans()

    def calculate_spans(self) -> None:
        """Recompute the row span of every loaded, displayed image.

        A no-op when the view is unmounted or the surface has no grid
        metrics yet.
        """
        state = self.state
        if state is None:
            return

        metrics = self.surface.grid_metrics()
        if metrics is None:
            logger.debug("Grid not laid out yet, skipping span calculation")
            return

        heights = self.surface.rendered_heights()
        measured = {
            image.id: heights[image.id]
            for image in state.images
            if image.id in state.loaded_images and image.id in heights
        }
        logger.debug(
            f"calculate_spans: row_height={metrics.row_height}, "
            f"row_gap={metrics.row_gap}, images={len(measured)}"
        )
        state.image_spans = compute_row_spans(measured, metrics)

    # ------------------------------------------------------------------
    # Preview dialog
    # ------------------------------------------------------------------

    def open_preview(self, image_id: str) -> None:
        """Open the full-size preview for a displayed image.

        Raises:
            RuntimeError: If the view is not mounted.
            KeyError: If no displayed image has ``image_id``.
        """
        state = self._require_state()
        if state.find(image_id) is None:
            raise KeyError(image_id)
        state.preview_id = image_id

    def close_preview(self) -> None:
        self._require_state().preview_id = None

    def _require_state(self) -> GalleryState:
        if self.state is None:
            raise RuntimeError("Gallery view is not mounted")
        return self.state

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------

    def render(self) -> GalleryRender:
        """Describe what the surface should currently draw."""
        state = self.state
        if state is None or state.loading:
            return GalleryRender(loading=True, heading=self.heading)

        tiles = tuple(
            Tile(
                id=image.id,
                src=image.src,
                alt=image.alt,
                title=image.title,
                span=state.image_spans.get(image.id),
            )
            for image in state.images
        )
        preview = next((tile for tile in tiles if tile.id == state.preview_id), None)

        return GalleryRender(
            loading=False,
            heading=self.heading,
            error=state.error,
            tiles=tiles,
            notice=EMPTY_MESSAGE if not tiles else None,
            preview=preview,
        )

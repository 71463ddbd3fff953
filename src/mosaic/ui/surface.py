"""Rendering surfaces the gallery view measures against.

The view never lays anything out itself.  It asks a surface for the grid's
row metrics and for the rendered height of each tile, and it subscribes to
the surface's resize notifications.  The browser page is one such surface
(see ``static/js/gallery.js``); :class:`MemorySurface` is a headless one.
"""

import logging
from collections.abc import Callable, Mapping
from typing import Protocol

from mosaic.core.masonry import GridMetrics

logger = logging.getLogger(__name__)

ResizeListener = Callable[[], None]


class RenderSurface(Protocol):
    """What the gallery view needs from whatever draws the grid."""

    def grid_metrics(self) -> GridMetrics | None:
        """Row height and gap of the grid, or None if it is not laid out."""
        ...

    def rendered_heights(self) -> Mapping[str, float]:
        """Current rendered height of each tile's image, keyed by image id."""
        ...

    def add_resize_listener(self, listener: ResizeListener) -> None: ...

    def remove_resize_listener(self, listener: ResizeListener) -> None: ...


class MemorySurface:
    """Headless surface with fixed grid styles and settable heights.

    Grid styles are given as computed CSS strings so they go through the
    same parsing as values read from a browser.

    Args:
        grid_auto_rows: Computed ``grid-auto-rows`` value, e.g. ``"10px"``.
            ``None`` models a grid that is not mounted yet.
        grid_row_gap: Computed ``row-gap`` value, e.g. ``"16px"``.
    """

    def __init__(self, grid_auto_rows: str | None = "10px", grid_row_gap: str | None = "16px"):
        self.grid_auto_rows = grid_auto_rows
        self.grid_row_gap = grid_row_gap
        self.heights: dict[str, float] = {}
        self._listeners: list[ResizeListener] = []

    def grid_metrics(self) -> GridMetrics | None:
        return GridMetrics.from_css(self.grid_auto_rows, self.grid_row_gap)

    def rendered_heights(self) -> Mapping[str, float]:
        return dict(self.heights)

    def set_height(self, image_id: str, height: float) -> None:
        """Record the rendered height of one tile's image."""
        self.heights[image_id] = height

    def add_resize_listener(self, listener: ResizeListener) -> None:
        self._listeners.append(listener)

    def remove_resize_listener(self, listener: ResizeListener) -> None:
        try:
            self._listeners.remove(listener)
        except ValueError:
            logger.debug("Resize listener was not registered")

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def resize(self, grid_auto_rows: str | None = None, grid_row_gap: str | None = None) -> None:
        """Simulate a viewport resize, optionally changing the grid styles.

        Every registered listener is called once, in registration order.
        """
        if grid_auto_rows is not None:
            self.grid_auto_rows = grid_auto_rows
        if grid_row_gap is not None:
            self.grid_row_gap = grid_row_gap
        for listener in list(self._listeners):
            listener()

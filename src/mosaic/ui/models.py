"""Data models for the gallery view state and its render output."""

import logging
from dataclasses import dataclass, field
from enum import Enum

from mosaic.api.models import ImageDescriptor

logger = logging.getLogger(__name__)

LOADING_LABEL = "Loading images..."
FETCH_ERROR_MESSAGE = "Failed to load images. Please try again later."
EMPTY_MESSAGE = "No images to display. Please check your connection and try again."

PLACEHOLDER_SRC = "/static/placeholder.svg"

# Shown in place of the listing when it cannot be fetched.
FALLBACK_IMAGES: tuple[ImageDescriptor, ...] = tuple(
    ImageDescriptor(
        id=f"fallback-{n}",
        src=PLACEHOLDER_SRC,
        alt=f"Fallback {n}",
        title=f"Fallback {n}",
    )
    for n in (1, 2, 3)
)


class Phase(str, Enum):
    """Lifecycle phase of one mounted gallery.

    ``LOADING`` until the fetch settles, then ``READY`` when the listing
    was used or ``ERROR_FALLBACK`` when the placeholder set replaced it.
    A settled gallery never goes back to ``LOADING``.
    """

    LOADING = "loading"
    ERROR_FALLBACK = "error_fallback"
    READY = "ready"


@dataclass
class GalleryState:
    """Mutable state of a mounted gallery view.

    Created on mount and discarded on unmount; nothing survives between
    mounts.

    Attributes:
        images: Descriptors in display order.
        image_spans: Grid row span per image id.  Replaced wholesale on
            every recomputation.
        loaded_images: Ids whose load or error event has fired.
        error: User-facing fetch failure message, set at most once.
        loading: True until the descriptor fetch settles.
        phase: Current lifecycle phase.
        preview_id: Id of the image open in the preview dialog.
    """

    images: list[ImageDescriptor] = field(default_factory=list)
    image_spans: dict[str, int] = field(default_factory=dict)
    loaded_images: set[str] = field(default_factory=set)
    error: str | None = None
    loading: bool = True
    phase: Phase = Phase.LOADING
    preview_id: str | None = None

    def find(self, image_id: str) -> ImageDescriptor | None:
        """Return the displayed descriptor with ``image_id``, if any."""
        return next((image for image in self.images if image.id == image_id), None)


@dataclass(frozen=True)
class Tile:
    """One grid cell as it should be drawn.

    ``span`` is ``None`` until the image has loaded and been measured; the
    surface then falls back to its minimum tile height.
    """

    id: str
    src: str
    alt: str
    title: str
    span: int | None = None


@dataclass(frozen=True)
class GalleryRender:
    """Everything a surface needs to draw the gallery once."""

    loading: bool
    heading: str
    loading_label: str = LOADING_LABEL
    error: str | None = None
    tiles: tuple[Tile, ...] = ()
    notice: str | None = None
    preview: Tile | None = None

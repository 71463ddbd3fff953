"""Gallery view: state, orchestration, rendering surfaces and page shell.

- view: :class:`GalleryView`, fetch/fallback/span orchestration
- models: gallery state, phases and render output
- surface: the rendering-surface protocol and a headless implementation
- page: font/viewport configuration and the index document
"""

from .models import FALLBACK_IMAGES, GalleryRender, GalleryState, Phase, Tile
from .surface import MemorySurface, RenderSurface
from .view import FetchError, GalleryView

__all__ = [
    "FALLBACK_IMAGES",
    "FetchError",
    "GalleryRender",
    "GalleryState",
    "GalleryView",
    "MemorySurface",
    "Phase",
    "RenderSurface",
    "Tile",
]

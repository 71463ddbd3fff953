"""Pydantic models for the Mosaic Gallery API.

These models define the JSON schema of every API response.  FastAPI uses
them for serialisation and OpenAPI documentation; the gallery view reuses
:class:`ImageDescriptor` to validate what it fetches.

Models
------
ImageDescriptor
    One listed image: stable ``id``, root-relative ``src``, display ``alt``
    and ``title``.
ErrorResponse
    Body of a failed listing (``{"error": "..."}``).
GalleryConfigResponse
    Layout and label settings consumed by the browser script.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class ImageDescriptor(BaseModel):
    """A single image shown in the gallery.

    Attributes:
        id: Identifier unique within one listing, derived from the full
            filename.  All span and load tracking is keyed by this value.
        src: Root-relative URL of the image (``/<filename>``).
        alt: Alternative text; the filename without its extension.
        title: Caption shown in the preview dialog.
    """

    id: str = Field(
        default="",
        description="Stable identifier unique within the listing (e.g. 'cat-png').",
    )
    src: str = Field(
        ...,
        description="Root-relative image URL (e.g. '/cat.png').",
    )
    alt: str = Field(
        ...,
        description="Alternative text (filename without extension).",
    )
    title: str = Field(
        default="",
        description="Caption shown in the preview dialog.",
    )


class ErrorResponse(BaseModel):
    """Body returned with a 500 status when the directory cannot be listed."""

    error: str = Field(
        ...,
        description="Human-readable failure message.",
    )


class GalleryConfigResponse(BaseModel):
    """Settings the browser script needs before it fetches the listing.

    Attributes:
        version: Application version string.
        api_url: Endpoint returning the image descriptors.
        row_height_px: Grid row height applied as ``grid-auto-rows``.
        min_tile_height_px: Minimum tile height before load.
        heading: Page heading.
        loading_label: Text shown next to the loading indicator.
        error_message: Message shown when the listing cannot be fetched.
        empty_message: Notice shown when no images remain.
        fallback_images: Placeholder descriptors used on fetch failure.
    """

    version: str
    api_url: str
    row_height_px: int
    min_tile_height_px: int
    heading: str
    loading_label: str
    error_message: str
    empty_message: str
    fallback_images: list[ImageDescriptor]

"""Directory listing for the gallery endpoint.

This module isolates file-system access from ``mosaic.api.main`` so the
route handler only deals with HTTP concerns while the listing logic stays
testable as a small unit.

The listing is intentionally simple:

- one flat directory, no recursion
- only files with an allow-listed extension (compared case-insensitively)
- entries sorted by filename so the display order is stable across reloads

Identifiers
-----------
Display text (``alt``) is the filename without extension, so ``cat.png`` and
``cat.jpg`` share it.  Each descriptor therefore also gets an ``id`` built
from the *whole* filename, and collisions after slugification are resolved
with a numeric suffix.  Clients key every per-image map by ``id``.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from pathlib import Path

from mosaic.api.models import ImageDescriptor

logger = logging.getLogger(__name__)

IMAGE_EXTENSIONS: frozenset[str] = frozenset({".jpg", ".jpeg", ".png", ".gif", ".svg"})

_NON_SLUG = re.compile(r"[^a-z0-9]+")


class ListingError(Exception):
    """The image directory could not be read."""

    pass


def slugify(text: str) -> str:
    """Lower-case ``text`` and collapse every non-alphanumeric run to ``-``.

    >>> slugify("Summer Trip.JPG")
    'summer-trip-jpg'
    """
    slug = _NON_SLUG.sub("-", text.lower()).strip("-")
    return slug or "image"


def unique_id(base: str, taken: set[str]) -> str:
    """Return ``slugify(base)`` or the first free ``-N`` variant of it.

    The chosen id is added to ``taken``.

    Args:
        base: Text to derive the id from (a filename or URL path).
        taken: Ids already handed out in the same listing.  Mutated.

    Returns:
        An id not previously present in ``taken``.
    """
    candidate = slugify(base)
    root = candidate
    suffix = 2
    while candidate in taken:
        candidate = f"{root}-{suffix}"
        suffix += 1
    taken.add(candidate)
    return candidate


def assign_ids(descriptors: Iterable[ImageDescriptor]) -> list[ImageDescriptor]:
    """Give every descriptor a unique ``id``.

    Ids already present are kept when they are unique; missing or
    duplicated ones are derived from ``src``.  Used by clients that receive
    descriptors from an older lister, and for hand-written fallback sets.

    Args:
        descriptors: Descriptors in display order.

    Returns:
        New descriptor objects, in the same order, each with a unique id.
    """
    taken: set[str] = set()
    result: list[ImageDescriptor] = []
    for descriptor in descriptors:
        if descriptor.id and descriptor.id not in taken:
            taken.add(descriptor.id)
            result.append(descriptor)
            continue
        base = descriptor.src.rsplit("/", 1)[-1] or descriptor.alt
        result.append(descriptor.model_copy(update={"id": unique_id(base, taken)}))
    return result


def is_image_file(path: Path, extensions: Iterable[str] = IMAGE_EXTENSIONS) -> bool:
    """Check whether ``path`` names a file with an allow-listed extension.

    Args:
        path: Candidate path.
        extensions: Allowed suffixes including the dot, lower-case.

    Returns:
        True for ``photo.JPG`` or ``logo.svg``, False for ``notes.txt``,
        extensionless files and directories.
    """
    return path.suffix.lower() in extensions and path.is_file()


def list_images(
    directory: Path,
    extensions: Iterable[str] = IMAGE_EXTENSIONS,
) -> list[ImageDescriptor]:
    """List the images in ``directory`` as gallery descriptors.

    Args:
        directory: Directory served at the site root.
        extensions: Allowed suffixes including the dot, lower-case.

    Returns:
        One descriptor per qualifying file, sorted by filename.  An empty
        list when nothing qualifies; that is a successful listing.

    Raises:
        ListingError: If the directory is missing or cannot be read.
    """
    allowed = frozenset(ext.lower() for ext in extensions)

    try:
        entries = sorted(directory.iterdir(), key=lambda p: p.name)
    except OSError as e:
        raise ListingError(f"Cannot read image directory {directory}: {e}") from e

    taken: set[str] = set()
    images: list[ImageDescriptor] = []

    for path in entries:
        if not is_image_file(path, allowed):
            continue
        images.append(
            ImageDescriptor(
                id=unique_id(path.name, taken),
                src=f"/{path.name}",
                alt=path.stem,
                title=path.stem,
            )
        )

    if not images:
        logger.warning(f"No images found in {directory}")
    else:
        logger.debug(f"Listed {len(images)} images from {directory}")

    return images

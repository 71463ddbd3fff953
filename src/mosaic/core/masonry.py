"""Masonry row-span arithmetic.

The gallery grid uses a small fixed row height ``R`` (``grid-auto-rows``)
and a row gap ``G``.  Each tile is told how many rows to span so that its
occupied height::

    rows * R + (rows - 1) * G

is the smallest value that still covers the image's rendered height ``H``.
Treating one row plus one gap as a unit gives::

    span = ceil((H + G) / (R + G))

The extra ``G`` in the numerator pays for the trailing gap that is never
drawn after the last row.  The ceiling means content is never clipped, at
the cost of at most one row unit of whitespace below the image.

Nothing here knows about browsers or DOM nodes; surfaces hand in the
measured heights and the grid metrics they read from the rendered layout.
"""

from __future__ import annotations

import logging
import math
import re
from collections.abc import Mapping
from dataclasses import dataclass

logger = logging.getLogger(__name__)

# ``parseInt`` semantics: optional sign, then leading digits.  Anything after
# the digits (``px``, fractional part, trailing junk) is ignored.
_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def parse_css_px(value: str | None) -> int | None:
    """Parse a computed CSS length the way ``parseInt`` does.

    Args:
        value: Computed style value such as ``"10px"`` or ``"16.5px"``.

    Returns:
        The leading integer (``10``, ``16``), or ``None`` when the value
        does not start with a number (``"normal"``, ``""``, ``None``).
    """
    if value is None:
        return None
    match = _LEADING_INT.match(value)
    if match is None:
        return None
    return int(match.group(1))


@dataclass(frozen=True)
class GridMetrics:
    """Row height and row gap of a rendered grid container, in pixels."""

    row_height: float
    row_gap: float

    def __post_init__(self) -> None:
        if self.row_height <= 0:
            raise ValueError(f"row_height must be > 0, got {self.row_height}")
        if self.row_gap < 0:
            raise ValueError(f"row_gap must be >= 0, got {self.row_gap}")

    @classmethod
    def from_css(cls, grid_auto_rows: str | None, grid_row_gap: str | None) -> GridMetrics | None:
        """Build metrics from computed ``grid-auto-rows`` / ``row-gap`` values.

        Returns ``None`` when either value cannot be read as a pixel length
        or the row height is not positive, which callers treat as "grid not
        laid out yet".
        """
        row_height = parse_css_px(grid_auto_rows)
        row_gap = parse_css_px(grid_row_gap)
        if row_height is None or row_gap is None:
            return None
        if row_height <= 0 or row_gap < 0:
            return None
        return cls(row_height=row_height, row_gap=row_gap)


def compute_row_span(height: float, row_height: float, row_gap: float) -> int:
    """Return the number of grid rows an item of ``height`` pixels must span.

    Args:
        height: Rendered item height ``H`` (``>= 0``).
        row_height: Grid row height ``R`` (``> 0``).
        row_gap: Grid row gap ``G`` (``>= 0``).

    Returns:
        The minimal ``span >= 1`` with ``span * R + (span - 1) * G >= H``.

    Raises:
        ValueError: If any argument is outside its domain.

    Example:
        >>> compute_row_span(430, 10, 16)
        18
    """
    if height < 0:
        raise ValueError(f"height must be >= 0, got {height}")
    if row_height <= 0:
        raise ValueError(f"row_height must be > 0, got {row_height}")
    if row_gap < 0:
        raise ValueError(f"row_gap must be >= 0, got {row_gap}")

    # With H == 0 and G == 0 the ceiling is 0; a tile always occupies a row.
    return max(1, math.ceil((height + row_gap) / (row_height + row_gap)))


def compute_row_spans(heights: Mapping[str, float], metrics: GridMetrics) -> dict[str, int]:
    """Compute spans for every measured item.

    This is a full pass over ``heights``; there is no per-item cache.  At
    gallery scale (tens of tiles) that is cheaper than tracking which
    measurement changed.

    Args:
        heights: Rendered heights keyed by image id.  Negative readings
            (detached nodes) are clamped to zero.
        metrics: Grid row height and gap.

    Returns:
        Mapping of image id to row span, in the iteration order of
        ``heights``.
    """
    spans: dict[str, int] = {}
    for image_id, height in heights.items():
        span = compute_row_span(max(0.0, height), metrics.row_height, metrics.row_gap)
        logger.debug(f"row span: id={image_id}, height={height}, span={span}")
        spans[image_id] = span
    return spans

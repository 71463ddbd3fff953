"""Core functionality for Mosaic Gallery.

- **MosaicConfig** / **config**: configuration loaded from ``MOSAIC_*``
  environment variables using Pydantic Settings.
- **masonry**: row-span arithmetic for the masonry grid, independent of any
  rendering surface.
"""

from mosaic.core.config import MosaicConfig, config
from mosaic.core.masonry import GridMetrics, compute_row_span, compute_row_spans

__all__ = [
    "MosaicConfig",
    "config",
    "GridMetrics",
    "compute_row_span",
    "compute_row_spans",
]

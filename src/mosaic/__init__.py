"""Mosaic Gallery - masonry image gallery over a static assets directory."""

__version__ = "0.1.0"

from mosaic.core.config import MosaicConfig, config
from mosaic.core.masonry import GridMetrics, compute_row_span

__all__ = [
    "GridMetrics",
    "MosaicConfig",
    "compute_row_span",
    "config",
]

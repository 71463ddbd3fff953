"""Configuration management for Mosaic Gallery.

This module provides centralized configuration management using Pydantic Settings.
All configuration is loaded from environment variables with the MOSAIC_ prefix,
allowing easy customization without code changes.

Environment Variable Loading
-----------------------------
Configuration values are loaded in the following priority order:
1. Environment variables (MOSAIC_* prefix)
2. .env file in the project root
3. Default values defined in MosaicConfig

Example .env file:
    MOSAIC_ASSETS_DIR=public
    MOSAIC_SERVER_PORT=3000
    MOSAIC_ROW_HEIGHT_PX=10

Global Configuration Instance
------------------------------
A global `config` instance is created automatically at module import time.
The page shell does not read it directly: the API turns it into frozen
:class:`~mosaic.ui.page.FontConfig` and :class:`~mosaic.ui.page.ViewportConfig`
objects once, at startup, and those are passed into the rendering entry
point.

Usage Example
-------------
    from mosaic.core.config import config

    print(config.assets_dir)
    print(config.row_height_px)
"""

from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

PACKAGE_DIR = Path(__file__).resolve().parent.parent


class MosaicConfig(BaseSettings):
    """Main configuration for Mosaic Gallery.

    Attributes
    ----------
    Listing:
        assets_dir : Path
            Directory whose image files are listed and served at ``/``.
        api_url : str
            Path the gallery view fetches descriptors from.

    Layout:
        row_height_px : int
            Height of one implicit grid row (``grid-auto-rows``).
        min_tile_height_px : int
            Minimum tile height before the image has loaded.

    Page shell:
        site_title, site_description, heading : str
            Document metadata and the page heading.
        font_family, font_weights, font_subsets
            Web font loaded by the page.
        viewport_width, viewport_initial_scale, viewport_maximum_scale,
        viewport_user_scalable
            Values for the viewport meta tag.

    Server:
        server_host : str
            Bind address.
        server_port : int
            Port (1024-65535).
        log_level : str
            Log level handed to uvicorn.

    Notes
    -----
    - ``assets_dir`` is not created automatically; a missing directory is
      reported by ``GET /api/images`` as a listing failure.
    - Configuration is immutable after initialization. To change values,
      set environment variables and restart.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="MOSAIC_",
        case_sensitive=False,
        frozen=True,
    )

    # Listing
    assets_dir: Path = Field(
        default=Path("public"),
        description="Directory of images served at the site root",
    )
    api_url: str = Field(
        default="/api/images",
        description="Endpoint the gallery view fetches image descriptors from",
    )

    # Layout
    row_height_px: int = Field(
        default=10,
        description="Grid row height in pixels (grid-auto-rows)",
        ge=1,
        le=200,
    )
    min_tile_height_px: int = Field(
        default=200,
        description="Minimum tile height before the image has loaded",
        ge=0,
    )

    # Page shell
    site_title: str = Field(default="Gallery - Portfolio")
    site_description: str = Field(default="A masonry photo gallery")
    heading: str = Field(default="My Gallery")
    font_family: str = Field(default="Merriweather")
    font_weights: tuple[str, ...] = Field(default=("400", "700"))
    font_subsets: tuple[str, ...] = Field(default=("latin",))
    viewport_width: str = Field(default="device-width")
    viewport_initial_scale: float = Field(default=1.0, gt=0)
    viewport_maximum_scale: float = Field(default=1.0, gt=0)
    viewport_user_scalable: bool = Field(default=False)

    # Server
    server_host: str = Field(
        default="0.0.0.0",
        description="Server bind address (0.0.0.0 for local network)",
    )
    server_port: int = Field(
        default=3000,
        description="Server port",
        ge=1024,
        le=65535,
    )
    log_level: Literal["critical", "error", "warning", "info", "debug"] = Field(
        default="info",
        description="Log level passed to uvicorn",
    )

    @property
    def static_dir(self) -> Path:
        """Packaged CSS, JavaScript and placeholder assets."""
        return PACKAGE_DIR / "static"

    @property
    def templates_dir(self) -> Path:
        """Packaged HTML templates."""
        return PACKAGE_DIR / "templates"


# Global configuration instance
config = MosaicConfig()

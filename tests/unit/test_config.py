"""Tests for mosaic.core.config — configuration management.

Tests cover:
- Default values for the configuration fields.
- Environment variable overrides via the MOSAIC_ prefix.
- Packaged static/template directory resolution.
- Pydantic validation constraints.
"""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from mosaic.core.config import MosaicConfig


class TestConfigDefaults:
    """Verify that MosaicConfig provides sensible defaults."""

    def test_default_assets_dir(self, monkeypatch):
        """Images are served from ./public by default."""
        monkeypatch.delenv("MOSAIC_ASSETS_DIR", raising=False)
        cfg = MosaicConfig(_env_file=None)
        assert cfg.assets_dir == Path("public")

    def test_default_api_url(self, test_config: MosaicConfig):
        assert test_config.api_url == "/api/images"

    def test_default_row_height(self, test_config: MosaicConfig):
        """Rows are 10px tall, matching the grid's grid-auto-rows."""
        assert test_config.row_height_px == 10

    def test_default_server(self, monkeypatch):
        monkeypatch.delenv("MOSAIC_SERVER_PORT", raising=False)
        cfg = MosaicConfig(_env_file=None)
        assert cfg.server_host == "0.0.0.0"
        assert cfg.server_port == 3000
        assert cfg.log_level == "info"

    def test_default_font_and_viewport(self, test_config: MosaicConfig):
        assert test_config.font_family == "Merriweather"
        assert test_config.font_weights == ("400", "700")
        assert test_config.viewport_user_scalable is False

    def test_assets_dir_not_created(self, test_config: MosaicConfig):
        """A missing assets directory is reported by the listing, not hidden."""
        assert not test_config.assets_dir.exists()


class TestConfigEnvironment:
    """Verify MOSAIC_* environment overrides."""

    def test_env_override_port(self, monkeypatch):
        monkeypatch.setenv("MOSAIC_SERVER_PORT", "8123")
        assert MosaicConfig(_env_file=None).server_port == 8123

    def test_env_override_assets_dir(self, monkeypatch, temp_dir):
        monkeypatch.setenv("MOSAIC_ASSETS_DIR", str(temp_dir))
        assert MosaicConfig(_env_file=None).assets_dir == temp_dir

    def test_env_override_is_case_insensitive(self, monkeypatch):
        monkeypatch.setenv("mosaic_heading", "Holiday")
        assert MosaicConfig(_env_file=None).heading == "Holiday"


class TestConfigPaths:
    """Verify packaged directory resolution."""

    def test_static_dir_contains_assets(self, test_config: MosaicConfig):
        assert (test_config.static_dir / "js" / "gallery.js").is_file()
        assert (test_config.static_dir / "placeholder.svg").is_file()

    def test_templates_dir_contains_index(self, test_config: MosaicConfig):
        assert (test_config.templates_dir / "index.html").is_file()


class TestConfigValidation:
    """Verify Pydantic constraints."""

    def test_port_below_range(self):
        with pytest.raises(ValidationError):
            MosaicConfig(_env_file=None, server_port=80)

    def test_row_height_must_be_positive(self):
        with pytest.raises(ValidationError):
            MosaicConfig(_env_file=None, row_height_px=0)

    def test_invalid_log_level(self):
        with pytest.raises(ValidationError):
            MosaicConfig(_env_file=None, log_level="verbose")

    def test_frozen(self, test_config: MosaicConfig):
        """Configuration is immutable after initialisation."""
        with pytest.raises(ValidationError):
            test_config.server_port = 9000

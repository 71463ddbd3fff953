"""Tests for mosaic.ui.page — font/viewport configuration and the index shell."""

from __future__ import annotations

import dataclasses

import pytest
from fastapi.templating import Jinja2Templates

from mosaic.ui.page import FontConfig, ViewportConfig, index_context


class TestFontConfig:
    """Test FontConfig."""

    def test_stylesheet_url(self):
        """Weights are joined in numeric order."""
        font = FontConfig(family="Merriweather", weights=("700", "400"))
        assert font.stylesheet_url() == (
            "https://fonts.googleapis.com/css2?family=Merriweather:wght@400;700&display=swap"
        )

    def test_family_with_spaces_is_encoded(self):
        """Spaces in the family name become '+'."""
        assert "family=Open+Sans:" in FontConfig(family="Open Sans").stylesheet_url()

    def test_from_settings(self, test_config):
        """Values come from the settings object."""
        assert FontConfig.from_settings(test_config) == FontConfig()

    def test_is_frozen(self):
        """Font configuration cannot be mutated after startup."""
        with pytest.raises(dataclasses.FrozenInstanceError):
            FontConfig().family = "Comic Sans"


class TestViewportConfig:
    """Test ViewportConfig."""

    def test_default_meta_content(self):
        assert ViewportConfig().meta_content() == (
            "width=device-width, initial-scale=1, maximum-scale=1, user-scalable=no"
        )

    def test_user_scalable(self):
        content = ViewportConfig(maximum_scale=5, user_scalable=True).meta_content()
        assert "maximum-scale=5" in content
        assert "user-scalable=yes" in content

    def test_is_frozen(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            ViewportConfig().user_scalable = True


class TestIndexContext:
    """Test index_context rendered through a Jinja2Templates environment."""

    TEMPLATE = (
        "<title>{{ title }}</title>"
        '<meta name="viewport" content="{{ viewport }}">'
        '<link href="{{ font_href }}">'
        "<h1>{{ heading }}</h1>"
    )

    def _render(self, **overrides) -> str:
        values = {
            "title": "Portfolio",
            "description": "d",
            "heading": "My Gallery",
            "font": FontConfig(),
            "viewport": ViewportConfig(),
        }
        values.update(overrides)
        templates = Jinja2Templates(directory="templates")
        return templates.env.from_string(self.TEMPLATE).render(**index_context(**values))

    def test_context_keys(self):
        context = index_context(
            title="t", description="d", heading="h", font=FontConfig(), viewport=ViewportConfig()
        )
        assert set(context) == {"title", "description", "heading", "viewport", "font_href", "font_family"}
        assert context["font_family"] == "'Merriweather', serif"

    def test_placeholders_filled(self):
        page = self._render()
        assert "<title>Portfolio</title>" in page
        assert "<h1>My Gallery</h1>" in page
        assert "user-scalable=no" in page

    def test_values_escaped(self):
        """Markup in configured text is escaped."""
        page = self._render(heading="<script>x</script>")
        assert "<script>x</script>" not in page
        assert "&lt;script&gt;" in page

    def test_ampersand_in_url_escaped(self):
        """The font URL's query separator is entity-encoded in the attribute."""
        assert "&amp;display=swap" in self._render()

    def test_configured_text_is_not_reinterpolated(self):
        """Template syntax inside a configured value is printed literally."""
        page = self._render(title="Photos of {{ heading }}", heading="X")
        assert "<title>Photos of {{ heading }}</title>" in page
        assert "<h1>X</h1>" in page

"""Page shell: font, viewport and the index document.

Font and viewport settings are frozen objects built once from
:class:`~mosaic.core.config.MosaicConfig` at startup and handed to
:func:`index_context`.  Nothing here keeps module-level mutable state.
"""

from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import quote_plus

from mosaic.core.config import MosaicConfig

GOOGLE_FONTS_CSS = "https://fonts.googleapis.com/css2"


@dataclass(frozen=True)
class FontConfig:
    """Web font loaded by the page."""

    family: str = "Merriweather"
    weights: tuple[str, ...] = ("400", "700")
    subsets: tuple[str, ...] = ("latin",)

    @classmethod
    def from_settings(cls, settings: MosaicConfig) -> FontConfig:
        return cls(
            family=settings.font_family,
            weights=tuple(settings.font_weights),
            subsets=tuple(settings.font_subsets),
        )

    def stylesheet_url(self) -> str:
        """Google Fonts CSS2 URL for this family and its weights.

        >>> FontConfig().stylesheet_url()
        'https://fonts.googleapis.com/css2?family=Merriweather:wght@400;700&display=swap'
        """
        weights = ";".join(sorted(self.weights, key=int))
        return f"{GOOGLE_FONTS_CSS}?family={quote_plus(self.family)}:wght@{weights}&display=swap"

    def css_family(self) -> str:
        return f"'{self.family}', serif"


@dataclass(frozen=True)
class ViewportConfig:
    """Values of the ``<meta name="viewport">`` tag."""

    width: str = "device-width"
    initial_scale: float = 1.0
    maximum_scale: float = 1.0
    user_scalable: bool = False

    @classmethod
    def from_settings(cls, settings: MosaicConfig) -> ViewportConfig:
        return cls(
            width=settings.viewport_width,
            initial_scale=settings.viewport_initial_scale,
            maximum_scale=settings.viewport_maximum_scale,
            user_scalable=settings.viewport_user_scalable,
        )

    def meta_content(self) -> str:
        """Serialise as the tag's ``content`` attribute.

        >>> ViewportConfig().meta_content()
        'width=device-width, initial-scale=1, maximum-scale=1, user-scalable=no'
        """
        return ", ".join(
            [
                f"width={self.width}",
                f"initial-scale={self.initial_scale:g}",
                f"maximum-scale={self.maximum_scale:g}",
                f"user-scalable={'yes' if self.user_scalable else 'no'}",
            ]
        )


def index_context(
    *,
    title: str,
    description: str,
    heading: str,
    font: FontConfig,
    viewport: ViewportConfig,
) -> dict[str, str]:
    """Build the Jinja2 context for ``templates/index.html``.

    Values are passed through as plain strings; the template environment
    escapes them when rendering.

    Args:
        title: Document title.
        description: Meta description.
        heading: Gallery heading.
        font: Web font configuration.
        viewport: Viewport meta configuration.

    Returns:
        Template variables keyed by placeholder name.
    """
    return {
        "title": title,
        "description": description,
        "heading": heading,
        "viewport": viewport.meta_content(),
        "font_href": font.stylesheet_url(),
        "font_family": font.css_family(),
    }

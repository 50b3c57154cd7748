"""Storefront theming.

Resolves a storefront's effective theme from its (optional) customization
and derives the CSS variables used by store pages and the preview.
"""

import re
import unicodedata

from ..models import Storefront, StorefrontAppearance

MIN_SLUG_LENGTH = 3
SLUG_FALLBACK = "store"

THEME_CSS_VARIABLES = {
    "--primary-color": "primary_color",
    "--secondary-color": "secondary_color",
    "--accent-color": "accent_color",
    "--font-family": "font_family",
}


def resolve_theme(customization: StorefrontAppearance | None) -> StorefrontAppearance:
    """Return the effective appearance, filling defaults for a missing customization."""
    if customization is None:
        return StorefrontAppearance()
    return customization


def theme_css_variables(theme: StorefrontAppearance) -> dict[str, str]:
    """Map a theme onto the CSS custom properties of the store layout."""
    return {name: getattr(theme, field) for name, field in THEME_CSS_VARIABLES.items()}


def render_theme_style(storefront: Storefront) -> str:
    """Render the inline style block of a storefront page.

    Custom CSS, when present, is appended after the variable declarations.
    """
    theme = resolve_theme(storefront.customization)
    declarations = "; ".join(
        f"{name}: {value}" for name, value in theme_css_variables(theme).items()
    )
    style = f":root {{ {declarations} }}"
    if theme.custom_css:
        style = f"{style}\n{theme.custom_css.strip()}"
    return style


def slugify(name: str) -> str:
    """Derive a storefront slug from its display name.

    Accents are stripped, anything outside [a-z0-9] becomes a hyphen and
    repeated hyphens collapse. Results shorter than the minimum slug length
    get a "store" suffix, so "AB" becomes "ab-store" and a name with no
    ASCII letters becomes "store".
    """
    normalized = unicodedata.normalize("NFKD", name).encode("ascii", "ignore").decode()
    slug = re.sub(r"[^a-z0-9]+", "-", normalized.lower()).strip("-")
    if len(slug) < MIN_SLUG_LENGTH:
        slug = f"{slug}-{SLUG_FALLBACK}" if slug else SLUG_FALLBACK
    return slug

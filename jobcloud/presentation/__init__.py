"""Display helpers: description rendering, view models and text templates."""

from .renderer import NO_DESCRIPTION, PlainTextRenderer, RichTextRenderer, render_description
from .templates import TemplateRenderError, TemplateRenderer
from .views import (
    DISCLAIMER,
    EMPTY_DETAIL_MESSAGE,
    EMPTY_STATE_MESSAGE,
    build_card,
    build_detail_view,
    build_listing_view,
)

__all__ = [
    "RichTextRenderer",
    "PlainTextRenderer",
    "render_description",
    "NO_DESCRIPTION",
    "TemplateRenderer",
    "TemplateRenderError",
    "build_card",
    "build_listing_view",
    "build_detail_view",
    "EMPTY_STATE_MESSAGE",
    "EMPTY_DETAIL_MESSAGE",
    "DISCLAIMER",
]

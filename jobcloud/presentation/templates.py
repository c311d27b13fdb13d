"""Text rendering of the catalog screen using Jinja2.

Wraps a Jinja2 environment loading templates from the
``jobcloud.presentation`` package, with strict undefined checking so that
a view/template mismatch fails loudly.
"""

import logging
from typing import Any, Dict

from jinja2 import Environment, PackageLoader, StrictUndefined, TemplateError

logger = logging.getLogger(__name__)


class TemplateRenderError(Exception):
    """Raised when a catalog template cannot be rendered."""

    pass


class TemplateRenderer:
    """Renders the listing and detail views to plain text."""

    def __init__(
        self,
        template_dir: str = "templates",
        listing_template: str = "listing.txt.j2",
        detail_template: str = "detail.txt.j2",
    ):
        """Initialize template renderer with a Jinja2 environment.

        Args:
            template_dir: Directory name within the jobcloud.presentation package
            listing_template: Filename of the posting list template
            detail_template: Filename of the detail pane template
        """
        self.listing_template_name = listing_template
        self.detail_template_name = detail_template

        # Plain-text output: descriptions are shown as the renderer produced them
        self.env = Environment(
            loader=PackageLoader("jobcloud.presentation", template_dir),
            autoescape=False,
            undefined=StrictUndefined,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )

    def render_listing(self, listing: Dict[str, Any]) -> str:
        return self._render(self.listing_template_name, {"listing": listing})

    def render_detail(self, detail: Dict[str, Any]) -> str:
        return self._render(self.detail_template_name, {"detail": detail})

    def _render(self, template_name: str, context: Dict[str, Any]) -> str:
        """
        Raises:
            TemplateRenderError: If the template is missing or fails to render
        """
        try:
            template = self.env.get_template(template_name)
            return template.render(context)
        except TemplateError as e:
            error_msg = f"Template rendering failed for {template_name}: {e}"
            logger.error(error_msg, exc_info=True)
            raise TemplateRenderError(error_msg) from e

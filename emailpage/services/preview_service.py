"""Open Graph preview images for created pages.

Preview images are decorative: nothing depends on them, so rendering is a
pluggable collaborator and every failure is logged and dropped.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from pathlib import Path

    from emailpage.filesystem.page_store import PageStore

logger = logging.getLogger(__name__)


class PreviewRenderer(Protocol):
    """Renders a page into an image file."""

    def render_preview_image(self, page_content: str, title: str) -> Path | None:
        """Return the path of a rendered PNG, or None if nothing was rendered."""
        ...


class NullPreviewRenderer:
    """Renderer used when no image backend is configured."""

    def render_preview_image(self, page_content: str, title: str) -> Path | None:
        return None


def generate_page_preview(
    renderer: PreviewRenderer,
    store: PageStore,
    page_id: str,
    page_content: str,
    title: str,
) -> Path | None:
    """Render a preview and copy it into the store's image slot."""
    try:
        rendered = renderer.render_preview_image(page_content, title)
        if rendered is None:
            logger.debug("No preview image rendered for page %s", page_id)
            return None
        dest = store.save_image(page_id, rendered)
    except Exception as exc:
        logger.error("Error generating preview image for page %s: %s", page_id, exc, exc_info=exc)
        return None
    logger.info("Preview image stored at %s", dest)
    return dest

"""Page service: turning a title and message into a stored HTML page."""

from __future__ import annotations

import html
import logging
import re
from dataclasses import dataclass
from typing import TYPE_CHECKING

from emailpage.services.datetime_service import format_display_date, now_utc
from emailpage.services.id_service import generate_page_id
from emailpage.services.template_service import apply_template

if TYPE_CHECKING:
    from datetime import datetime

    from emailpage.config import Settings
    from emailpage.filesystem.page_store import PageStore

logger = logging.getLogger(__name__)

LINE_BREAK = "<br/>"
MAX_DESCRIPTION_LENGTH = 160

_TAG_PATTERN = re.compile(r"<[^>]+>")
_WHITESPACE_PATTERN = re.compile(r"\s+")


@dataclass(frozen=True)
class CreatedPage:
    """A page that has been written to the store."""

    page_id: str
    url: str
    content: str


def is_html_document(message: str) -> bool:
    """A message containing ``<html`` (any case) is stored as-is."""
    return "<html" in message.lower()


def format_message(message: str) -> str:
    """Convert newlines to HTML line breaks."""
    return message.replace("\n", LINE_BREAK)


def make_description(message: str, max_length: int = MAX_DESCRIPTION_LENGTH) -> str:
    """Plain-text excerpt of a message, escaped for use in an HTML attribute."""
    text = _TAG_PATTERN.sub(" ", message)
    text = _WHITESPACE_PATTERN.sub(" ", text).strip()
    if len(text) > max_length:
        text = text[:max_length].rsplit(" ", maxsplit=1)[0] + "..."
    return html.escape(text, quote=True)


def render_page(
    template: str,
    settings: Settings,
    page_id: str,
    title: str,
    message: str,
    created_at: datetime,
) -> str:
    """Render the page body for a message.

    Full HTML documents are returned unchanged; anything else is wrapped in
    the page template.
    """
    if is_html_document(message):
        return message
    return apply_template(
        template,
        {
            "title": title,
            "message": format_message(message),
            "url": settings.page_url(page_id),
            "description": make_description(message),
            "date": format_display_date(created_at),
            "image": settings.image_url(page_id),
        },
    )


def create_page(
    store: PageStore,
    template: str,
    settings: Settings,
    title: str,
    message: str,
) -> CreatedPage:
    """Generate an id, render the page and persist it."""
    page_id = generate_page_id(settings.hash_length)
    content = render_page(template, settings, page_id, title, message, now_utc())
    store.save(page_id, content)
    return CreatedPage(page_id=page_id, url=settings.page_url(page_id), content=content)

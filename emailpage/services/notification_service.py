"""Best-effort email notification for newly created pages."""

from __future__ import annotations

import html
import logging
from email.message import EmailMessage
from email.utils import make_msgid
from typing import TYPE_CHECKING, Any

import aiosmtplib

if TYPE_CHECKING:
    from emailpage.config import Settings

logger = logging.getLogger(__name__)

DEFAULT_SMTP_PORT = 25
IMPLICIT_TLS_PORT = "465"


def build_transport_options(settings: Settings) -> dict[str, Any]:
    """Keyword arguments for the SMTP transport.

    Port 465 uses implicit TLS.  Credentials are attached only when both the
    user name and the password are set.
    """
    port = int(settings.smtp_port) if settings.smtp_port else DEFAULT_SMTP_PORT
    options: dict[str, Any] = {
        "hostname": settings.smtp_host,
        "port": port,
        "use_tls": settings.smtp_port == IMPLICIT_TLS_PORT,
    }
    if settings.smtp_user and settings.smtp_pass:
        options["username"] = settings.smtp_user
        options["password"] = settings.smtp_pass
    return options


def build_message(settings: Settings, page_url: str, title: str) -> EmailMessage:
    """Compose the notification with plain-text and HTML bodies."""
    message = EmailMessage()
    message["From"] = settings.email_from
    message["To"] = settings.email_to
    # Header values may not contain line breaks
    subject_title = " ".join(title.splitlines())
    message["Subject"] = f"New page created: {subject_title}"
    message["Message-ID"] = make_msgid(domain=settings.public_domain.split(":", 1)[0])
    message.set_content(f'A new page has been created titled "{title}". View it at: {page_url}')
    safe_title = html.escape(title)
    safe_url = html.escape(page_url, quote=True)
    message.add_alternative(
        f"<p>A new page has been created titled <strong>&quot;{safe_title}&quot;</strong>.</p>"
        f'<p>View it at: <a href="{safe_url}">{safe_url}</a></p>',
        subtype="html",
    )
    return message


async def send_page_notification(settings: Settings, page_url: str, title: str) -> None:
    """Email a link to a new page.

    Never raises: incomplete configuration skips sending, and delivery errors
    are logged.
    """
    if not settings.email_enabled:
        logger.info("SMTP configuration incomplete, skipping email send")
        return

    try:
        message = build_message(settings, page_url, title)
        smtp = aiosmtplib.SMTP(**build_transport_options(settings))
        async with smtp:
            await smtp.send_message(message)
    except Exception as exc:
        logger.error("Error sending email: %s", exc, exc_info=exc)
        return

    logger.info("Email sent: %s", message["Message-ID"])

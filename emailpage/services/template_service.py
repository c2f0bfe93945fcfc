"""Page template loading and ``{{placeholder}}`` substitution."""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING

from emailpage.exceptions import ConfigurationError

if TYPE_CHECKING:
    from collections.abc import Mapping
    from pathlib import Path

logger = logging.getLogger(__name__)

_PLACEHOLDER_PATTERN = re.compile(r"\{\{(\w+)\}\}")


def apply_template(template: str, values: Mapping[str, str]) -> str:
    """Replace ``{{key}}`` tokens with ``values[key]``.

    Values are inserted verbatim, without HTML escaping.  Tokens whose key is
    not in ``values`` are left as they are.
    """

    def _substitute(match: re.Match[str]) -> str:
        key = match.group(1)
        if key in values:
            return values[key]
        return match.group(0)

    return _PLACEHOLDER_PATTERN.sub(_substitute, template)


def load_template(template_path: Path) -> str:
    """Read the page template, raising ``ConfigurationError`` if it is unusable."""
    if not template_path.is_file():
        msg = (
            f"Template file not found at {template_path}. "
            "Please create the template file before running the application."
        )
        raise ConfigurationError(msg)
    try:
        template = template_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        msg = f"Failed to load HTML template {template_path}: {exc}"
        raise ConfigurationError(msg) from exc
    logger.info("HTML template loaded from %s", template_path)
    return template

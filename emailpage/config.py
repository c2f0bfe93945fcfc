"""Application configuration loaded from environment variables."""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

PACKAGE_DIR = Path(__file__).resolve().parent

DEFAULT_HASH_LENGTH = 32
MIN_HASH_LENGTH = 16
MAX_HASH_LENGTH = 256

_LEADING_INT_RE = re.compile(r"\s*([+-]?\d+)")

PRODUCTION_DATA_DIR = Path("/etc/email-page/data")
LOCAL_DATA_DIR = Path("./data")


class Settings(BaseSettings):
    """Email Page application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Core
    debug: bool = False
    app_env: str = "development"

    # Server
    host: str = "0.0.0.0"
    port: int = Field(default=3000, ge=1, le=65535)

    # SMTP; an empty host disables email
    smtp_host: str = ""
    smtp_port: str = ""
    smtp_user: str = ""
    smtp_pass: str = ""

    # Email
    email_from: str = ""
    email_to: str = ""

    # Public URLs
    domain_name: str = ""

    # Page identifiers
    hash_length: int = DEFAULT_HASH_LENGTH

    # Paths
    data_dir: Path | None = None
    template_dir: Path = PACKAGE_DIR / "templates"
    template_file: str = "default.html"
    static_dir: Path = PACKAGE_DIR / "static"

    # Response hardening
    security_headers_enabled: bool = True

    @field_validator("hash_length", mode="before")
    @classmethod
    def _clamp_hash_length(cls, value: Any) -> int:
        """Fall back to the default length for anything outside [16, 256].

        Strings are read up to the first non-digit, so ``"24px"`` means 24.
        An unset (empty) value quietly selects the default.
        """
        if value is None or value == "":
            return DEFAULT_HASH_LENGTH
        length: int | None = None
        if isinstance(value, int) and not isinstance(value, bool):
            length = value
        else:
            match = _LEADING_INT_RE.match(str(value))
            if match:
                length = int(match.group(1))
        if length is None or not MIN_HASH_LENGTH <= length <= MAX_HASH_LENGTH:
            logger.warning(
                "Invalid HASH_LENGTH value: %s. Must be a number between %d and %d. "
                "Using default value of %d.",
                value,
                MIN_HASH_LENGTH,
                MAX_HASH_LENGTH,
                DEFAULT_HASH_LENGTH,
            )
            return DEFAULT_HASH_LENGTH
        return length

    @property
    def is_production(self) -> bool:
        return self.app_env.lower() == "production"

    @property
    def is_test(self) -> bool:
        return self.app_env.lower() == "test"

    @property
    def resolved_data_dir(self) -> Path:
        """Data directory: explicit setting, else the production or local default."""
        if self.data_dir is not None:
            return self.data_dir
        return PRODUCTION_DATA_DIR if self.is_production else LOCAL_DATA_DIR

    @property
    def template_path(self) -> Path:
        return self.template_dir / self.template_file

    @property
    def public_domain(self) -> str:
        return self.domain_name or f"localhost:{self.port}"

    def page_url(self, page_id: str) -> str:
        """Public URL of a stored page."""
        return f"http://{self.public_domain}/{page_id}"

    def image_url(self, page_id: str) -> str:
        """Public URL of a page's preview image."""
        return f"http://{self.public_domain}/img/page-{page_id}.png"

    @property
    def email_enabled(self) -> bool:
        """True when host, sender and recipient are all configured."""
        return bool(self.smtp_host and self.email_from and self.email_to)

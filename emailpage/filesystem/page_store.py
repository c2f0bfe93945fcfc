"""Filesystem storage for generated pages."""

from __future__ import annotations

import logging
import os
import re
import shutil
from dataclasses import dataclass
from pathlib import Path

from emailpage.exceptions import PersistenceError

logger = logging.getLogger(__name__)

PAGE_ID_PATTERN = re.compile(r"^[a-zA-Z0-9_-]+$")
IMAGE_DIR_NAME = "img"


def is_valid_page_id(page_id: str) -> bool:
    """Check that a page id is safe to use as a filename component."""
    return bool(PAGE_ID_PATTERN.match(page_id))


def ensure_data_dir(data_dir: Path, *, strict: bool = False) -> bool:
    """Create the data directory if needed.

    Failure is logged and reported by returning False.  With ``strict`` the
    underlying error is re-raised instead.
    """
    try:
        if data_dir.exists() and not data_dir.is_dir():
            msg = f"Data path exists but is not a directory: {data_dir}"
            raise NotADirectoryError(msg)
        data_dir.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        logger.error("Failed to create data directory at %s: %s", data_dir, exc)
        if strict:
            raise
        return False
    logger.info("Data directory created/confirmed at: %s", data_dir)
    return True


@dataclass
class PageStore:
    """Reads and writes ``page-<id>.html`` files in the data directory."""

    data_dir: Path

    def page_path(self, page_id: str) -> Path:
        """Path of the HTML file for ``page_id``.

        Raises ValueError for ids that could escape the data directory.
        """
        if not is_valid_page_id(page_id):
            raise ValueError(f"Invalid page id: {page_id!r}")
        return self.data_dir / f"page-{page_id}.html"

    def image_path(self, page_id: str) -> Path:
        """Path of the preview image for ``page_id``."""
        if not is_valid_page_id(page_id):
            raise ValueError(f"Invalid page id: {page_id!r}")
        return self.data_dir / IMAGE_DIR_NAME / f"page-{page_id}.png"

    def save(self, page_id: str, content: str) -> Path:
        """Write a page to disk, overwriting any existing file with the same id."""
        path = self.page_path(page_id)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(content.encode("utf-8"))
        except OSError as exc:
            raise PersistenceError(f"Failed to write page {path}: {exc}") from exc
        logger.info("Page created: %s", path.name)
        return path

    def load(self, page_id: str) -> str | None:
        """Read a page by id. Returns None if it does not exist."""
        if not is_valid_page_id(page_id):
            return None
        path = self.page_path(page_id)
        if not path.is_file():
            return None
        try:
            return path.read_bytes().decode("utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise PersistenceError(f"Failed to read page {path}: {exc}") from exc

    def save_image(self, page_id: str, source: Path) -> Path:
        """Copy a rendered preview image into the page's image slot."""
        dest = self.image_path(page_id)
        try:
            dest.parent.mkdir(parents=True, exist_ok=True)
            shutil.copyfile(source, dest)
        except OSError as exc:
            raise PersistenceError(f"Failed to store preview image {dest}: {exc}") from exc
        return dest

    def load_image_path(self, page_id: str) -> Path | None:
        """Path of an existing preview image, or None."""
        if not is_valid_page_id(page_id):
            return None
        path = self.image_path(page_id)
        return path if path.is_file() else None

    def is_writable(self) -> bool:
        """Whether the data directory exists and accepts new files.

        Checked through permissions only; nothing is written to the directory.
        """
        return self.data_dir.is_dir() and os.access(self.data_dir, os.W_OK | os.X_OK)

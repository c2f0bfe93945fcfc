"""Shared API dependencies: settings, page store, template, preview renderer."""

from __future__ import annotations

from fastapi import Request

from emailpage.config import Settings
from emailpage.filesystem.page_store import PageStore
from emailpage.services.preview_service import PreviewRenderer


def get_settings(request: Request) -> Settings:
    """Get application settings from app state."""
    settings: Settings = request.app.state.settings
    return settings


def get_page_store(request: Request) -> PageStore:
    """Get the page store from app state."""
    store: PageStore = request.app.state.page_store
    return store


def get_page_template(request: Request) -> str:
    """Get the page template loaded at startup."""
    template: str = request.app.state.page_template
    return template


def get_preview_renderer(request: Request) -> PreviewRenderer:
    """Get the preview image renderer from app state."""
    renderer: PreviewRenderer = request.app.state.preview_renderer
    return renderer

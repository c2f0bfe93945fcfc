"""Shared test fixtures for Email Page."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from httpx import ASGITransport, AsyncClient

from emailpage.config import Settings
from emailpage.filesystem.page_store import PageStore
from emailpage.main import create_app

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator
    from pathlib import Path

    from fastapi import FastAPI


def make_settings(data_dir: Path, **overrides: object) -> Settings:
    """Settings isolated from the developer's environment and .env file."""
    values: dict[str, object] = {
        "app_env": "test",
        "debug": True,
        "data_dir": data_dir,
        "smtp_host": "",
        "smtp_port": "",
        "smtp_user": "",
        "smtp_pass": "",
        "email_from": "",
        "email_to": "",
        "domain_name": "test.example.com",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)  # type: ignore[arg-type]


@pytest.fixture
def tmp_data_dir(tmp_path: Path) -> Path:
    """Location for page files; not created up front so startup creates it."""
    return tmp_path / "data"


@pytest.fixture
def test_settings(tmp_data_dir: Path) -> Settings:
    """Create test settings with temporary paths."""
    return make_settings(tmp_data_dir)


@pytest.fixture
def page_store(tmp_data_dir: Path) -> PageStore:
    return PageStore(data_dir=tmp_data_dir)


@pytest.fixture
def app(test_settings: Settings) -> FastAPI:
    return create_app(test_settings)


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient]:
    """HTTP client against a fully started app.

    ASGITransport does not run the lifespan, so it is entered explicitly.
    """
    async with (
        app.router.lifespan_context(app),
        AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac,
    ):
        yield ac

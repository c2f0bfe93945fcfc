"""Tests for application configuration."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING
from unittest.mock import patch

import pytest

from emailpage.config import LOCAL_DATA_DIR, PRODUCTION_DATA_DIR, Settings

if TYPE_CHECKING:
    from collections.abc import Iterator


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[pytest.MonkeyPatch]:
    for name in (
        "PORT",
        "APP_ENV",
        "DATA_DIR",
        "HASH_LENGTH",
        "DOMAIN_NAME",
        "SMTP_HOST",
        "SMTP_PORT",
        "SMTP_USER",
        "SMTP_PASS",
        "EMAIL_FROM",
        "EMAIL_TO",
        "TEMPLATE_DIR",
        "TEMPLATE_FILE",
    ):
        monkeypatch.delenv(name, raising=False)
    yield monkeypatch


class TestSettings:
    def test_default_settings(self, clean_env: pytest.MonkeyPatch) -> None:
        s = Settings(_env_file=None)
        assert s.port == 3000
        assert s.hash_length == 32
        assert s.smtp_host == ""
        assert s.email_enabled is False
        assert s.public_domain == "localhost:3000"
        assert s.template_path.name == "default.html"
        assert s.template_path.is_file()

    def test_reads_environment(self, clean_env: pytest.MonkeyPatch, tmp_path: Path) -> None:
        clean_env.setenv("PORT", "8080")
        clean_env.setenv("SMTP_HOST", "smtp.example.com")
        clean_env.setenv("SMTP_PORT", "465")
        clean_env.setenv("EMAIL_FROM", "from@example.com")
        clean_env.setenv("EMAIL_TO", "to@example.com")
        clean_env.setenv("DATA_DIR", str(tmp_path))
        clean_env.setenv("HASH_LENGTH", "64")
        s = Settings(_env_file=None)
        assert s.port == 8080
        assert s.smtp_port == "465"
        assert s.email_enabled is True
        assert s.resolved_data_dir == tmp_path
        assert s.hash_length == 64
        assert s.public_domain == "localhost:8080"

    @pytest.mark.parametrize("value", ["abc", "15", "257", "0", "-32", "   ", "px24"])
    def test_invalid_hash_length_falls_back(
        self, clean_env: pytest.MonkeyPatch, value: str, caplog: pytest.LogCaptureFixture
    ) -> None:
        clean_env.setenv("HASH_LENGTH", value)
        assert Settings(_env_file=None).hash_length == 32
        assert "Invalid HASH_LENGTH value" in caplog.text

    def test_empty_hash_length_uses_default_quietly(
        self, clean_env: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
    ) -> None:
        clean_env.setenv("HASH_LENGTH", "")
        assert Settings(_env_file=None).hash_length == 32
        assert "Invalid HASH_LENGTH value" not in caplog.text

    @pytest.mark.parametrize(
        ("value", "expected"), [("24px", 24), (" 40", 40), ("48.9", 48), ("+20", 20)]
    )
    def test_hash_length_reads_leading_integer(
        self,
        clean_env: pytest.MonkeyPatch,
        caplog: pytest.LogCaptureFixture,
        value: str,
        expected: int,
    ) -> None:
        clean_env.setenv("HASH_LENGTH", value)
        assert Settings(_env_file=None).hash_length == expected
        assert "Invalid HASH_LENGTH value" not in caplog.text

    @pytest.mark.parametrize("value", [16, 100, 256])
    def test_hash_length_bounds_accepted(self, value: int) -> None:
        assert Settings(_env_file=None, hash_length=value).hash_length == value

    def test_data_dir_defaults_by_environment(self, clean_env: pytest.MonkeyPatch) -> None:
        assert Settings(_env_file=None, app_env="production").resolved_data_dir == (
            PRODUCTION_DATA_DIR
        )
        assert Settings(_env_file=None, app_env="test").resolved_data_dir == LOCAL_DATA_DIR
        assert Settings(_env_file=None, app_env="development").resolved_data_dir == LOCAL_DATA_DIR

    def test_explicit_data_dir_wins(self, tmp_path: Path) -> None:
        s = Settings(_env_file=None, app_env="production", data_dir=tmp_path)
        assert s.resolved_data_dir == tmp_path

    def test_page_urls_use_domain(self) -> None:
        s = Settings(_env_file=None, domain_name="pages.example.com")
        assert s.page_url("abc") == "http://pages.example.com/abc"
        assert s.image_url("abc") == "http://pages.example.com/img/page-abc.png"

    def test_template_path_from_dir_and_file(self, tmp_path: Path) -> None:
        s = Settings(_env_file=None, template_dir=tmp_path, template_file="custom.html")
        assert s.template_path == tmp_path / "custom.html"


class TestCliEntry:
    def test_cli_entry_uses_app_settings(self) -> None:
        """cli_entry() should use the global app's settings, not create a new Settings()."""
        from emailpage.main import app, cli_entry

        original_settings = getattr(app.state, "settings", None)
        app.state.settings = Settings(_env_file=None, host="127.0.0.1", port=9999, debug=True)

        try:
            with patch("uvicorn.run") as mock_run:
                cli_entry()

            mock_run.assert_called_once_with(
                "emailpage.main:app",
                host="127.0.0.1",
                port=9999,
                reload=True,
            )
        finally:
            if original_settings is None:
                del app.state.settings
            else:
                app.state.settings = original_settings

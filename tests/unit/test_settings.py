from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from dms_api.settings import Settings


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.chdir(tmp_path)
    for key in (
        "DMS_DATABASE_DSN",
        "DMS_DATA_DIR",
        "DMS_DOCUMENTS_DIR",
        "DMS_SERVER_CORS_ORIGINS",
        "DMS_STORAGE_ALLOWED_EXTENSIONS",
        "DMS_LOGGING_LEVEL",
    ):
        monkeypatch.delenv(key, raising=False)


def test_defaults_derive_paths_from_data_dir(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    monkeypatch.setenv("DMS_DATA_DIR", str(tmp_path / "var"))

    settings = Settings()

    assert settings.data_dir == (tmp_path / "var").resolve()
    assert settings.documents_dir == (tmp_path / "var" / "documents").resolve()
    expected_db = (tmp_path / "var" / "db" / "dms.sqlite").resolve()
    assert settings.database_dsn == f"sqlite+aiosqlite:///{expected_db.as_posix()}"
    assert settings.storage_upload_max_bytes == 10 * 1024 * 1024


def test_list_settings_accept_csv_and_json(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DMS_SERVER_CORS_ORIGINS", "http://a.test, http://b.test,http://a.test")
    monkeypatch.setenv("DMS_STORAGE_ALLOWED_EXTENSIONS", '[".PDF", "docx"]')

    settings = Settings()

    assert settings.server_cors_origins == ["http://a.test", "http://b.test"]
    assert settings.storage_allowed_extensions == ["pdf", "docx"]


def test_logging_level_is_normalised(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DMS_LOGGING_LEVEL", " debug ")
    assert Settings().logging_level == "DEBUG"


def test_explicit_dsn_is_kept(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DMS_DATABASE_DSN", "sqlite+aiosqlite:///:memory:")
    assert Settings().database_dsn == "sqlite+aiosqlite:///:memory:"


def test_non_sqlite_dsn_is_rejected(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DMS_DATABASE_DSN", "postgresql+psycopg://dms@localhost/dms")

    with pytest.raises(ValidationError, match="sqlite\\+aiosqlite"):
        Settings()

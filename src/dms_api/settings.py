"""DMS settings (Pydantic v2 + pydantic-settings)."""

from __future__ import annotations

import json
from functools import lru_cache
from pathlib import Path
from typing import Any, ClassVar

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic_settings.sources import DotEnvSettingsSource, EnvSettingsSource

# ---- Defaults ---------------------------------------------------------------

MODULE_DIR = Path(__file__).resolve().parent


def _candidate_project_roots() -> list[Path]:
    """Return candidate directories that may hold alembic.ini + migrations."""

    candidates = [
        MODULE_DIR.parent.parent,  # source layout: <root>/src/dms_api
        MODULE_DIR,  # packaged assets alongside the module (if bundled)
        Path.cwd(),
    ]

    seen: set[Path] = set()
    resolved: list[Path] = []
    for path in candidates:
        try:
            absolute = path.expanduser().resolve()
        except OSError:
            continue
        if absolute not in seen:
            seen.add(absolute)
            resolved.append(absolute)
    return resolved


def _detect_project_root() -> Path:
    default_root = MODULE_DIR.parent.parent
    for candidate in _candidate_project_roots():
        if (candidate / "alembic.ini").exists() and (candidate / "migrations").exists():
            return candidate
    return default_root


DEFAULT_PROJECT_ROOT = _detect_project_root()
DEFAULT_DATA_DIR = Path("./data")
DEFAULT_DB_FILENAME = "dms.sqlite"
DEFAULT_CORS_ORIGINS = ["http://localhost:5173"]
DEFAULT_ALLOWED_EXTENSIONS = ["pdf", "docx", "xlsx", "jpg", "jpeg", "png"]
DEFAULT_ALEMBIC_INI = DEFAULT_PROJECT_ROOT / "alembic.ini"
DEFAULT_ALEMBIC_MIGRATIONS = DEFAULT_PROJECT_ROOT / "migrations"

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100
MIN_PAGE_SIZE = 1
MAX_SEARCH_LEN = 255
RECENT_DOCUMENTS_LIMIT = 5

# SQLite INTEGER is a signed 64-bit value.
MAX_RECORD_ID = 2**63 - 1
MAX_PAGE = MAX_RECORD_ID // MAX_PAGE_SIZE

_LENIENT_LIST_FIELDS = {"server_cors_origins", "storage_allowed_extensions"}


# ---- Helpers ----------------------------------------------------------------

def _list_from_env(value: Any, *, default: list[str]) -> list[str]:
    """JSON array or comma string; strip empties; dedupe preserving order."""
    if value in (None, "", []):
        items = list(default)
    elif isinstance(value, str):
        s = value.strip()
        if not s:
            items = list(default)
        elif s.startswith("["):
            try:
                parsed = json.loads(s)
            except json.JSONDecodeError as exc:
                raise ValueError("Expected a JSON array") from exc
            if not isinstance(parsed, list):
                raise ValueError("Expected a JSON array")
            items = [str(x).strip() for x in parsed if str(x).strip()]
        else:
            items = [seg.strip() for seg in s.split(",") if seg.strip()]
    elif isinstance(value, (list, tuple, set)):
        items = [str(x).strip() for x in value if str(x).strip()]
    else:
        raise TypeError("Expected string or list")

    seen, out = set(), []
    for x in items:
        if x not in seen:
            seen.add(x)
            out.append(x)
    return out


def _resolve_path(value: Path | str | None, *, default: Path) -> Path:
    """Expand, absolutize, and resolve a configurable path."""

    if value in (None, ""):
        candidate = default
    elif isinstance(value, Path):
        candidate = value
    else:
        candidate = Path(str(value).strip())
    return candidate.expanduser().resolve()


# ---- Settings ---------------------------------------------------------------

class _LenientEnvSettingsSource(EnvSettingsSource):
    """Environment source that preserves raw strings for list-like fields."""

    lenient_fields: ClassVar[set[str]] = _LENIENT_LIST_FIELDS

    def prepare_field_value(
        self,
        field_name: str,
        field,
        value: Any,
        value_is_complex: bool,
    ) -> Any:
        if field_name in self.lenient_fields and isinstance(value, str):
            return value
        return super().prepare_field_value(field_name, field, value, value_is_complex)


class _LenientDotEnvSettingsSource(DotEnvSettingsSource):
    """Dotenv source that preserves raw strings for list-like fields."""

    lenient_fields: ClassVar[set[str]] = _LENIENT_LIST_FIELDS

    def prepare_field_value(
        self,
        field_name: str,
        field,
        value: Any,
        value_is_complex: bool,
    ) -> Any:
        if field_name in self.lenient_fields and isinstance(value, str):
            return value
        return super().prepare_field_value(field_name, field, value, value_is_complex)


class Settings(BaseSettings):
    """FastAPI settings loaded from DMS_* environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="DMS_",
        case_sensitive=False,
        extra="ignore",
        env_ignore_empty=True,
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls,
        init_settings,
        env_settings,
        dotenv_settings,
        file_secret_settings,
    ):
        env_source = _LenientEnvSettingsSource(
            settings_cls,
            case_sensitive=getattr(env_settings, "case_sensitive", None),
            env_prefix=getattr(env_settings, "env_prefix", None),
            env_ignore_empty=getattr(env_settings, "env_ignore_empty", None),
        )
        dotenv_source = _LenientDotEnvSettingsSource(
            settings_cls,
            env_file=getattr(dotenv_settings, "env_file", None),
            case_sensitive=getattr(dotenv_settings, "case_sensitive", None),
            env_prefix=getattr(dotenv_settings, "env_prefix", None),
            env_ignore_empty=getattr(dotenv_settings, "env_ignore_empty", None),
        )
        return (init_settings, env_source, dotenv_source, file_secret_settings)

    # Core
    app_name: str = "Document Management API"
    app_version: str = "1.0.0"
    api_docs_enabled: bool = True
    docs_url: str = "/docs"
    redoc_url: str = "/redoc"
    openapi_url: str = "/openapi.json"
    logging_level: str = "INFO"
    debug: bool = False

    # Server
    server_host: str = "127.0.0.1"
    server_port: int = Field(8000, ge=1, le=65535)
    server_cors_origins: list[str] = Field(default_factory=lambda: list(DEFAULT_CORS_ORIGINS))

    # Paths
    project_root: Path = Field(default=DEFAULT_PROJECT_ROOT)
    alembic_ini_path: Path = Field(default=DEFAULT_ALEMBIC_INI)
    alembic_migrations_dir: Path = Field(default=DEFAULT_ALEMBIC_MIGRATIONS)
    data_dir: Path = Field(default=DEFAULT_DATA_DIR)

    # Storage
    documents_dir: Path | None = None
    storage_upload_max_bytes: int = Field(10 * 1024 * 1024, gt=0)
    storage_allowed_extensions: list[str] = Field(
        default_factory=lambda: list(DEFAULT_ALLOWED_EXTENSIONS)
    )

    # Database
    database_dsn: str | None = None
    database_echo: bool = False
    database_pool_timeout: int = Field(30, gt=0)

    # Auth
    auth_token_bytes: int = Field(40, ge=16, le=128)

    # ---- Validators ----

    @field_validator("logging_level", mode="before")
    @classmethod
    def _v_log_level(cls, v: Any) -> str:
        s = ("" if v is None else str(v).strip()).upper()
        return s or "INFO"

    @field_validator("server_cors_origins", mode="before")
    @classmethod
    def _v_cors(cls, v: Any) -> list[str]:
        return _list_from_env(v, default=DEFAULT_CORS_ORIGINS)

    @field_validator("storage_allowed_extensions", mode="before")
    @classmethod
    def _v_extensions(cls, v: Any) -> list[str]:
        items = _list_from_env(v, default=DEFAULT_ALLOWED_EXTENSIONS)
        return [item.lower().lstrip(".") for item in items]

    # ---- Finalize: resolve paths ----

    @model_validator(mode="after")
    def _finalize(self) -> Settings:
        self.project_root = _resolve_path(self.project_root, default=DEFAULT_PROJECT_ROOT)
        self.alembic_ini_path = _resolve_path(
            self.alembic_ini_path, default=DEFAULT_ALEMBIC_INI
        )
        self.alembic_migrations_dir = _resolve_path(
            self.alembic_migrations_dir, default=DEFAULT_ALEMBIC_MIGRATIONS
        )
        self.data_dir = _resolve_path(self.data_dir, default=DEFAULT_DATA_DIR)
        self.documents_dir = _resolve_path(
            self.documents_dir, default=self.data_dir / "documents"
        )

        if not self.database_dsn:
            sqlite = self.data_dir / "db" / DEFAULT_DB_FILENAME
            self.database_dsn = f"sqlite+aiosqlite:///{sqlite.as_posix()}"
        elif not self.database_dsn.startswith("sqlite+aiosqlite:"):
            raise ValueError("database_dsn must use the sqlite+aiosqlite driver")

        return self


@lru_cache(maxsize=1)
def _build_settings() -> Settings:
    return Settings()


def get_settings() -> Settings:
    return _build_settings()


def reload_settings() -> Settings:
    _build_settings.cache_clear()
    return _build_settings()


__all__ = [
    "DEFAULT_PAGE_SIZE",
    "MAX_PAGE",
    "MAX_PAGE_SIZE",
    "MAX_RECORD_ID",
    "MAX_SEARCH_LEN",
    "MIN_PAGE_SIZE",
    "RECENT_DOCUMENTS_LIMIT",
    "Settings",
    "get_settings",
    "reload_settings",
]

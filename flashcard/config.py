"""Configuration utilities for the Flashcard Questionnaire Service.

This module loads application configuration with the following precedence,
highest first:
- environment variables (`FLASHCARD_*`, plus `DATABASE_URL`);
- optional text files under `config/` (e.g. `config/database.url`);
- `flashcard_config.json` at the project root;
- built-in defaults.
Host, port and log level have no `config/` file and skip that step.

Pydantic models enforce required fields and value constraints.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, ValidationError as PydanticValidationError, field_validator


CONFIG_DIR = Path("config")
ROOT_CONFIG = Path("flashcard_config.json")
DEFAULT_DATABASE_URL = "sqlite+pysqlite:///:memory:"
# Selects the process-local in-memory repository instead of SQL
MEMORY_URL = "memory://"
logger = logging.getLogger(__name__)

_TRUE = {"1", "true", "yes", "on"}


def _read_config_file(rel_path: str) -> Optional[str]:
    path = CONFIG_DIR / rel_path
    try:
        if path.exists():
            return path.read_text(encoding="utf-8").strip()
    except (OSError, UnicodeDecodeError) as e:
        # Recoverable: an unreadable override falls through to the next source
        logger.warning("Failed to read override %s: %s", path, e)
        return None
    return None


def _env(key: str, default: Optional[str] = None) -> Optional[str]:
    return os.environ.get(key, default)


def _flag(text: Optional[str]) -> bool:
    return str(text or "").strip().lower() in _TRUE


class DatabaseConfig(BaseModel):
    url: str = Field(default=DEFAULT_DATABASE_URL)
    auto_migrate: bool = Field(default=True)

    @field_validator("url")
    @classmethod
    def url_must_be_non_empty(cls, v: str) -> str:
        if not isinstance(v, str) or not v.strip():
            raise ValueError("database.url must be a non-empty string")
        return v.strip()


class ValidationConfig(BaseModel):
    # False: only the exact empty string is an invalid title
    reject_blank_titles: bool = Field(default=False)


class WebConfig(BaseModel):
    pages_prefix: str = Field(default="/pages")
    cors_origins: list[str] = Field(default_factory=lambda: ["*"])
    host: str = Field(default="127.0.0.1")
    port: int = Field(default=8000, gt=0, lt=65536)
    log_level: str = Field(default="INFO")

    @field_validator("pages_prefix")
    @classmethod
    def prefix_must_be_rooted(cls, v: str) -> str:
        v = (v or "").strip().rstrip("/")
        if not v.startswith("/"):
            raise ValueError("web.pages_prefix must start with '/' and must not be the root")
        return v

    @field_validator("log_level")
    @classmethod
    def level_must_be_known(cls, v: str) -> str:
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        v = (v or "").strip().upper()
        if v not in allowed:
            raise ValueError(f"web.log_level must be one of {sorted(allowed)}")
        return v


class AppConfig(BaseModel):
    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    validation: ValidationConfig = Field(default_factory=ValidationConfig)
    web: WebConfig = Field(default_factory=WebConfig)


def _read_json_file(path: Path) -> dict:
    try:
        if path.exists():
            data = json.loads(path.read_text(encoding="utf-8"))
            return data if isinstance(data, dict) else {}
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        logger.error("Failed to read JSON config %s: %s", path, e)
    return {}


def load_config() -> AppConfig:
    """Load configuration with validation.

    Precedence (highest first):
    1) Environment variables
    2) Text files in `config/` (optional)
    3) flashcard_config.json at project root (primary base)
    4) Safe defaults for development
    """

    base = _read_json_file(ROOT_CONFIG)

    def _base(path: str, default: Optional[str] = None) -> Optional[str]:
        cur: object = base
        for key in path.split("."):
            if not isinstance(cur, dict) or key not in cur:
                return default
            cur = cur[key]
        if isinstance(cur, list):
            return ",".join(str(item) for item in cur)
        return str(cur) if cur is not None else default

    # Database
    db_url = (
        _env("FLASHCARD_DATABASE_URL")
        or _env("DATABASE_URL")
        or _read_config_file("database.url")
        or _base("database.url")
        or DEFAULT_DATABASE_URL
    )
    auto_migrate_text = _env("FLASHCARD_AUTO_MIGRATE") or _read_config_file("database.auto_migrate") or _base("database.auto_migrate", "true")

    # Validation policy
    blank_text = (
        _env("FLASHCARD_REJECT_BLANK_TITLES")
        or _read_config_file("validation.reject_blank_titles")
        or _base("validation.reject_blank_titles", "false")
    )

    # Web surface
    prefix = _env("FLASHCARD_PAGES_PREFIX") or _read_config_file("web.pages_prefix") or _base("web.pages_prefix", "/pages")
    origins_text = _env("FLASHCARD_CORS_ORIGINS") or _read_config_file("web.cors_origins") or _base("web.cors_origins", "*")
    host = _env("FLASHCARD_HOST") or _base("web.host", "127.0.0.1")
    port_text = _env("FLASHCARD_PORT") or _base("web.port", "8000")
    log_level = _env("FLASHCARD_LOG_LEVEL") or _base("web.log_level", "INFO")

    try:
        cfg = AppConfig(
            database=DatabaseConfig(url=db_url, auto_migrate=_flag(auto_migrate_text)),
            validation=ValidationConfig(reject_blank_titles=_flag(blank_text)),
            web=WebConfig(
                pages_prefix=prefix,
                cors_origins=[o.strip() for o in str(origins_text).split(",") if o.strip()],
                host=host,
                port=int(str(port_text).strip()),
                log_level=log_level,
            ),
        )
        return cfg
    except (PydanticValidationError, ValueError) as e:
        logger.error("Invalid application configuration: %s", e)
        raise


__all__ = [
    "AppConfig",
    "DatabaseConfig",
    "MEMORY_URL",
    "ValidationConfig",
    "WebConfig",
    "load_config",
]

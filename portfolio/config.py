"""Configuration settings."""
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Final, Optional

from dotenv import load_dotenv

# Load environment variables from .env file if it exists
load_dotenv()

PACKAGE_ROOT: Final[Path] = Path(__file__).resolve().parent
PROJECT_ROOT: Final[Path] = PACKAGE_ROOT.parent


def _env_flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def _env_float(name: str) -> Optional[float]:
    value = os.getenv(name, "").strip()
    return float(value) if value else None


@dataclass
class Config:
    """Configuration settings for the portfolio site."""

    # Flask
    SECRET_KEY: Final[str] = os.getenv("FLASK_SECRET", "dev-secret-change-me")
    APP_ENV: Final[str] = os.getenv("APP_ENV", "production")

    # Catalog resource: a path or an http(s) URL
    CATALOG_SOURCE: Final[str] = os.getenv(
        "CATALOG_SOURCE",
        str(PROJECT_ROOT / "ui" / "static" / "data" / "publications.json"),
    )
    # No timeout unless one is configured
    CATALOG_TIMEOUT: Final[Optional[float]] = _env_float("CATALOG_TIMEOUT")

    # Preview
    PREVIEW_PAGE_LIMIT: Final[int] = 10
    PREVIEW_BASE_URL: Final[str] = os.getenv("PREVIEW_BASE_URL", "/static/docs/previews")
    HANDOFF_MAX_AGE: Final[int] = int(os.getenv("HANDOFF_MAX_AGE", "1800"))

    # Download requests
    ADMIN_EMAIL: Final[str] = os.getenv("ADMIN_EMAIL", "")
    ADMIN_DASHBOARD_URL: Final[str] = os.getenv("ADMIN_DASHBOARD_URL", "")
    REQUEST_RATE_LIMIT: Final[str] = os.getenv("REQUEST_RATE_LIMIT", "10 per minute")
    AUDIT_FILE: Final[str] = os.getenv(
        "AUDIT_FILE",
        str(Path.home() / ".cache" / "portfolio" / "download_requests.jsonl"),
    )

    # Deterrents
    DETERRENTS_ENABLED: Final[bool] = _env_flag("DETERRENTS_ENABLED", True)

    # Logging
    LOG_LEVEL: Final[str] = os.getenv("LOG_LEVEL", "INFO")
    LOG_DIR: Final[str] = os.getenv("LOG_DIR", "logs")

    @classmethod
    def is_development(cls, app_env: Optional[str] = None) -> bool:
        """Whether fault details may be exposed to clients."""
        return (app_env if app_env is not None else cls.APP_ENV).lower() == "development"

    @classmethod
    def flask_settings(cls) -> dict:
        """Settings copied into ``app.config`` at startup."""
        return {
            "SECRET_KEY": cls.SECRET_KEY,
            "APP_ENV": cls.APP_ENV,
            "CATALOG_SOURCE": cls.CATALOG_SOURCE,
            "CATALOG_TIMEOUT": cls.CATALOG_TIMEOUT,
            "PREVIEW_PAGE_LIMIT": cls.PREVIEW_PAGE_LIMIT,
            "PREVIEW_BASE_URL": cls.PREVIEW_BASE_URL,
            "HANDOFF_MAX_AGE": cls.HANDOFF_MAX_AGE,
            "ADMIN_EMAIL": cls.ADMIN_EMAIL,
            "ADMIN_DASHBOARD_URL": cls.ADMIN_DASHBOARD_URL,
            "REQUEST_RATE_LIMIT": cls.REQUEST_RATE_LIMIT,
            "AUDIT_FILE": cls.AUDIT_FILE,
            "DETERRENTS_ENABLED": cls.DETERRENTS_ENABLED,
        }

# app/core/config.py
import os
from pathlib import Path
from pydantic_settings import BaseSettings, SettingsConfigDict

PROJECT_ROOT = Path(__file__).parent.parent.parent

class Settings(BaseSettings):
    app_name: str = "CompetencySync"
    env: str = "local"
    DATABASE_URL: str = "sqlite:///./competency_sync.db"

    # =========================
    # Google Sheets (fetch layer)
    # =========================
    SHEETS_PUBLIC_BASE_URL: str = "https://docs.google.com/spreadsheets/d"
    SHEETS_TIMEOUT_SECONDS: int = 30
    SHEETS_DEFAULT_RANGE: str = "A:Z"

    # Service account JSON (string). When unset only the public export is tried.
    GOOGLE_SERVICE_ACCOUNT_KEY: str | None = None
    GOOGLE_WORKSPACE_ADMIN_EMAIL: str | None = None

    # =========================
    # Sync
    # =========================
    SYNC_CACHE_TTL_DAYS: int = 30
    SYNC_MAX_WORKERS: int = 4

    # Admin auth
    ADMIN_USERNAME: str = "admin"
    ADMIN_PASSWORD: str = "change-me"
    JWT_SECRET_KEY: str = "dev-secret-change-me"
    JWT_ALGORITHM: str = "HS256"
    JWT_ACCESS_TOKEN_EXPIRES_MINUTES: int = 60

    # CORS
    CORS_ALLOW_ORIGINS: str | None = None
    CORS_ALLOW_VERCEL_PREVIEWS: bool = False

    model_config = SettingsConfigDict(
        env_file=os.path.join(PROJECT_ROOT, ".env"),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

settings = Settings()

"""
Configuration management using Pydantic settings.
Handles storage backend selection, session secrets, admin bootstrap and upload options.
"""

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings
from typing import Optional, List
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings built once at startup and injected into the app."""

    # Application configuration
    app_name: str = "Realty Site API"
    app_version: str = "1.0.0"
    environment: str = "development"
    debug: bool = False

    # Storage backend: memory, sqlite or remote (auto-detected when unset)
    storage_backend: Optional[str] = None
    sqlite_file: str = "./database.db"
    remote_database_url: Optional[str] = None
    remote_database_token: Optional[str] = None

    # Session store: memory or database
    session_store: str = "database"
    session_database_url: Optional[str] = None
    session_secret: str = "dev-session-secret-change-in-production"
    session_cookie_name: str = "realty.sid"
    session_ttl_seconds: int = 60 * 60 * 24 * 7  # 7 days
    session_rolling: bool = False

    # Admin bootstrap credentials
    admin_email: Optional[str] = None
    admin_password: Optional[str] = None
    admin_name: str = "Administrador"

    # Public site
    base_url: str = "http://localhost:5000"
    cors_origins: List[str] = ["http://localhost:5000", "http://127.0.0.1:5000"]

    # File upload configuration
    upload_dir: str = "./uploads"
    upload_mode: Optional[str] = None
    max_file_size: int = 5 * 1024 * 1024  # 5MB
    max_upload_files: int = 10

    # Request logging
    log_buffer_size: int = 1000
    slow_request_threshold: float = 2.0

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v):
        """Validate environment setting."""
        allowed_envs = ["development", "testing", "staging", "production"]
        if v not in allowed_envs:
            raise ValueError(f"Environment must be one of: {allowed_envs}")
        return v

    @field_validator("storage_backend")
    @classmethod
    def validate_storage_backend(cls, v):
        if v is not None and v not in ("memory", "sqlite", "remote"):
            raise ValueError("storage_backend must be one of: memory, sqlite, remote")
        return v

    @field_validator("session_store")
    @classmethod
    def validate_session_store(cls, v):
        if v not in ("memory", "database"):
            raise ValueError("session_store must be one of: memory, database")
        return v

    @field_validator("upload_mode")
    @classmethod
    def validate_upload_mode(cls, v):
        if v is not None and v not in ("disk", "inline"):
            raise ValueError("upload_mode must be one of: disk, inline")
        return v

    @field_validator("remote_database_url", "session_database_url")
    @classmethod
    def normalize_database_url(cls, v):
        """Ensure async drivers are used for SQL URLs."""
        return normalize_async_url(v) if v else v

    @model_validator(mode="after")
    def validate_session_secret(self):
        """Validate session secret strength outside local environments."""
        if not self.session_secret:
            raise ValueError("SESSION_SECRET is required")
        if self.environment in ("staging", "production") and len(self.session_secret) < 32:
            raise ValueError("SESSION_SECRET must be at least 32 characters long")
        return self

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.environment == "development"

    @property
    def is_testing(self) -> bool:
        """Check if running in testing mode."""
        return self.environment == "testing"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.environment == "production"

    @property
    def resolved_storage_backend(self) -> str:
        """Storage backend, falling back to environment-based detection."""
        if self.storage_backend:
            return self.storage_backend
        if self.remote_database_url:
            return "remote"
        if self.is_testing:
            return "memory"
        return "sqlite"

    @property
    def storage_database_url(self) -> Optional[str]:
        """SQL URL of the entity storage, None for the memory backend."""
        backend = self.resolved_storage_backend
        if backend == "remote":
            return self.remote_database_url
        if backend == "sqlite":
            return f"sqlite+aiosqlite:///{self.sqlite_file}"
        return None

    @property
    def resolved_session_database_url(self) -> Optional[str]:
        """SQL URL of the session table, defaulting to the storage database."""
        return self.session_database_url or self.storage_database_url

    @property
    def resolved_upload_mode(self) -> str:
        """Uploads go inline on read-only production hosts unless configured."""
        if self.upload_mode:
            return self.upload_mode
        return "inline" if self.is_production else "disk"

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
    }


def normalize_async_url(url: str) -> str:
    """Rewrite sync driver URLs to their async equivalents."""
    if url.startswith(("postgresql+asyncpg://", "sqlite+aiosqlite://")):
        return url
    if url.startswith("postgresql://"):
        return url.replace("postgresql://", "postgresql+asyncpg://", 1)
    if url.startswith("postgres://"):
        return url.replace("postgres://", "postgresql+asyncpg://", 1)
    if url.startswith("sqlite://"):
        return url.replace("sqlite://", "sqlite+aiosqlite://", 1)
    return url


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.
    This ensures we only create one instance of settings throughout the app lifecycle.
    """
    return Settings()

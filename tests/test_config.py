"""
Settings tests: backend auto-detection, URL normalisation and validation.
"""

import pytest
from pydantic import ValidationError

from realty.config import Settings, normalize_async_url
from realty.storage import MemoryStorage, SQLStorage, create_storage


class TestStorageSelection:
    """Test which storage backend the settings resolve to."""

    def test_memory_when_testing(self):
        settings = Settings(environment="testing")

        assert settings.resolved_storage_backend == "memory"
        assert settings.storage_database_url is None
        assert isinstance(create_storage(settings), MemoryStorage)

    def test_sqlite_by_default(self, tmp_path):
        settings = Settings(environment="development", sqlite_file=str(tmp_path / "site.db"))

        assert settings.resolved_storage_backend == "sqlite"
        assert settings.storage_database_url == f"sqlite+aiosqlite:///{tmp_path / 'site.db'}"
        storage = create_storage(settings)
        assert isinstance(storage, SQLStorage)
        assert storage.backend == "sqlite"

    def test_remote_when_url_set(self):
        settings = Settings(environment="development", remote_database_url="postgres://u@db.example.com/realty")

        assert settings.resolved_storage_backend == "remote"
        assert settings.storage_database_url == "postgresql+asyncpg://u@db.example.com/realty"
        assert settings.resolved_session_database_url == settings.storage_database_url

    def test_remote_requires_url(self):
        settings = Settings(environment="testing", storage_backend="remote")

        with pytest.raises(ValueError):
            create_storage(settings)

    def test_explicit_backend_wins(self):
        settings = Settings(environment="testing", storage_backend="sqlite")

        assert settings.resolved_storage_backend == "sqlite"


class TestSettingsValidation:
    """Test rejected configurations."""

    def test_unknown_environment(self):
        with pytest.raises(ValidationError):
            Settings(environment="qa")

    def test_unknown_backend(self):
        with pytest.raises(ValidationError):
            Settings(storage_backend="redis")

    def test_short_secret_rejected_in_production(self):
        with pytest.raises(ValidationError):
            Settings(environment="production", session_secret="too-short")

    def test_long_secret_accepted_in_production(self):
        settings = Settings(environment="production", session_secret="x" * 32)

        assert settings.is_production
        assert settings.resolved_upload_mode == "inline"

    def test_upload_mode_defaults_to_disk(self):
        assert Settings(environment="development").resolved_upload_mode == "disk"


class TestUrlNormalisation:
    """Test rewriting of sync driver URLs."""

    @pytest.mark.parametrize("url,expected", [
        ("postgresql://u@h/db", "postgresql+asyncpg://u@h/db"),
        ("postgres://u@h/db", "postgresql+asyncpg://u@h/db"),
        ("sqlite:///./x.db", "sqlite+aiosqlite:///./x.db"),
        ("postgresql+asyncpg://u@h/db", "postgresql+asyncpg://u@h/db"),
        ("mysql://u@h/db", "mysql://u@h/db"),
    ])
    def test_normalize(self, url, expected):
        assert normalize_async_url(url) == expected

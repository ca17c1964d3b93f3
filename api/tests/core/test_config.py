"""Unit tests for core.config module.

Tests cover:
- Settings model_validator checks
- is_sqlite property
- allowed_origins computed property with deduplication
- get_settings / clear_settings_cache lru_cache behavior
"""

import pytest
from pydantic import ValidationError

from core.config import Settings, clear_settings_cache, get_settings


@pytest.fixture(autouse=True)
def _clear_settings():
    """Clear lru_cache between tests."""
    clear_settings_cache()
    yield
    clear_settings_cache()


# ---------------------------------------------------------------------------
# Settings validation
# ---------------------------------------------------------------------------


@pytest.mark.unit
class TestSettingsValidation:
    def test_defaults_are_valid(self):
        settings = Settings(database_url="sqlite+aiosqlite:///./data/portfolio.db")
        assert settings.port == 3001
        assert settings.seed_database is False

    def test_requires_database_url(self):
        with pytest.raises(ValidationError, match="DATABASE_URL"):
            Settings(database_url="")

    @pytest.mark.parametrize("port", [0, 70000])
    def test_rejects_out_of_range_port(self, port):
        with pytest.raises(ValidationError, match="PORT"):
            Settings(database_url="sqlite+aiosqlite:///:memory:", port=port)

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("PORT", "8080")
        monkeypatch.setenv("SEED_DATABASE", "true")
        settings = Settings(database_url="sqlite+aiosqlite:///:memory:")
        assert settings.port == 8080
        assert settings.seed_database is True


# ---------------------------------------------------------------------------
# is_sqlite
# ---------------------------------------------------------------------------


@pytest.mark.unit
class TestIsSqlite:
    def test_true_for_sqlite_url(self):
        assert Settings(database_url="sqlite+aiosqlite:///:memory:").is_sqlite

    def test_false_for_postgres_url(self):
        s = Settings(database_url="postgresql+asyncpg://localhost/portfolio")
        assert s.is_sqlite is False


# ---------------------------------------------------------------------------
# allowed_origins
# ---------------------------------------------------------------------------


@pytest.mark.unit
class TestAllowedOrigins:
    def test_debug_includes_localhost(self):
        s = Settings(debug=True, database_url="sqlite+aiosqlite:///:memory:")
        assert "http://localhost:3000" in s.allowed_origins
        assert "http://localhost:5173" in s.allowed_origins

    def test_prod_excludes_localhost_dev_ports(self):
        s = Settings(
            debug=False,
            database_url="sqlite+aiosqlite:///:memory:",
            frontend_url="https://portfolio.example.com",
        )
        assert "http://localhost:3000" not in s.allowed_origins
        assert s.allowed_origins == ["https://portfolio.example.com"]

    def test_cors_allowed_origins_csv_parsed(self):
        s = Settings(
            database_url="sqlite+aiosqlite:///:memory:",
            cors_allowed_origins="https://a.com, https://b.com",
        )
        assert "https://a.com" in s.allowed_origins
        assert "https://b.com" in s.allowed_origins

    def test_deduplication(self):
        s = Settings(
            debug=True,
            database_url="sqlite+aiosqlite:///:memory:",
            frontend_url="http://localhost:5173",
            cors_allowed_origins="http://localhost:5173",
        )
        assert s.allowed_origins.count("http://localhost:5173") == 1


# ---------------------------------------------------------------------------
# get_settings / clear_settings_cache
# ---------------------------------------------------------------------------


@pytest.mark.unit
class TestGetSettings:
    def test_returns_same_instance(self):
        s1 = get_settings()
        s2 = get_settings()
        assert s1 is s2

    def test_clear_cache_resets(self):
        s1 = get_settings()
        clear_settings_cache()
        s2 = get_settings()
        assert s1 is not s2

"""
Tests for configuration loading
"""
from config.config import (
    DevelopmentConfig,
    ProductionConfig,
    TestingConfig,
    _env_flag,
    _normalize_db_url,
    get_config,
)


class TestConfig:
    def test_postgres_url_normalized(self):
        """Test postgres:// URLs are rewritten for SQLAlchemy"""
        assert (
            _normalize_db_url("postgres://user:pw@db/movies")
            == "postgresql+psycopg2://user:pw@db/movies"
        )
        assert _normalize_db_url("sqlite:///movies.db") == "sqlite:///movies.db"

    def test_env_flag(self, monkeypatch):
        """Test boolean environment flags"""
        monkeypatch.setenv("SOME_FLAG", "yes")
        assert _env_flag("SOME_FLAG", False) is True

        monkeypatch.setenv("SOME_FLAG", "0")
        assert _env_flag("SOME_FLAG", True) is False

        monkeypatch.delenv("SOME_FLAG")
        assert _env_flag("SOME_FLAG", True) is True

    def test_get_config(self, monkeypatch):
        """Test config class selection from APP_ENV"""
        monkeypatch.setenv("APP_ENV", "production")
        assert get_config() is ProductionConfig

        monkeypatch.setenv("APP_ENV", "testing")
        assert get_config() is TestingConfig

        monkeypatch.delenv("APP_ENV")
        assert get_config() is DevelopmentConfig

    def test_defaults(self):
        """Test testing config defaults"""
        assert TestingConfig.DEFAULT_PAGE_LIMIT == 5
        assert TestingConfig.RECOMMENDED_MIN_RATING == 8
        assert TestingConfig.DATABASE_URL == "sqlite:///:memory:"

import os

from dotenv import load_dotenv

load_dotenv()


def _normalize_db_url(url: str) -> str:
    """Normalize postgres:// to postgresql+psycopg2:// for SQLAlchemy."""
    if url.startswith("postgres://"):
        return url.replace("postgres://", "postgresql+psycopg2://", 1)
    return url


def _env_flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


class Config:
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key-change-me")

    # Database
    DATABASE_URL = _normalize_db_url(os.getenv("DATABASE_URL", "sqlite:///movies.db"))
    SQLALCHEMY_ECHO = _env_flag("SQLALCHEMY_ECHO", False)
    CREATE_TABLES = _env_flag("CREATE_TABLES", True)

    # Paging
    DEFAULT_PAGE_LIMIT = int(os.getenv("DEFAULT_PAGE_LIMIT", 5))
    MAX_PAGE_LIMIT = int(os.getenv("MAX_PAGE_LIMIT", 100))

    RECOMMENDED_MIN_RATING = 8

    # Validation failures have always been reported as 500
    VALIDATION_ERROR_STATUS = int(os.getenv("VALIDATION_ERROR_STATUS", 500))

    # Logging
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    LOG_FILE = os.getenv("LOG_FILE")


class DevelopmentConfig(Config):
    DEBUG = True


class TestingConfig(Config):
    TESTING = True
    DATABASE_URL = "sqlite:///:memory:"
    CREATE_TABLES = False
    LOG_LEVEL = "WARNING"
    LOG_FILE = None


class ProductionConfig(Config):
    DEBUG = False
    CREATE_TABLES = _env_flag("CREATE_TABLES", False)


def get_config():
    env = os.getenv("APP_ENV", "development").lower()
    if env == "production":
        return ProductionConfig
    if env == "testing":
        return TestingConfig
    return DevelopmentConfig

import logging
from contextlib import contextmanager

from flask import current_app
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from movie_catalog.models import Base

logger = logging.getLogger(__name__)


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class Database:
    """Owns the engine and session factory for one process.

    Built once by the application factory (or a script) and disposed on
    shutdown; handlers reach it through ``get_db_session``.
    """

    def __init__(self, url: str, echo: bool = False):
        self.url = url
        engine_kwargs = {"echo": echo}
        if url in ("sqlite://", "sqlite:///:memory:"):
            # A single shared connection, otherwise every session sees an empty database
            engine_kwargs["poolclass"] = StaticPool
            engine_kwargs["connect_args"] = {"check_same_thread": False}
        self.engine = create_engine(url, **engine_kwargs)
        if self.engine.dialect.name == "sqlite":
            event.listen(self.engine, "connect", _enable_sqlite_foreign_keys)
        self.Session = sessionmaker(bind=self.engine)

    def session(self):
        return self.Session()

    @contextmanager
    def session_scope(self):
        """Session that commits on success and rolls back on any error"""
        session = self.Session()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def create_all(self):
        Base.metadata.create_all(self.engine)
        logger.info("Database tables created/verified")

    def drop_all(self):
        Base.metadata.drop_all(self.engine)
        logger.info("Database tables dropped")

    def dispose(self):
        self.engine.dispose()

    def __repr__(self):
        return f"<Database(url='{self.engine.url!r}')>"


def get_db_session():
    """Get a new database session from the application's Database"""
    return current_app.extensions["database"].session()

# stocktrack/database.py

import logging
from pathlib import Path

from fastapi import Request
from sqlalchemy import create_engine, event
from sqlalchemy.engine import make_url
from sqlalchemy.orm import declarative_base, sessionmaker

Base = declarative_base()

logger = logging.getLogger("stocktrack.database")


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    # SQLite ignores ON DELETE actions unless this is set per connection
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class Database:
    """Owns the engine and session factory for one database URL.

    Built explicitly by the application factory (or a script) and torn down
    with ``dispose()``; nothing here is module-global.
    """

    def __init__(self, url: str, echo: bool = False):
        self.url = make_url(url)
        self.is_sqlite = self.url.get_backend_name() == "sqlite"

        connect_args = {"check_same_thread": False} if self.is_sqlite else {}

        self.engine = create_engine(
            self.url,
            echo=echo,
            connect_args=connect_args,
            pool_pre_ping=True,
        )

        if self.is_sqlite:
            event.listen(self.engine, "connect", _enable_sqlite_foreign_keys)

        self.SessionLocal = sessionmaker(
            autocommit=False,
            autoflush=False,
            bind=self.engine,
        )

    def init(self):
        # Register the mapped tables on Base.metadata
        from stocktrack import models  # noqa: F401

        if self.is_sqlite and self.url.database not in (None, "", ":memory:"):
            Path(self.url.database).parent.mkdir(parents=True, exist_ok=True)

        Base.metadata.create_all(bind=self.engine)
        logger.info("Database tables initialized (%s)", self.url.render_as_string(hide_password=True))

    def session(self):
        return self.SessionLocal()

    def dispose(self):
        self.engine.dispose()
        logger.info("Database connection closed")


def get_db(request: Request):
    db = request.app.state.database.session()
    try:
        yield db
    finally:
        db.close()

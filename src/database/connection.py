"""Engine and session management for the order database."""

from pathlib import Path
from typing import Optional

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import Session, sessionmaker

from config import settings
from utils.logger import setup_logger

from .models import Base

logger = setup_logger(__name__)


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class Database:
    """Owns the SQLAlchemy engine and hands out sessions."""

    def __init__(self, database_url: Optional[str] = None, echo: Optional[bool] = None):
        """Create the engine for a database URL.

        Args:
            database_url: SQLAlchemy URL, defaults to ``settings.database_url``
            echo: Echo SQL statements, defaults to ``settings.database_echo``
        """
        self.database_url = database_url or settings.database_url
        echo = settings.database_echo if echo is None else echo

        url = make_url(self.database_url)
        if url.get_backend_name() == "sqlite" and url.database not in (None, "", ":memory:"):
            Path(url.database).parent.mkdir(parents=True, exist_ok=True)

        self.engine: Engine = create_engine(self.database_url, echo=echo)
        if url.get_backend_name() == "sqlite":
            # SQLite ignores REFERENCES clauses unless asked per connection
            event.listen(self.engine, "connect", _enable_sqlite_foreign_keys)

        self.SessionLocal = sessionmaker(bind=self.engine, expire_on_commit=False)
        logger.debug(f"Engine created for {self.engine.url!r}")

    def create_schema(self):
        """Create the orders and products tables if they do not exist."""
        Base.metadata.create_all(self.engine)
        logger.info("Database schema ready")

    def drop_schema(self):
        """Drop the orders and products tables."""
        Base.metadata.drop_all(self.engine)
        logger.info("Database schema dropped")

    def get_session(self) -> Session:
        """Create a new database session."""
        return self.SessionLocal()

    def dispose(self):
        """Close all pooled connections."""
        self.engine.dispose()

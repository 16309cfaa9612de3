"""PostgreSQL connection and session utilities."""

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy import create_engine, text
from sqlalchemy.orm import Session, sessionmaker

from src.config import DATABASE_URL, POSTGRES_CONFIG
from src.db.postgres_bootstrap import Base
from src.models import *  # Needed for Base metadata

logger = logging.getLogger(__name__)


class PostgresConnection:
    def __init__(self, url: str | None = None):
        self.config = POSTGRES_CONFIG
        self.url = url or DATABASE_URL or (
            f"postgresql+psycopg2://{self.config['user']}:{self.config['password']}@"
            f"{self.config['host']}:{self.config['port']}/{self.config['database']}"
        )
        self._engine = None
        self._session_factory = None

    @property
    def engine(self):
        if not self._engine:
            self._engine = create_engine(self.url, pool_pre_ping=True)
        return self._engine

    @property
    def session_factory(self):
        if not self._session_factory:
            self._session_factory = sessionmaker(bind=self.engine, autoflush=False)
        return self._session_factory

    @contextmanager
    def get_session(self) -> Iterator[Session]:
        """Open a session for one unit of work; the caller commits."""
        session = self.session_factory()
        try:
            yield session
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def ping(self) -> bool:
        """Run a trivial query to check the connection."""
        with self.engine.connect() as conn:
            return conn.execute(text("SELECT 1")).scalar() == 1

    def create_tables(self):
        """Create all tables in the database."""
        logger.log(logging.INFO, "Creating tables...")

        try:
            Base.metadata.create_all(self.engine)
            logger.log(logging.INFO, "Tables created successfully.")
        except Exception as e:
            logger.log(logging.ERROR, f"Error creating tables: {e}")
            raise e


def get_db() -> Iterator[Session]:
    """
    FastAPI dependency yielding one session per request.
    Usage:
        @app.get("/items")
        def list_items(session: Session = Depends(get_db)):
            ...
    """
    with db.get_session() as session:
        yield session


# Singleton instance
db = PostgresConnection()

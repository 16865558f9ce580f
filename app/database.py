"""
Database connection pool shared by all request handlers
"""

import logging
import threading
from contextlib import contextmanager
from typing import Iterator

from fastapi import Request
from sqlalchemy import create_engine, text
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import declarative_base

from app.config import Settings
from app.utils.error_handler import DatabaseError

logger = logging.getLogger(__name__)

# Base class for the table definitions in app.models
Base = declarative_base()


def driver_message(error: SQLAlchemyError) -> str:
    """Message reported by the DB driver, without SQLAlchemy's statement dump"""
    orig = getattr(error, "orig", None)
    if orig is not None:
        return str(orig)
    return str(error)


class ConnectionPool:
    """Bounded set of database connections handed out one per request"""

    def __init__(self, engine: Engine):
        self.engine = engine
        self._in_use = 0
        self._lock = threading.Lock()

    @classmethod
    def from_settings(cls, settings: Settings) -> "ConnectionPool":
        """Build a pool capped at settings.pool_size connections.

        Every statement runs in autocommit mode, so a handler's statements
        are never grouped into a transaction.
        """
        engine = create_engine(
            settings.database_url,
            pool_size=settings.pool_size,
            max_overflow=0,
            pool_timeout=settings.pool_timeout,
            pool_pre_ping=True,
            isolation_level="AUTOCOMMIT",
        )
        logger.info(f"Created connection pool for {engine.url.render_as_string(hide_password=True)} "
                    f"(size={settings.pool_size})")
        return cls(engine)

    @property
    def in_use(self) -> int:
        """Number of connections currently checked out through this pool"""
        return self._in_use

    def _track(self, delta: int) -> None:
        with self._lock:
            self._in_use += delta

    @contextmanager
    def connection(self) -> Iterator[Connection]:
        """Check out a connection and return it to the pool on exit.

        Any SQLAlchemy failure, while connecting or while running statements,
        is re-raised as DatabaseError.
        """
        try:
            conn = self.engine.connect()
        except SQLAlchemyError as e:
            logger.error(f"Failed to acquire database connection: {driver_message(e)}")
            raise DatabaseError(driver_message(e), e) from e

        self._track(1)
        try:
            yield conn
        except SQLAlchemyError as e:
            logger.error(f"Database query failed: {driver_message(e)}")
            raise DatabaseError(driver_message(e), e) from e
        finally:
            conn.close()
            self._track(-1)

    def ping(self) -> None:
        """Run a trivial query; raises DatabaseError if the database is unreachable"""
        with self.connection() as conn:
            conn.execute(text("SELECT 1"))

    def dispose(self) -> None:
        self.engine.dispose()
        logger.info("Connection pool disposed")


def get_pool(request: Request) -> ConnectionPool:
    """FastAPI dependency returning the pool created in the app lifespan"""
    return request.app.state.pool

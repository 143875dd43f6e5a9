"""
db/connection.py
----------------
Manages the PostgreSQL connection pool.
Uses psycopg2's SimpleConnectionPool for efficient connection reuse.
The pool is built from an injected DatabaseConfig and handed to the
repositories, so no connection state lives at module level.
"""

import psycopg2
from psycopg2 import pool

from config import DatabaseConfig
from db.errors import StoreUnavailableError
from utils.logger import get_logger

logger = get_logger(__name__)


class ConnectionPool:
    """Hands out pooled connections to the repositories."""

    def __init__(self, config: DatabaseConfig):
        self.config = config
        self._pool: pool.SimpleConnectionPool | None = None

    def open(self) -> None:
        """
        Initialize the database connection pool.

        Raises:
            StoreUnavailableError: If the database is unreachable.
        """
        if self._pool is not None:
            return
        try:
            self._pool = pool.SimpleConnectionPool(
                self.config.pool_min,
                self.config.pool_max,
                self.config.dsn,
                connect_timeout=self.config.connect_timeout,
            )
            logger.info("Database connection pool initialized successfully.")
        except psycopg2.OperationalError as e:
            logger.error(f"Failed to initialize database pool: {e}")
            raise StoreUnavailableError("Database is unreachable") from e

    def get_connection(self):
        """
        Get a connection from the pool.

        Returns:
            A psycopg2 connection object.

        Raises:
            StoreUnavailableError: If the pool is not open, exhausted,
                or cannot reach the database.
        """
        if self._pool is None:
            raise StoreUnavailableError("Database pool not initialized. Call open() first.")
        try:
            return self._pool.getconn()
        except (pool.PoolError, psycopg2.OperationalError) as e:
            logger.error(f"Could not obtain a database connection: {e}")
            raise StoreUnavailableError("No database connection available") from e

    def release_connection(self, conn) -> None:
        """
        Return a connection back to the pool.

        Args:
            conn: The psycopg2 connection to release.
        """
        if self._pool is not None:
            self._pool.putconn(conn)

    def close(self) -> None:
        """Close all connections in the pool."""
        if self._pool is not None:
            self._pool.closeall()
            self._pool = None
            logger.info("Database connection pool closed.")

    def __enter__(self) -> "ConnectionPool":
        self.open()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

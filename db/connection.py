"""
db/connection.py
----------------
Owns the PostgreSQL connection pool.
Uses psycopg2's ThreadedConnectionPool so several handlers can borrow
connections at the same time. Connections are borrowed per operation via
`Database.connection()` and always handed back, whatever the outcome.

ThreadedConnectionPool fails at once when every connection is taken, so
borrowers first wait on a semaphore sized to `max_conn`. More callers than
connections queue up instead of erroring.
"""

import threading
from contextlib import contextmanager
from typing import Iterator, Optional

import psycopg2
from psycopg2 import pool
from psycopg2.extensions import connection as PgConnection

from utils.logger import get_logger

logger = get_logger(__name__)


class Database:
    """
    Long-lived handle on a pool of PostgreSQL connections.

    Args:
        dsn: libpq connection string, e.g. ``postgresql://user:pw@host/db``.
        min_conn: Minimum number of connections to keep open.
        max_conn: Maximum number of connections allowed.
        acquire_timeout: Seconds a borrower waits for a free connection.
    """

    def __init__(
        self,
        dsn: str,
        min_conn: int = 1,
        max_conn: int = 10,
        acquire_timeout: float = 10.0,
    ):
        self.dsn = dsn
        self.min_conn = min_conn
        self.max_conn = max_conn
        self.acquire_timeout = acquire_timeout
        self._pool: Optional[pool.ThreadedConnectionPool] = None
        self._slots = threading.BoundedSemaphore(max_conn)

    def open(self) -> None:
        """
        Create the pool. Calling it twice is a no-op.

        Raises:
            psycopg2.OperationalError: If the database is unreachable.
        """
        if self._pool is not None:
            return
        try:
            self._pool = pool.ThreadedConnectionPool(self.min_conn, self.max_conn, self.dsn)
            logger.info(
                f"Database connection pool initialized ({self.min_conn}-{self.max_conn} connections)."
            )
        except psycopg2.OperationalError as e:
            logger.error(f"Failed to initialize database pool: {e}")
            raise

    def close(self) -> None:
        """Close all connections in the pool."""
        if self._pool is not None:
            self._pool.closeall()
            self._pool = None
            logger.info("Database connection pool closed.")

    @property
    def is_open(self) -> bool:
        return self._pool is not None

    @contextmanager
    def connection(self) -> Iterator[PgConnection]:
        """
        Borrow a connection for one unit of work.

        Waits up to `acquire_timeout` seconds when every connection is in use.
        Commits when the block finishes, rolls back if it raises, and returns
        the connection to the pool on every path.

        Raises:
            psycopg2.pool.PoolError: If the pool has not been opened, or no
                connection came free in time.
        """
        if self._pool is None:
            raise pool.PoolError("Database pool not initialized. Call open() first.")
        if not self._slots.acquire(timeout=self.acquire_timeout):
            logger.warning(f"No database connection free after {self.acquire_timeout}s")
            raise pool.PoolError("timed out waiting for a free connection")

        try:
            conn = self._pool.getconn()
            try:
                yield conn
                conn.commit()
            except BaseException:
                conn.rollback()
                raise
            finally:
                self._pool.putconn(conn)
        finally:
            self._slots.release()

    def health_check(self) -> bool:
        """Return True when a trivial query succeeds."""
        try:
            with self.connection() as conn:
                with conn.cursor() as cur:
                    cur.execute("SELECT 1;")
                    cur.fetchone()
            return True
        except psycopg2.Error as e:
            logger.warning(f"Database health check failed: {e}")
            return False

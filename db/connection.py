"""
db/connection.py
----------------
The store gateway: a pooled PostgreSQL connection wrapper.
Uses psycopg2's ThreadedConnectionPool so concurrent request workers can
share it. Every call acquires its own connection and returns it on every
exit path.
"""

from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator, Optional, Sequence

import psycopg2
from psycopg2 import errors, extras, pool

from config import (
    DATABASE_URL,
    DB_CONNECT_TIMEOUT,
    DB_POOL_MAX,
    DB_POOL_MIN,
    DB_STATEMENT_TIMEOUT_MS,
)
from utils.errors import (
    ConnectivityError,
    DatabaseError,
    DuplicateError,
    ForeignKeyError,
    PlaceRatingError,
)
from utils.logger import get_logger

logger = get_logger(__name__)


@dataclass
class ExecuteResult:
    """Outcome of a write: affected row count and the RETURNING row, if any."""
    rowcount: int
    row: Optional[dict] = None


# SQLSTATE class 08 (connection exception) and the server-shutdown codes
_CONNECTION_FAILURES = tuple(
    errors.lookup(code)
    for code in ("08000", "08001", "08003", "08004", "08006", "08007", "08P01",
                 "57P01", "57P02", "57P03")
)


def _is_connection_failure(exc: Exception, conn=None) -> bool:
    if isinstance(exc, (psycopg2.InterfaceError, pool.PoolError, _CONNECTION_FAILURES)):
        return True
    if not isinstance(exc, psycopg2.OperationalError):
        return False
    if conn is not None and conn.closed:
        return True
    pgcode = getattr(exc, "pgcode", None)
    if pgcode:
        return pgcode.startswith("08")
    # client-side failures (refused, dropped) come as the bare class with no SQLSTATE
    return type(exc) is psycopg2.OperationalError


def translate_error(exc: Exception, conn=None) -> PlaceRatingError:
    """
    Map a psycopg2 exception onto the error taxonomy.

    Only connection-level failures become ConnectivityError; deadlocks,
    serialization failures, lock timeouts and the like come from a reachable
    store and stay DatabaseError. Pass the connection in use, if any, so a
    connection the driver has marked closed counts as unreachable.
    """
    if isinstance(exc, errors.ForeignKeyViolation):
        return ForeignKeyError("Referenced user or place does not exist")
    if isinstance(exc, errors.UniqueViolation):
        return DuplicateError("Record already exists")
    if isinstance(exc, errors.QueryCanceled):
        return DatabaseError("Database query timed out")
    if _is_connection_failure(exc, conn):
        return ConnectivityError("Database is unreachable")
    return DatabaseError("Database error")


class Database:
    """
    Gateway over a connection pool.

    Args:
        dsn: libpq connection string.
        min_conn: Minimum number of connections to keep open.
        max_conn: Maximum number of connections allowed.
        connect_timeout: Seconds to wait when opening a connection.
        statement_timeout_ms: Server-side statement deadline; 0 disables it.
    """

    def __init__(
        self,
        dsn: str = DATABASE_URL,
        min_conn: int = DB_POOL_MIN,
        max_conn: int = DB_POOL_MAX,
        connect_timeout: int = DB_CONNECT_TIMEOUT,
        statement_timeout_ms: int = DB_STATEMENT_TIMEOUT_MS,
    ):
        self.dsn = dsn
        self.min_conn = min_conn
        self.max_conn = max_conn
        self.connect_timeout = connect_timeout
        self.statement_timeout_ms = statement_timeout_ms
        self._pool: Optional[pool.ThreadedConnectionPool] = None

    def open(self) -> None:
        """
        Create the pool.

        Raises:
            ConnectivityError: If the database is unreachable.
        """
        if self._pool is not None:
            return
        kwargs = {"connect_timeout": self.connect_timeout}
        if self.statement_timeout_ms > 0:
            kwargs["options"] = f"-c statement_timeout={self.statement_timeout_ms}"
        try:
            self._pool = pool.ThreadedConnectionPool(
                self.min_conn, self.max_conn, self.dsn, **kwargs
            )
            logger.info("Database connection pool initialized successfully.")
        except psycopg2.Error as e:
            logger.error(f"Failed to initialize database pool: {e}")
            raise translate_error(e) from e

    def close(self) -> None:
        """Close all connections in the pool."""
        if self._pool is not None:
            self._pool.closeall()
            self._pool = None
            logger.info("Database connection pool closed.")

    @contextmanager
    def connection(self) -> Iterator:
        """
        Borrow a connection for the duration of the block.

        The connection goes back to the pool however the block exits;
        a connection the driver reports as closed is discarded instead.
        """
        if self._pool is None:
            raise ConnectivityError("Database pool not initialized")
        try:
            conn = self._pool.getconn()
        except (psycopg2.Error, pool.PoolError) as e:
            logger.error(f"Failed to acquire database connection: {e}")
            raise translate_error(e) from e
        try:
            yield conn
        finally:
            self._pool.putconn(conn, close=bool(conn.closed))

    def query(self, sql: str, params: Sequence = ()) -> list[dict]:
        """Run a read statement and return every row as a dict."""
        with self.connection() as conn:
            try:
                with conn.cursor(cursor_factory=extras.RealDictCursor) as cur:
                    cur.execute(sql, params)
                    rows = [dict(r) for r in cur.fetchall()]
                # end the implicit read transaction
                conn.rollback()
                return rows
            except psycopg2.Error as e:
                self._rollback(conn)
                logger.error(f"Query failed: {e}")
                raise translate_error(e, conn) from e

    def query_one(self, sql: str, params: Sequence = ()) -> Optional[dict]:
        rows = self.query(sql, params)
        return rows[0] if rows else None

    def execute(self, sql: str, params: Sequence = ()) -> ExecuteResult:
        """
        Run a single write statement in its own transaction.

        Returns:
            ExecuteResult with the affected row count and the first
            RETURNING row (None when the statement returns nothing).
        """
        with self.connection() as conn:
            try:
                with conn.cursor(cursor_factory=extras.RealDictCursor) as cur:
                    cur.execute(sql, params)
                    row = cur.fetchone() if cur.description else None
                    result = ExecuteResult(
                        rowcount=cur.rowcount, row=dict(row) if row else None
                    )
                conn.commit()
                return result
            except psycopg2.Error as e:
                self._rollback(conn)
                logger.error(f"Statement failed: {e}")
                raise translate_error(e, conn) from e

    def execute_script(self, sql: str) -> None:
        """Run a multi-statement script (schema DDL) in one transaction."""
        with self.connection() as conn:
            try:
                with conn.cursor() as cur:
                    cur.execute(sql)
                conn.commit()
            except psycopg2.Error as e:
                self._rollback(conn)
                logger.error(f"Script failed: {e}")
                raise translate_error(e, conn) from e

    @staticmethod
    def _rollback(conn) -> None:
        if conn.closed:
            return
        try:
            conn.rollback()
        except psycopg2.Error as e:
            logger.warning(f"Rollback failed: {e}")


# ── Process-wide default gateway ──────────────────────────

_database: Optional[Database] = None


def init_pool(min_conn: int = DB_POOL_MIN, max_conn: int = DB_POOL_MAX) -> Database:
    """
    Initialize the default gateway used when none is injected.

    Raises:
        ConnectivityError: If the database is unreachable.
    """
    global _database
    if _database is None:
        database = Database(min_conn=min_conn, max_conn=max_conn)
        database.open()
        _database = database
    return _database


def get_database() -> Database:
    """
    Return the default gateway.

    Raises:
        ConnectivityError: If init_pool() has not been called.
    """
    if _database is None:
        raise ConnectivityError("Database pool not initialized. Call init_pool() first.")
    return _database


def close_pool() -> None:
    """Close the default gateway's pool."""
    global _database
    if _database is not None:
        _database.close()
        _database = None

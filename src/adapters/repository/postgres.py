"""
PostgreSQL repository adapter - Implements UserRepository protocol.

This module provides the PostgreSQL implementation of the domain's
repository port using psycopg3 with raw SQL.

Error Wrapping
--------------
No psycopg exception crosses this module's boundary on its own:

1. A lookup that returns no row becomes ``UserNotFound``.
2. An INSERT/UPDATE that succeeds but touches no row becomes
   ``InsertFailed`` / ``UpdateFailed``.
3. Every other ``psycopg.Error`` (connection loss, pool exhaustion,
   statement timeout, unique violation, ...) becomes a
   ``SystemicQueryError`` with the driver exception chained as its cause.

Deadlines
---------
``create_pool`` sets a pool acquisition timeout and a server-side
``statement_timeout`` so that every call returns promptly once its deadline
passes instead of blocking indefinitely.
"""

import logging
from collections.abc import Iterator
from typing import Any
from uuid import UUID

import psycopg
from psycopg_pool import ConnectionPool

from src.config.settings import Settings
from src.domain.models import User
from src.domain.query_errors import QueryError, QueryErrorKind, new_query_error

logger = logging.getLogger(__name__)

_USER_COLUMNS = "user_id, email_id, password_hash, first_name, last_name, user_name"

FIND_USER_BY_ID = "find_user_by_id"
FIND_USER_BY_EMAIL = "find_user_by_email"
FIND_ALL_USERS = "find_all_users"
UPDATE_USER = "update_user"
STORE_USER = "store_user"

_SQL = {
    FIND_USER_BY_ID: f"SELECT {_USER_COLUMNS} FROM users WHERE user_id = %s",
    FIND_USER_BY_EMAIL: f"SELECT {_USER_COLUMNS} FROM users WHERE email_id = %s",
    FIND_ALL_USERS: f"SELECT {_USER_COLUMNS} FROM users ORDER BY email_id",
    UPDATE_USER: """
        UPDATE users
        SET email_id = %s, password_hash = %s, first_name = %s, last_name = %s, user_name = %s
        WHERE user_id = %s
    """,
    STORE_USER: f"INSERT INTO users ({_USER_COLUMNS}) VALUES (%s, %s, %s, %s, %s, %s)",
}


def create_pool(settings: Settings) -> ConnectionPool:
    """
    Create the connection pool backing the repository.

    Args:
        settings: Application settings (sizing and deadlines)

    Returns:
        Opened psycopg3 ConnectionPool
    """
    return ConnectionPool(
        conninfo=settings.database_url,
        min_size=settings.pool_min_size,
        max_size=settings.pool_max_size,
        timeout=settings.pool_timeout_seconds,
        kwargs={"options": f"-c statement_timeout={settings.statement_timeout_ms}"},
        open=True,
    )


def _row_to_user(row: tuple[Any, ...]) -> User:
    user_id, email, password_hash, first_name, last_name, username = row
    return User(
        id=user_id,
        email=email,
        password=password_hash,
        first_name=first_name,
        last_name=last_name,
        username=username,
    )


def _wrap(query: str, exc: psycopg.Error) -> QueryError:
    logger.warning("Query %s failed: %s", query, exc)
    return new_query_error(query, exc, str(exc), stacklevel=2)


class PostgresUserRepository:
    """
    Implements UserRepository protocol via psycopg3.

    Uses structural subtyping - no explicit inheritance from Protocol.
    All SQL uses parameterized queries for security.
    """

    def __init__(self, pool: ConnectionPool) -> None:
        """
        Initialize repository with connection pool.

        Args:
            pool: psycopg3 ConnectionPool for database connections
        """
        self._pool = pool

    def find(self, user_id: UUID) -> User:
        return self._find_one(FIND_USER_BY_ID, user_id)

    def find_by_email(self, email: str) -> User:
        return self._find_one(FIND_USER_BY_EMAIL, email)

    def find_all(self) -> Iterator[User]:
        """
        Stream every user through a server-side cursor.

        Nothing is fetched until iteration starts; the connection is held
        until the iterator is exhausted or closed.
        """
        try:
            with self._pool.connection() as conn, conn.cursor(name=FIND_ALL_USERS) as cursor:
                cursor.execute(_SQL[FIND_ALL_USERS])
                for row in cursor:
                    yield _row_to_user(row)
        except psycopg.Error as e:
            raise _wrap(FIND_ALL_USERS, e) from e

    def update(self, user: User) -> None:
        params = (
            user.email,
            user.password,
            user.first_name,
            user.last_name,
            user.username,
            user.id,
        )
        rowcount = self._execute(UPDATE_USER, params)
        if rowcount != 1:
            raise new_query_error(
                UPDATE_USER, QueryErrorKind.UPDATE_FAILED, f"{rowcount} rows affected"
            )

    def store(self, user: User) -> UUID:
        params = (
            user.id,
            user.email,
            user.password,
            user.first_name,
            user.last_name,
            user.username,
        )
        rowcount = self._execute(STORE_USER, params)
        if rowcount != 1:
            raise new_query_error(
                STORE_USER, QueryErrorKind.INSERT_FAILED, f"{rowcount} rows affected"
            )
        return user.id

    def _find_one(self, query: str, key: Any) -> User:
        try:
            with self._pool.connection() as conn, conn.cursor() as cursor:
                cursor.execute(_SQL[query], (key,))
                row = cursor.fetchone()
        except psycopg.Error as e:
            raise _wrap(query, e) from e

        if row is None:
            raise new_query_error(query, QueryErrorKind.USER_NOT_FOUND, "no rows in result set")
        return _row_to_user(row)

    def _execute(self, query: str, params: tuple[Any, ...]) -> int:
        """Run a write statement, commit it and return the affected row count."""
        try:
            with self._pool.connection() as conn, conn.cursor() as cursor:
                cursor.execute(_SQL[query], params)
                conn.commit()
                return cursor.rowcount
        except psycopg.Error as e:
            raise _wrap(query, e) from e

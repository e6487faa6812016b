"""In-memory implementation of UserRepository for tests and local runs."""

import threading
from collections.abc import Iterator
from dataclasses import replace
from uuid import UUID

from src.domain.models import User
from src.domain.query_errors import QueryErrorKind, new_query_error


class InMemoryUserRepository:
    """
    Dict-backed user store with the same error contract as Postgres.

    Email uniqueness is enforced on ``store`` like the database constraint,
    so concurrent registrations for one email produce exactly one record.
    """

    def __init__(self) -> None:
        self._users: dict[UUID, User] = {}
        self._lock = threading.Lock()

    # ── read operations ──────────────────────────────────────

    def find(self, user_id: UUID) -> User:
        with self._lock:
            user = self._users.get(user_id)
        if user is None:
            raise new_query_error("find_user_by_id", QueryErrorKind.USER_NOT_FOUND, str(user_id))
        return replace(user)

    def find_by_email(self, email: str) -> User:
        with self._lock:
            user = next((u for u in self._users.values() if u.email == email), None)
        if user is None:
            raise new_query_error("find_user_by_email", QueryErrorKind.USER_NOT_FOUND, email)
        return replace(user)

    def find_all(self) -> Iterator[User]:
        with self._lock:
            snapshot = [replace(u) for u in self._users.values()]
        return iter(snapshot)

    # ── write operations ─────────────────────────────────────

    def update(self, user: User) -> None:
        with self._lock:
            if user.id not in self._users:
                raise new_query_error(
                    "update_user", QueryErrorKind.UPDATE_FAILED, "0 rows affected"
                )
            self._users[user.id] = replace(user)

    def store(self, user: User) -> UUID:
        with self._lock:
            if user.id is None or user.id in self._users:
                raise new_query_error("store_user", QueryErrorKind.INSERT_FAILED, "0 rows affected")
            if any(u.email == user.email for u in self._users.values()):
                exc = ValueError(f"duplicate key value violates unique constraint: {user.email}")
                raise new_query_error("store_user", exc, str(exc))
            self._users[user.id] = replace(user)
        return user.id

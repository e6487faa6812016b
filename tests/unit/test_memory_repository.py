"""
Unit tests for InMemoryUserRepository.

Tests verify the in-memory adapter honours the same error contract as the
Postgres adapter.
"""

import uuid

import pytest

from src.adapters.repository.memory import InMemoryUserRepository
from src.domain.models import User
from src.domain.query_errors import (
    InsertFailed,
    QueryErrorKind,
    SystemicQueryError,
    UpdateFailed,
    UserNotFound,
)


def _user(email: str = "ankur@example.com") -> User:
    return User(id=uuid.uuid4(), email=email, password="$2b$04$hash", first_name="Ankur")


class TestReads:
    def test_find_returns_stored_user(self, memory_repository: InMemoryUserRepository) -> None:
        user = _user()
        memory_repository.store(user)

        assert memory_repository.find(user.id) == user
        assert memory_repository.find_by_email("ankur@example.com") == user

    def test_find_returns_copy(self, memory_repository: InMemoryUserRepository) -> None:
        """Mutating a returned user does not change the stored record."""
        user = _user()
        memory_repository.store(user)

        found = memory_repository.find(user.id)
        found.first_name = "Changed"

        assert memory_repository.find(user.id).first_name == "Ankur"

    def test_missing_id_raises_not_found(self, memory_repository: InMemoryUserRepository) -> None:
        with pytest.raises(UserNotFound) as exc_info:
            memory_repository.find(uuid.uuid4())
        assert exc_info.value.kind is QueryErrorKind.USER_NOT_FOUND

    def test_missing_email_raises_not_found(
        self, memory_repository: InMemoryUserRepository
    ) -> None:
        with pytest.raises(UserNotFound):
            memory_repository.find_by_email("nobody@example.com")

    def test_find_all_is_one_shot(self, memory_repository: InMemoryUserRepository) -> None:
        memory_repository.store(_user("a@example.com"))
        memory_repository.store(_user("b@example.com"))

        users = memory_repository.find_all()

        assert sorted(u.email for u in users) == ["a@example.com", "b@example.com"]
        assert list(users) == []


class TestWrites:
    def test_duplicate_email_is_systemic(self, memory_repository: InMemoryUserRepository) -> None:
        """Email uniqueness mirrors the database constraint."""
        memory_repository.store(_user())

        with pytest.raises(SystemicQueryError) as exc_info:
            memory_repository.store(_user())

        assert isinstance(exc_info.value.cause, ValueError)

    def test_store_without_id_fails(self, memory_repository: InMemoryUserRepository) -> None:
        with pytest.raises(InsertFailed):
            memory_repository.store(User(email="ankur@example.com", password="hash"))

    def test_update_replaces_record(self, memory_repository: InMemoryUserRepository) -> None:
        user = _user()
        memory_repository.store(user)

        user.last_name = "Anand"
        memory_repository.update(user)

        assert memory_repository.find(user.id).last_name == "Anand"

    def test_update_unknown_user_fails(self, memory_repository: InMemoryUserRepository) -> None:
        with pytest.raises(UpdateFailed):
            memory_repository.update(_user())

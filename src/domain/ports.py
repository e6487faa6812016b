"""
Port interfaces - Protocol definitions for infrastructure abstraction.

This module defines the interfaces (ports) that the domain requires
from infrastructure. Adapters implement these protocols.
"""

from collections.abc import Iterator
from typing import Protocol
from uuid import UUID

from .models import User


class UserRepository(Protocol):
    """
    Port interface for user persistence.

    Every method raises a ``QueryError`` on failure. Lookups that match no
    row raise ``UserNotFound``; anything the adapter cannot interpret is a
    ``SystemicQueryError`` with the driver exception chained.
    """

    def find(self, user_id: UUID) -> User:
        """
        Fetch a user by identifier.

        Raises:
            UserNotFound: No user has this identifier
        """
        ...

    def find_by_email(self, email: str) -> User:
        """
        Fetch a user by normalized email.

        Raises:
            UserNotFound: No user has this email
        """
        ...

    def find_all(self) -> Iterator[User]:
        """
        Iterate over every stored user.

        The iterator is lazy, finite and can be consumed only once.
        """
        ...

    def update(self, user: User) -> None:
        """
        Persist changes to an existing user.

        Raises:
            UpdateFailed: No row was changed
        """
        ...

    def store(self, user: User) -> UUID:
        """
        Create a new user record.

        Args:
            user: Fully prepared user (identifier assigned, email normalized,
                password already hashed)

        Returns:
            Identifier of the stored user

        Raises:
            InsertFailed: The write reported success but affected no rows
            SystemicQueryError: Any other failure, including a uniqueness
                violation on email
        """
        ...


class PasswordHasher(Protocol):
    """Port interface for one-way adaptive password hashing."""

    def hash(self, plaintext: str) -> str:
        """Return a salted hash of ``plaintext``."""
        ...

    def verify(self, hashed: str, plaintext: str) -> bool:
        """Return True if ``plaintext`` matches ``hashed``."""
        ...

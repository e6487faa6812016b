"""
Domain entities - Users and their todo items.

Absence is always ``None`` (or a raised not-found error); there is no
zero-valued "nil" entity standing in for a missing record.
"""

from dataclasses import dataclass, field
from uuid import UUID


@dataclass
class User:
    """
    One account registered in the system.

    ``password`` holds the plaintext only until the registration service
    replaces it with a bcrypt hash. It is excluded from ``repr`` so a user
    can be logged safely.
    """

    email: str
    password: str = field(repr=False)
    first_name: str = ""
    last_name: str = ""
    username: str = ""
    id: UUID | None = None


@dataclass
class Todo:
    """A single task owned by a user."""

    title: str
    content: str
    user_id: UUID
    id: UUID | None = None
    finished: bool = False

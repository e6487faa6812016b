"""
Domain layer - Pure business logic with zero framework imports.

This package contains the registration and authentication logic for the
todo service. It defines its own port interfaces for infrastructure
abstraction and the error taxonomy storage adapters must translate into.
"""

from .exceptions import (
    EmailAlreadyRegistered,
    InvalidEmail,
    InvalidPassword,
    RegistrationError,
    ValidationError,
)
from .hashing import BcryptPasswordHasher
from .models import Todo, User
from .ports import PasswordHasher, UserRepository
from .query_errors import (
    DeleteFailed,
    InsertFailed,
    NoMoreRows,
    NotFoundError,
    QueryError,
    QueryErrorKind,
    SystemicQueryError,
    TodoNotFound,
    UpdateFailed,
    UserNotFound,
    new_query_error,
)
from .registration import RegistrationService

__all__ = [
    "BcryptPasswordHasher",
    "DeleteFailed",
    "EmailAlreadyRegistered",
    "InsertFailed",
    "InvalidEmail",
    "InvalidPassword",
    "NoMoreRows",
    "NotFoundError",
    "PasswordHasher",
    "QueryError",
    "QueryErrorKind",
    "RegistrationError",
    "RegistrationService",
    "SystemicQueryError",
    "Todo",
    "TodoNotFound",
    "UpdateFailed",
    "User",
    "UserNotFound",
    "UserRepository",
    "ValidationError",
    "new_query_error",
]

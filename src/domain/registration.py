"""
Registration domain service - account creation and credential checks.

This module contains the core business logic for user registration and
authentication:

- Input validation (email shape, password length)
- Duplicate detection by normalized email
- Credential verification against the stored bcrypt hash
- The write path: normalize, validate, hash, assign id, store

Email Normalization
===================

Emails are stripped and lower-cased before every comparison and before
storage, so "Ankur@X.com" and "ankur@x.com" are the same identity.

Uniqueness
==========

The duplicate check and the store are not transactionally coupled. Two
concurrent registrations for the same email can both pass the check; the
storage layer's unique constraint on email is the final arbiter and the
losing write surfaces as a SystemicQueryError from ``store``.
"""

import logging
import re
from collections.abc import Callable
from dataclasses import dataclass, field, replace
from uuid import UUID, uuid4

from .exceptions import EmailAlreadyRegistered, InvalidEmail, InvalidPassword
from .hashing import BcryptPasswordHasher
from .models import User
from .ports import PasswordHasher, UserRepository
from .query_errors import NotFoundError

logger = logging.getLogger(__name__)

EMAIL_MAX_LENGTH = 64
PASSWORD_MIN_LENGTH = 8
PASSWORD_MAX_LENGTH = 256

_DOMAIN_LABEL = r"[A-Za-z0-9](?:[A-Za-z0-9-]{0,61}[A-Za-z0-9])?"
_EMAIL_PATTERN = re.compile(
    r"[A-Za-z0-9.!#$%&'*+/=?^_`{|}~-]+"
    rf"@{_DOMAIN_LABEL}(?:\.{_DOMAIN_LABEL})+"
)


@dataclass
class RegistrationService:
    """
    Domain service for user registration and authentication.

    Holds no mutable shared state and is safe to call concurrently. All
    blocking happens in the repository (I/O) and the hasher (CPU).
    """

    repository: UserRepository
    hasher: PasswordHasher = field(default_factory=BcryptPasswordHasher)
    new_id: Callable[[], UUID] = uuid4
    _timing_hash: str = field(init=False, repr=False)

    def __post_init__(self) -> None:
        # Stand-in hash for unknown emails, built up front so every lookup costs the same
        self._timing_hash = self.hasher.hash("dummy_password_for_timing_safety")

    def validate_email(self, email: str) -> bool:
        """
        Check that ``email`` looks like local@domain.tld.

        Requires a non-empty local part, a dotted domain and a total length
        of at most 64 characters. No DNS or network checks.
        """
        if len(email) > EMAIL_MAX_LENGTH:
            return False
        return _EMAIL_PATTERN.fullmatch(email) is not None

    def validate_password(self, password: str) -> bool:
        """Check that the password length is within [8, 256] characters."""
        return PASSWORD_MIN_LENGTH <= len(password) <= PASSWORD_MAX_LENGTH

    def is_duplicate_registration(self, email: str) -> bool:
        """
        Report whether an account already exists for ``email``.

        Args:
            email: Email to check (will be normalized)

        Returns:
            True if a user was found, False if the repository reports not-found

        Raises:
            QueryError: Any repository failure other than not-found
        """
        try:
            self.repository.find_by_email(self._normalize_email(email))
        except NotFoundError:
            return False
        return True

    def is_credential_valid(self, email: str, password: str) -> tuple[bool, User | None]:
        """
        Verify an email/password pair.

        A wrong password is an expected outcome and returns ``(False, None)``.
        An unknown email raises the repository's not-found error; transports
        should render both cases identically to avoid account enumeration.
        The not-found path still runs one bcrypt verification so both cases
        cost the same.

        Args:
            email: Login email (will be normalized)
            password: Plaintext password

        Returns:
            ``(True, user)`` on match, ``(False, None)`` on mismatch

        Raises:
            UserNotFound: No account for this email
            QueryError: Any other repository failure
        """
        try:
            user = self.repository.find_by_email(self._normalize_email(email))
        except NotFoundError:
            self.hasher.verify(self._timing_hash, password)
            logger.debug("Credential check for unknown email")
            raise

        if not self.hasher.verify(user.password, password):
            logger.debug("Credential check failed for user %s", user.id)
            return False, None
        return True, user

    def store_user(self, user: User) -> UUID:
        """
        Validate, hash and persist a new user.

        The caller's object is left untouched; the repository receives a
        completed copy with a fresh identifier, the normalized email and the
        password replaced by its hash.

        Args:
            user: Candidate user carrying a plaintext password

        Returns:
            Identifier of the stored user

        Raises:
            InvalidEmail: Email shape or length rejected
            InvalidPassword: Password length rejected
            QueryError: Repository failure, including a lost uniqueness race
        """
        email = self._normalize_email(user.email)
        if not self.validate_email(email):
            raise InvalidEmail(email)
        if not self.validate_password(user.password):
            raise InvalidPassword(
                f"password must be {PASSWORD_MIN_LENGTH}-{PASSWORD_MAX_LENGTH} characters"
            )

        record = replace(
            user,
            id=self.new_id(),
            email=email,
            password=self.hasher.hash(user.password),
        )
        user_id = self.repository.store(record)
        logger.info("Stored user %s", user_id)
        return user_id

    def register(self, user: User) -> UUID:
        """
        Register a new account, rejecting emails that are already taken.

        Raises:
            EmailAlreadyRegistered: An account exists for the normalized email
            InvalidEmail: Email shape or length rejected
            InvalidPassword: Password length rejected
            QueryError: Repository failure
        """
        if self.is_duplicate_registration(user.email):
            logger.info("Rejected duplicate registration")
            raise EmailAlreadyRegistered(self._normalize_email(user.email))
        return self.store_user(user)

    def _normalize_email(self, email: str) -> str:
        """
        Normalize email address for consistent storage and lookup.

        Applies: strip whitespace + lowercase
        """
        return email.strip().lower()

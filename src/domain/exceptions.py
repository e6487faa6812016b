"""
Domain exceptions - Semantic error types for registration.

This module defines domain-specific exceptions that communicate
business rule violations without leaking infrastructure details.
Storage failures live in ``query_errors``.
"""


class RegistrationError(Exception):
    """Base class for registration domain errors."""

    pass


class ValidationError(RegistrationError):
    """Candidate credentials rejected before touching storage."""

    pass


class InvalidEmail(ValidationError):
    """Email does not have a valid local@domain shape or is too long."""

    pass


class InvalidPassword(ValidationError):
    """Password length is outside the accepted bounds."""

    pass


class EmailAlreadyRegistered(RegistrationError):
    """An account already exists for the normalized email."""

    pass

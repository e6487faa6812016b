"""
Dependency wiring - builds domain services from application settings.

This is the composition point callers (HTTP handlers, CLIs, workers) use
instead of constructing the service and its collaborators by hand.
"""

from psycopg_pool import ConnectionPool

from src.adapters.repository.postgres import PostgresUserRepository
from src.config.settings import Settings, get_settings
from src.domain.hashing import BcryptPasswordHasher
from src.domain.ports import UserRepository
from src.domain.registration import RegistrationService


def get_password_hasher(settings: Settings | None = None) -> BcryptPasswordHasher:
    """Create the bcrypt hasher with the configured work factor."""
    settings = settings or get_settings()
    return BcryptPasswordHasher(rounds=settings.bcrypt_cost)


def get_repository(pool: ConnectionPool) -> PostgresUserRepository:
    """Create repository over an existing connection pool."""
    return PostgresUserRepository(pool)


def get_registration_service(
    repository: UserRepository, settings: Settings | None = None
) -> RegistrationService:
    """
    Create registration service with injected dependencies.

    Wires together the repository and the configured password hasher.
    """
    return RegistrationService(repository=repository, hasher=get_password_hasher(settings))

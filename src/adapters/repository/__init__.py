"""Repository adapters - Database implementations."""

from .memory import InMemoryUserRepository
from .postgres import PostgresUserRepository, create_pool

__all__ = ["InMemoryUserRepository", "PostgresUserRepository", "create_pool"]

"""
Shared test fixtures and configuration.

This module provides pytest fixtures for:
- A fast bcrypt hasher (minimum work factor) for tests that hash
- An in-memory user repository
"""

import pytest

from src.adapters.repository.memory import InMemoryUserRepository
from src.domain.hashing import BcryptPasswordHasher


@pytest.fixture
def hasher() -> BcryptPasswordHasher:
    """bcrypt hasher at the minimum cost factor to keep tests quick."""
    return BcryptPasswordHasher(rounds=4)


@pytest.fixture
def memory_repository() -> InMemoryUserRepository:
    """Fresh in-memory repository for each test."""
    return InMemoryUserRepository()
